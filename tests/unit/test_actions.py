"""
Tests for the server-side form actions.
"""

from typing import Any

import pytest

from okit_boost.actions import ActionError, AdminRequired, AuthRequired
from okit_boost.actions.accounts import get_current_user, update_profile
from okit_boost.actions.admin import (
    get_admin_stats,
    require_admin,
    update_order_status,
    verify_payment,
)
from okit_boost.actions.catalog import get_platforms, get_services_by_platform
from okit_boost.actions.trials import submit_trial_request
from okit_boost.adapters.memory_backend import InMemoryAuth, InMemoryTables
from okit_boost.components.orders import AdminStats
from okit_boost.config.models import AppConfig
from okit_boost.context import ServiceContext
from okit_boost.ports.remote import RemoteServiceError


class OrdersDownTables(InMemoryTables):
    """Tables where only the orders table is unreachable."""

    def _check(self, table: str) -> None:
        if table == "orders":
            raise RemoteServiceError("orders unavailable")

    def select(self, table: str, **kwargs: Any):
        self._check(table)
        return super().select(table, **kwargs)

    def count(self, table: str, **kwargs: Any) -> int:
        self._check(table)
        return super().count(table, **kwargs)

    def update(self, table: str, values, **kwargs: Any):
        self._check(table)
        return super().update(table, values, **kwargs)


@pytest.fixture
def orders_down_ctx(config: AppConfig, auth: InMemoryAuth) -> ServiceContext:
    tables = OrdersDownTables({"profiles": [{"id": "u-admin", "role": "admin"}]})
    return ServiceContext.from_ports(config, tables, auth)


# --- Catalog ---


class TestCatalogActions:
    def test_get_platforms(self, ctx: ServiceContext) -> None:
        assert [p["id"] for p in get_platforms(ctx)] == ["instagram", "tiktok"]

    def test_get_services_by_platform(self, ctx: ServiceContext) -> None:
        assert len(get_services_by_platform(ctx, "tiktok")) == 2

    def test_failures_return_empty(self, failing_ctx: ServiceContext) -> None:
        assert get_platforms(failing_ctx) == []
        assert get_services_by_platform(failing_ctx, "tiktok") == []


# --- Trials ---


class TestSubmitTrialRequest:
    def test_success(self, ctx: ServiceContext, tables: InMemoryTables) -> None:
        result = submit_trial_request(ctx, {"name": "Awa", "email": "awa@example.com"})

        assert result == {"success": True}
        assert tables.count("trial_requests") == 1

    def test_failure(self, failing_ctx: ServiceContext) -> None:
        with pytest.raises(ActionError, match="Erreur lors de la soumission de la demande"):
            submit_trial_request(failing_ctx, {"name": "Awa"})


# --- Accounts ---


class TestAccountActions:
    def test_anonymous(self, ctx: ServiceContext) -> None:
        assert get_current_user(ctx, None) == (None, None)
        assert get_current_user(ctx, "bogus") == (None, None)

    def test_current_user_with_profile(self, ctx: ServiceContext) -> None:
        user, profile = get_current_user(ctx, "admin-token")

        assert user is not None and user.id == "u-admin"
        assert profile is not None and profile["role"] == "admin"

    def test_current_user_without_profile(self, ctx: ServiceContext) -> None:
        user, profile = get_current_user(ctx, "user-token")

        assert user is not None
        assert profile is None

    def test_current_user_backend_failure(self, failing_ctx: ServiceContext) -> None:
        assert get_current_user(failing_ctx, "user-token") == (None, None)

    def test_update_profile(self, ctx: ServiceContext, tables: InMemoryTables) -> None:
        result = update_profile(ctx, "admin-token", {"full_name": "Chef", "phone": "+243"})

        assert result == {"success": True}
        assert tables.select("profiles", filters={"id": "u-admin"})[0]["full_name"] == "Chef"

    def test_update_profile_requires_login(self, ctx: ServiceContext) -> None:
        with pytest.raises(AuthRequired) as exc_info:
            update_profile(ctx, None, {"full_name": "x"})

        assert exc_info.value.message == "Non authentifié"
        assert exc_info.value.redirect_to == "/connexion"

    def test_update_profile_backend_failure(self, failing_ctx: ServiceContext) -> None:
        with pytest.raises(ActionError) as exc_info:
            update_profile(failing_ctx, "user-token", {"full_name": "x"})

        assert not isinstance(exc_info.value, AuthRequired)
        assert exc_info.value.message == "connection refused"


# --- Admin ---


class TestAdminActions:
    def test_require_admin_anonymous(self, ctx: ServiceContext) -> None:
        with pytest.raises(AuthRequired) as exc_info:
            require_admin(ctx, None)

        assert not isinstance(exc_info.value, AdminRequired)
        assert exc_info.value.redirect_to == "/connexion"

    def test_require_admin_non_admin(self, ctx: ServiceContext) -> None:
        with pytest.raises(AdminRequired) as exc_info:
            require_admin(ctx, "user-token")

        assert exc_info.value.redirect_to == "/"

    def test_require_admin_backend_failure(self, failing_ctx: ServiceContext) -> None:
        with pytest.raises(AuthRequired):
            require_admin(failing_ctx, "admin-token")

    def test_require_admin_ok(self, ctx: ServiceContext) -> None:
        assert require_admin(ctx, "admin-token").id == "u-admin"

    def test_stats(self, ctx: ServiceContext) -> None:
        stats = get_admin_stats(ctx, "admin-token")

        assert stats.total_orders == 0
        assert stats.total_users == 0

    def test_stats_failure_returns_zeros(self, orders_down_ctx: ServiceContext) -> None:
        assert get_admin_stats(orders_down_ctx, "admin-token") == AdminStats()

    def test_stats_requires_admin(self, ctx: ServiceContext) -> None:
        with pytest.raises(AdminRequired):
            get_admin_stats(ctx, "user-token")

    def test_update_order_status(self, ctx: ServiceContext, tables: InMemoryTables) -> None:
        tables.insert("orders", {"id": "o1", "status": "pending"})

        assert update_order_status(ctx, "admin-token", "o1", "completed") == {"success": True}
        row = tables.select("orders", filters={"id": "o1"})[0]
        assert row["status"] == "completed"
        assert row["admin_notes"] == ""

    def test_update_order_status_failure(self, orders_down_ctx: ServiceContext) -> None:
        with pytest.raises(ActionError, match="Erreur lors de la mise à jour du statut"):
            update_order_status(orders_down_ctx, "admin-token", "o1", "completed")

    def test_verify_payment(self, ctx: ServiceContext, tables: InMemoryTables) -> None:
        tables.insert("orders", {"id": "o1", "status": "pending", "payment_status": "paid"})

        verify_payment(ctx, "admin-token", "o1")

        row = tables.select("orders", filters={"id": "o1"})[0]
        assert row["payment_status"] == "verified"
        assert row["status"] == "processing"

    def test_verify_payment_failure(self, orders_down_ctx: ServiceContext) -> None:
        with pytest.raises(ActionError, match="vérification du paiement"):
            verify_payment(orders_down_ctx, "admin-token", "o1")

    def test_verify_payment_requires_login(self, ctx: ServiceContext) -> None:
        with pytest.raises(AuthRequired):
            verify_payment(ctx, None, "o1")
