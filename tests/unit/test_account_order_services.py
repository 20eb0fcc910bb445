"""
Unit tests for AccountService and OrderAdminService.
"""

import pytest

from okit_boost.adapters.memory_backend import InMemoryAuth, InMemoryTables
from okit_boost.components.accounts import AccountService
from okit_boost.components.orders import AdminStats, OrderAdminService
from okit_boost.domain.entities import AuthUser
from okit_boost.domain.errors import InvalidRequest
from okit_boost.ports.remote import AuthExchangeError, RowNotFoundError


@pytest.fixture
def accounts(tables: InMemoryTables, auth: InMemoryAuth) -> AccountService:
    return AccountService(tables, auth)


# --- Accounts ---


class TestAccountService:
    def test_resolve_user(self, accounts: AccountService, user: AuthUser) -> None:
        assert accounts.resolve_user("user-token") == user
        assert accounts.resolve_user("bogus") is None
        assert accounts.resolve_user(None) is None
        assert accounts.resolve_user("") is None

    def test_exchange_code(
        self, accounts: AccountService, auth: InMemoryAuth, user: AuthUser
    ) -> None:
        auth.register_code("abc", user)

        session = accounts.exchange_code("abc")

        assert session.user == user
        with pytest.raises(AuthExchangeError):
            accounts.exchange_code("abc")

    def test_profile_created_on_first_access(
        self, accounts: AccountService, tables: InMemoryTables, user: AuthUser
    ) -> None:
        profile = accounts.get_or_create_profile(user)

        assert profile["id"] == "u-1"
        assert profile["full_name"] == "Awa M."
        assert profile["role"] == "user"
        assert tables.count("profiles", filters={"id": "u-1"}) == 1

        again = accounts.get_or_create_profile(user)
        assert again["id"] == "u-1"
        assert tables.count("profiles", filters={"id": "u-1"}) == 1

    def test_profile_name_falls_back_to_email(self, accounts: AccountService) -> None:
        profile = accounts.get_or_create_profile(AuthUser(id="u-9", email="kabila@example.cd"))

        assert profile["full_name"] == "kabila"

    def test_update_profile(self, accounts: AccountService, user: AuthUser) -> None:
        accounts.get_or_create_profile(user)

        updated = accounts.update_profile("u-1", "Awa Mbuyi", "+243811111111")

        assert updated["full_name"] == "Awa Mbuyi"
        assert updated["phone"] == "+243811111111"
        assert updated["updated_at"]

    def test_update_missing_profile(self, accounts: AccountService) -> None:
        with pytest.raises(RowNotFoundError):
            accounts.update_profile("ghost", "x", None)

    def test_is_admin(self, accounts: AccountService, user: AuthUser) -> None:
        accounts.get_or_create_profile(user)

        assert accounts.is_admin("u-admin") is True
        assert accounts.is_admin("u-1") is False
        assert accounts.is_admin("ghost") is False


# --- Orders ---


@pytest.fixture
def order_tables() -> InMemoryTables:
    return InMemoryTables(
        {
            "orders": [
                {
                    "id": f"o{i}",
                    "status": status,
                    "total_cdf": 25000,
                    "total_usd": 10,
                    "created_at": f"2025-04-{i + 1:02d}",
                }
                for i, status in enumerate(
                    ["completed", "pending", "completed", "pending", "processing"] + ["pending"] * 7
                )
            ],
            "profiles": [
                {"id": "a", "role": "admin"},
                {"id": "b", "role": "user"},
                {"id": "c", "role": "user"},
            ],
        }
    )


class TestOrderAdminService:
    def test_stats(self, order_tables: InMemoryTables) -> None:
        stats = OrderAdminService(order_tables).get_stats()

        assert stats.total_orders == 12
        assert stats.pending_orders == 9
        assert stats.total_users == 2
        assert stats.total_revenue_cdf == 50000
        assert stats.total_revenue_usd == 20
        assert len(stats.recent_orders) == 10
        assert stats.recent_orders[0]["id"] == "o11"

    def test_empty_stats_defaults(self) -> None:
        stats = OrderAdminService(InMemoryTables()).get_stats()

        assert stats == AdminStats()

    def test_update_status(self, order_tables: InMemoryTables) -> None:
        OrderAdminService(order_tables).update_status("o1", "completed", "livré")

        row = order_tables.select("orders", filters={"id": "o1"})[0]
        assert row["status"] == "completed"
        assert row["admin_notes"] == "livré"
        assert row["updated_at"]

    def test_verify_payment(self, order_tables: InMemoryTables) -> None:
        OrderAdminService(order_tables).verify_payment("o1")

        row = order_tables.select("orders", filters={"id": "o1"})[0]
        assert row["payment_status"] == "verified"
        assert row["status"] == "processing"

    def test_list_orders_pages(self, order_tables: InMemoryTables) -> None:
        page = OrderAdminService(order_tables).list_orders(page=2, limit=5)

        assert page.total == 12
        assert page.total_pages == 3
        assert [o["id"] for o in page.orders] == ["o6", "o5", "o4", "o3", "o2"]

    def test_list_orders_by_status(self, order_tables: InMemoryTables) -> None:
        page = OrderAdminService(order_tables).list_orders("completed")

        assert page.total == 2
        assert page.total_pages == 1
        assert [o["id"] for o in page.orders] == ["o2", "o0"]

    def test_list_orders_embeds_profile_and_items(self, order_tables: InMemoryTables) -> None:
        order_tables.update("orders", {"user_id": "b"}, filters={"id": "o11"})
        order_tables.update(
            "profiles", {"full_name": "Bea", "email": "bea@example.com"}, filters={"id": "b"}
        )
        order_tables.insert("services", {"id": "s1", "name": "Likes", "platform_id": "tiktok"})
        order_tables.insert("order_items", {"order_id": "o11", "service_id": "s1", "quantity": 5})

        newest = OrderAdminService(order_tables).list_orders(limit=2).orders

        assert newest[0]["profiles"] == {"full_name": "Bea", "email": "bea@example.com"}
        assert newest[0]["order_items"][0]["services"] == {"name": "Likes", "platform_id": "tiktok"}
        assert newest[1]["profiles"] is None
        assert newest[1]["order_items"] == []

    def test_list_orders_past_last_page(self, order_tables: InMemoryTables) -> None:
        page = OrderAdminService(order_tables).list_orders(page=9, limit=20)

        assert page.orders == []
        assert page.total == 12

    def test_set_status(self, order_tables: InMemoryTables) -> None:
        OrderAdminService(order_tables).set_status("o1", "refunded", "")

        row = order_tables.select("orders", filters={"id": "o1"})[0]
        assert row["status"] == "refunded"
        assert row["admin_notes"] is None

    @pytest.mark.parametrize(
        "order_id,status,message",
        [
            ("", "completed", "requis"),
            ("o1", "", "requis"),
            ("o1", "failed", "Statut invalide"),
            ("o1", "shipped", "Statut invalide"),
        ],
    )
    def test_set_status_rejects(
        self, order_tables: InMemoryTables, order_id: str, status: str, message: str
    ) -> None:
        with pytest.raises(InvalidRequest, match=message):
            OrderAdminService(order_tables).set_status(order_id, status)

        assert order_tables.select("orders", filters={"id": "o1"})[0]["status"] == "pending"

    def test_update_order(self, order_tables: InMemoryTables) -> None:
        row = OrderAdminService(order_tables).update_order("o3", {"payment_status": "paid"})

        assert row["id"] == "o3"
        assert row["payment_status"] == "paid"

    def test_update_missing_order(self, order_tables: InMemoryTables) -> None:
        with pytest.raises(RowNotFoundError):
            OrderAdminService(order_tables).update_order("ghost", {"status": "completed"})

    def test_delete_order_removes_items(self, order_tables: InMemoryTables) -> None:
        order_tables.insert("order_items", {"order_id": "o1", "service_id": "s1"})
        order_tables.insert("order_items", {"order_id": "o2", "service_id": "s1"})

        OrderAdminService(order_tables).delete_order("o1")

        assert order_tables.count("orders", filters={"id": "o1"}) == 0
        assert order_tables.count("order_items", filters={"order_id": "o1"}) == 0
        assert order_tables.count("order_items") == 1
