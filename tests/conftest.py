from collections.abc import Callable
from typing import Any

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from okit_boost.adapters.cart_storage import InMemoryKeyValueStorage
from okit_boost.adapters.memory_backend import InMemoryAuth, InMemoryTables
from okit_boost.api.deps import get_config, get_context
from okit_boost.config.models import AppConfig, RemoteConfig
from okit_boost.context import ServiceContext
from okit_boost.domain.entities import AuthUser
from okit_boost.ports.remote import RemoteServiceError

USER_TOKEN = "user-token"
ADMIN_TOKEN = "admin-token"


class FailingTables(InMemoryTables):
    """Remote tables whose every call fails, as when the service is down."""

    def _fail(self, *args: Any, **kwargs: Any) -> Any:
        raise RemoteServiceError("connection refused", code="503", status_code=503)

    select = _fail
    insert = _fail
    update = _fail
    delete = _fail
    count = _fail


def seed_rows() -> dict[str, list[dict[str, Any]]]:
    return {
        "platforms": [
            {
                "id": "tiktok",
                "name": "TikTok",
                "is_active": True,
                "created_at": "2025-01-01T00:00:00",
            },
            {
                "id": "instagram",
                "name": "Instagram",
                "is_active": True,
                "created_at": "2025-01-02T00:00:00",
            },
            {
                "id": "youtube",
                "name": "YouTube",
                "is_active": False,
                "created_at": "2025-01-03T00:00:00",
            },
        ],
        "services": [
            {
                "id": "tt-followers",
                "platform_id": "tiktok",
                "name": "Followers",
                "category": "followers",
                "price_usd": 5,
                "price_cdf": 12500,
                "is_active": True,
                "created_at": "2025-02-01T00:00:00",
            },
            {
                "id": "tt-likes",
                "platform_id": "tiktok",
                "name": "Likes",
                "category": "likes",
                "price_usd": 2,
                "price_cdf": 5000,
                "is_active": True,
                "created_at": "2025-02-02T00:00:00",
            },
            {
                "id": "tt-views",
                "platform_id": "tiktok",
                "name": "Views",
                "category": "views",
                "price_usd": 1,
                "price_cdf": 2500,
                "is_active": False,
                "created_at": "2025-02-03T00:00:00",
            },
            {
                "id": "yt-subs",
                "platform_id": "youtube",
                "name": "Subscribers",
                "category": "subscribers",
                "price_usd": 9,
                "price_cdf": 25000,
                "is_active": True,
                "created_at": "2025-02-04T00:00:00",
            },
        ],
        "profiles": [
            {"id": "u-admin", "email": "admin@example.com", "role": "admin"},
        ],
    }


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(remote=RemoteConfig(backend="memory"))


@pytest.fixture
def tables() -> InMemoryTables:
    return InMemoryTables(seed_rows())


@pytest.fixture
def user() -> AuthUser:
    return AuthUser(id="u-1", email="awa@example.com", user_metadata={"full_name": "Awa M."})


@pytest.fixture
def admin() -> AuthUser:
    return AuthUser(id="u-admin", email="admin@example.com")


@pytest.fixture
def auth(user: AuthUser, admin: AuthUser) -> InMemoryAuth:
    auth = InMemoryAuth()
    auth.register_token(USER_TOKEN, user)
    auth.register_token(ADMIN_TOKEN, admin)
    return auth


@pytest.fixture
def ctx(config: AppConfig, tables: InMemoryTables, auth: InMemoryAuth) -> ServiceContext:
    return ServiceContext.from_ports(config, tables, auth)


@pytest.fixture
def failing_ctx(config: AppConfig, auth: InMemoryAuth) -> ServiceContext:
    return ServiceContext.from_ports(config, FailingTables(), auth)


@pytest.fixture
def make_client(config: AppConfig) -> Callable[..., TestClient]:
    """Build a TestClient for one router mounted at `prefix`, bound to a context."""

    def _make(router: APIRouter, ctx: ServiceContext, prefix: str = "") -> TestClient:
        app = FastAPI()
        app.include_router(router, prefix=prefix)
        app.dependency_overrides[get_config] = lambda: config
        app.dependency_overrides[get_context] = lambda: ctx
        return TestClient(app)

    return _make


@pytest.fixture
def storage() -> InMemoryKeyValueStorage:
    return InMemoryKeyValueStorage()
