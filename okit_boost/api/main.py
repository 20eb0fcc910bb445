import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from okit_boost.api.deps import get_config, reset_context
from okit_boost.api.routes import (
    admin_orders,
    admin_platforms,
    admin_services,
    admin_trial_requests,
    auth,
    orders,
    services,
    trial_requests,
    user,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    config = get_config()
    logger.info(
        "Okit Boost API starting (backend=%s, site=%s)",
        config.remote.backend,
        config.site.base_url,
    )
    yield
    reset_context()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    config = get_config()

    app = FastAPI(
        title="Okit Boost API",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # --- Routers ---
    app.include_router(admin_services.router, prefix="/api/admin/services", tags=["Admin Services"])
    app.include_router(
        admin_platforms.router, prefix="/api/admin/platforms", tags=["Admin Platforms"]
    )
    app.include_router(
        admin_trial_requests.router,
        prefix="/api/admin/trial-requests",
        tags=["Admin Trial Requests"],
    )
    app.include_router(admin_orders.router, prefix="/api/admin/orders", tags=["Admin Orders"])
    app.include_router(services.router, prefix="/api/services", tags=["Services"])
    app.include_router(orders.router, prefix="/api/orders", tags=["Orders"])
    app.include_router(trial_requests.router, prefix="/api/trial-requests", tags=["Trials"])
    app.include_router(user.router, prefix="/api/user", tags=["User"])
    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(auth.callback_router, prefix="/auth", tags=["Auth"])

    # CORS (Allow Frontend)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.site.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "service": "api"}

    return app


app = create_app()
