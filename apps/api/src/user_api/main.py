"""Main FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from user_api.config import Settings, get_settings
from user_api.middleware import setup_middleware
from user_api.routes import api_router
from user_common.services.user_store import InMemoryUserStore, UserStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Handle application lifespan events."""
    settings: Settings = app.state.settings
    logger.info(f"{settings.app_name} v{settings.app_version} started")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Users loaded: {len(app.state.user_store.list_users())}")

    yield

    logger.info(f"{settings.app_name} shutting down")


def create_app(settings: Settings | None = None, user_store: UserStore | None = None) -> FastAPI:
    """Build the application with its middleware chain and routes.

    Args:
        settings: Application settings, loaded from the environment if omitted
        user_store: Store backing the /users routes, a freshly seeded
            in-memory store if omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="User management - FastAPI backend service",
        version=settings.app_version,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.user_store = user_store if user_store is not None else InMemoryUserStore()

    setup_middleware(app, settings)
    app.include_router(api_router)
    return app


settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "user_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
