"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from vault_sync import __version__
from vault_sync.api.routers import health, settings, sync
from vault_sync.config import get_settings
from vault_sync.config.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load settings once and build the services."""
    from vault_sync.notifications.notifier import LogNotifier
    from vault_sync.repositories.settings.sqlite import SQLiteSettingsStore
    from vault_sync.services.settings import SettingsService
    from vault_sync.services.sync import SyncService

    app_settings = get_settings()
    configure_logging(
        log_level=app_settings.log_level,
        json_logs=app_settings.is_production,
    )

    store = SQLiteSettingsStore(db_path=app_settings.data_path)
    await store.initialize()
    settings_service = SettingsService(store=store, namespace=app_settings.settings_namespace)
    await settings_service.load()

    app.state.settings_service = settings_service
    app.state.sync_service = SyncService(settings=app_settings, notifier=LogNotifier())

    yield

    await store.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = get_settings()

    app = FastAPI(
        title="Vault Sync",
        description="Commit and push a notes vault to a git remote",
        version=__version__,
        docs_url="/docs" if app_settings.is_development else None,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(sync.router, prefix="/api/v1", tags=["Sync"])
    app.include_router(settings.router, prefix="/api/v1", tags=["Settings"])

    return app


# Create default app instance
app = create_app()


def run() -> None:
    """Run the application with uvicorn."""
    import uvicorn

    app_settings = get_settings()
    uvicorn.run(
        "vault_sync.api.main:app",
        host=app_settings.api_host,
        port=app_settings.api_port,
    )
