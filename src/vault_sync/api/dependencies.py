"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from vault_sync.services.settings import SettingsService
from vault_sync.services.sync import SyncService


async def get_settings_service(request: Request) -> SettingsService:
    """Get the settings service from app state."""
    return request.app.state.settings_service


async def get_sync_service(request: Request) -> SyncService:
    """Get the sync service from app state."""
    return request.app.state.sync_service


# Type aliases for dependency injection
SettingsServiceDep = Annotated[SettingsService, Depends(get_settings_service)]
SyncServiceDep = Annotated[SyncService, Depends(get_sync_service)]
