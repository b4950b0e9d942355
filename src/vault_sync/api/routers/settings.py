"""Settings API endpoints."""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from vault_sync.api.dependencies import SettingsServiceDep
from vault_sync.core.exceptions import ConfigurationError

router = APIRouter(prefix="/settings")


class SettingUpdate(BaseModel):
    """New value for one settings field."""

    value: str


@router.get("")
async def get_settings(service: SettingsServiceDep) -> dict[str, str]:
    """Return the settings with the access token masked."""
    return service.config.to_display()


@router.put("/{field}")
async def update_setting(
    field: str,
    update: SettingUpdate,
    service: SettingsServiceDep,
) -> dict[str, str]:
    """Set one field and persist the record."""
    try:
        config = await service.update(field, update.value)
    except ConfigurationError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    return config.to_display()
