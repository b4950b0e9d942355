"""Sync trigger endpoints."""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from vault_sync.api.dependencies import SettingsServiceDep, SyncServiceDep
from vault_sync.core.exceptions import SyncInProgressError
from vault_sync.core.models.sync import Notice, SyncPhase, SyncResult

router = APIRouter(prefix="/sync")


class SyncResponse(BaseModel):
    """Result of a sync invocation."""

    phase: SyncPhase
    repository: str
    commit: str | None = None
    staged: list[str]
    removed: list[str]
    skipped: list[str]
    failed_step: SyncPhase | None = None
    error: str | None = None
    notices: list[Notice]

    @classmethod
    def from_result(cls, result: SyncResult) -> "SyncResponse":
        return cls(
            phase=result.phase,
            repository=result.repository,
            commit=result.commit,
            staged=result.staged,
            removed=result.removed,
            skipped=result.skipped,
            failed_step=result.failed_step,
            error=result.error_message,
            notices=result.notices,
        )


class SyncStatusResponse(BaseModel):
    """Current phase of the sync service."""

    phase: SyncPhase
    running: bool


@router.post("", response_model=SyncResponse)
async def trigger_sync(
    sync_service: SyncServiceDep,
    settings_service: SettingsServiceDep,
) -> SyncResponse:
    """Stage, commit and push the vault.

    Step failures are reported in the body; an overlapping request is
    rejected with 409.
    """
    result = await sync_service.sync(settings_service.config)
    if isinstance(result.error, SyncInProgressError):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=result.error_message,
        )
    return SyncResponse.from_result(result)


@router.get("/status", response_model=SyncStatusResponse)
async def sync_status(sync_service: SyncServiceDep) -> SyncStatusResponse:
    """Report the phase of the current or last sync."""
    return SyncStatusResponse(phase=sync_service.phase, running=sync_service.is_running)
