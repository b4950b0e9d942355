"""Health check endpoint."""

from fastapi import APIRouter

from vault_sync import __version__

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}
