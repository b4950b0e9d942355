"""Domain models for Vault Sync."""

from vault_sync.core.models.config import SyncConfig
from vault_sync.core.models.status import FileState, StatusEntry
from vault_sync.core.models.sync import Notice, SyncPhase, SyncResult

__all__ = [
    "SyncConfig",
    "FileState",
    "StatusEntry",
    "Notice",
    "SyncPhase",
    "SyncResult",
]
