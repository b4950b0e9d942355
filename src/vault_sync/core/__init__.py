"""Core domain models and errors for Vault Sync."""

from vault_sync.core.exceptions import (
    CommitError,
    ConfigurationError,
    GitCommandError,
    PushError,
    StagingError,
    SyncInProgressError,
    VaultSyncError,
)
from vault_sync.core.models import (
    FileState,
    Notice,
    StatusEntry,
    SyncConfig,
    SyncPhase,
    SyncResult,
)

__all__ = [
    # Models
    "SyncConfig",
    "FileState",
    "StatusEntry",
    "Notice",
    "SyncPhase",
    "SyncResult",
    # Exceptions
    "VaultSyncError",
    "ConfigurationError",
    "GitCommandError",
    "StagingError",
    "CommitError",
    "PushError",
    "SyncInProgressError",
]
