"""Exception hierarchy for Vault Sync."""

from typing import Any


class VaultSyncError(Exception):
    """Base error carrying a message and structured details."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(VaultSyncError):
    """Invalid or unusable configuration."""


class GitCommandError(VaultSyncError):
    """A git child process exited with a non-zero status."""

    def __init__(self, args: list[str], returncode: int, stderr: str) -> None:
        command = " ".join(["git", *args])
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(
            f"{command}: {detail}",
            details={"args": list(args), "returncode": returncode},
        )
        self.returncode = returncode
        self.stderr = stderr


class StagingError(VaultSyncError):
    """Status computation or a per-path add/remove failed."""


class CommitError(VaultSyncError):
    """Nothing to commit, or the branch or author identity was rejected."""


class PushError(VaultSyncError):
    """The push failed: network, authentication or non-fast-forward."""


class SyncInProgressError(VaultSyncError):
    """A second sync was requested while one is still running."""
