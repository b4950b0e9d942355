"""Settings persistence."""

from vault_sync.repositories.settings.sqlite import SQLiteSettingsStore

__all__ = ["SQLiteSettingsStore"]
