"""Business logic services for Vault Sync."""

from vault_sync.services.settings import SettingsService
from vault_sync.services.sync import SyncService

__all__ = [
    "SettingsService",
    "SyncService",
]
