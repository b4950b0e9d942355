"""Configuration for Vault Sync."""

from vault_sync.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
