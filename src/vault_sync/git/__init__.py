"""Git integration module for Vault Sync."""

from vault_sync.git.repository import GitRepository
from vault_sync.git.url_resolver import PushURLResolver

__all__ = ["GitRepository", "PushURLResolver"]
