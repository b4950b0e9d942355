"""Storage backends for Vault Sync."""
