"""HTTP API for Vault Sync."""
