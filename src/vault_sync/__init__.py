"""Vault Sync: push a notes vault to a git remote."""

__version__ = "0.1.0"
