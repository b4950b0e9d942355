"""Notification sinks for Vault Sync."""

from vault_sync.notifications.notifier import ConsoleNotifier, LogNotifier, Notifier

__all__ = ["Notifier", "ConsoleNotifier", "LogNotifier"]
