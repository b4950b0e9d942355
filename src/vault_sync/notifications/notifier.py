"""Transient user-facing notifications."""

from typing import Protocol

import click
import structlog

from vault_sync.core.models.sync import Notice

logger = structlog.get_logger(__name__)


class Notifier(Protocol):
    """Shows short-lived messages to the user."""

    def notify(self, notice: Notice) -> None:
        ...


class ConsoleNotifier:
    """Prints notices to the terminal.

    Error notices go to stderr in red. The display duration has no
    meaning on a terminal and is only logged.
    """

    def notify(self, notice: Notice) -> None:
        logger.debug("Notice", message=notice.message, duration_ms=notice.duration_ms)
        if notice.is_error:
            click.secho(notice.message, fg="red", err=True)
        else:
            click.echo(notice.message)


class LogNotifier:
    """Writes notices to the log, for the HTTP server."""

    def notify(self, notice: Notice) -> None:
        if notice.is_error:
            logger.warning(notice.message, duration_ms=notice.duration_ms)
        else:
            logger.info(notice.message, duration_ms=notice.duration_ms)
