"""CLI for Vault Sync."""

import asyncio
import sys

import click
import structlog

from vault_sync.config.logging import configure_logging

logger = structlog.get_logger(__name__)


def run_async(coro):
    """Run an async function synchronously."""
    return asyncio.run(coro)


async def _create_settings_service(settings=None):
    """Create the settings service and load the stored record."""
    from vault_sync.config.settings import get_settings
    from vault_sync.repositories.settings.sqlite import SQLiteSettingsStore
    from vault_sync.services.settings import SettingsService

    if settings is None:
        settings = get_settings()

    store = SQLiteSettingsStore(db_path=settings.data_path)
    await store.initialize()
    service = SettingsService(store=store, namespace=settings.settings_namespace)
    await service.load()
    return service, store


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """Vault Sync: commit and push a notes vault to GitHub."""
    from vault_sync.config.settings import get_settings

    settings = get_settings()
    log_level = "DEBUG" if verbose else settings.log_level
    configure_logging(log_level=log_level, json_logs=settings.is_production)


@cli.command()
def push() -> None:
    """Stage, commit and push the vault to the configured repository."""

    async def _push():
        from vault_sync.config.settings import get_settings
        from vault_sync.notifications.notifier import ConsoleNotifier
        from vault_sync.services.sync import SyncService

        settings = get_settings()
        settings_service, store = await _create_settings_service(settings)
        try:
            service = SyncService(settings=settings, notifier=ConsoleNotifier())
            return await service.sync(settings_service.config)
        finally:
            await store.close()

    result = run_async(_push())
    if not result.ok:
        sys.exit(1)


@cli.group()
def settings() -> None:
    """Show or edit the stored sync settings."""


@settings.command("show")
def settings_show() -> None:
    """Show the stored settings (the access token is masked)."""

    async def _show():
        service, store = await _create_settings_service()
        try:
            return service.config.to_display()
        finally:
            await store.close()

    for field, value in run_async(_show()).items():
        click.echo(f"  {field:<18} {value}")


@settings.command("set")
@click.argument("field")
@click.argument("value")
def settings_set(field: str, value: str) -> None:
    """Set one settings FIELD to VALUE and save it."""
    from vault_sync.core.exceptions import ConfigurationError
    from vault_sync.core.models.config import MASK, SyncConfig

    if field not in SyncConfig.field_names():
        click.echo(
            f"Error: Unknown setting '{field}'. Choose from: {', '.join(SyncConfig.field_names())}",
            err=True,
        )
        sys.exit(1)

    async def _set():
        service, store = await _create_settings_service()
        try:
            await service.update(field, value)
        finally:
            await store.close()

    try:
        run_async(_set())
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    shown = MASK if field == "access_token" and value else value
    click.echo(f"Saved {field} = {shown}")


@cli.command()
def serve() -> None:
    """Serve the HTTP trigger and settings API."""
    from vault_sync.api.main import run

    run()


if __name__ == "__main__":
    cli()
