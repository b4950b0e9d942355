"""Settings service: load once, save once per field edit."""

import structlog

from vault_sync.core.exceptions import ConfigurationError
from vault_sync.core.models.config import SyncConfig
from vault_sync.repositories.settings.sqlite import SQLiteSettingsStore

logger = structlog.get_logger(__name__)


class SettingsService:
    """Holds the in-memory SyncConfig and persists it to the store."""

    def __init__(self, store: SQLiteSettingsStore, namespace: str) -> None:
        self._store = store
        self._namespace = namespace
        self._config = SyncConfig()

    @property
    def config(self) -> SyncConfig:
        return self._config

    async def load(self) -> SyncConfig:
        """Load stored values over the defaults."""
        stored = await self._store.load(self._namespace) or {}
        self._config = SyncConfig(**{**SyncConfig().to_storage(), **stored})
        logger.info("Loaded settings", namespace=self._namespace, fields=sorted(stored))
        return self._config

    async def save(self, config: SyncConfig | None = None) -> None:
        if config is not None:
            self._config = config
        await self._store.save(self._namespace, self._config.to_storage())

    async def update(self, field: str, value: str) -> SyncConfig:
        """Set one field and persist the whole record."""
        if field not in SyncConfig.field_names():
            raise ConfigurationError(
                f"Unknown setting: {field}",
                details={"field": field, "allowed": SyncConfig.field_names()},
            )
        setattr(self._config, field, value)
        await self.save()
        logger.info("Updated setting", field=field)
        return self._config
