"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="VAULT_SYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # General
    environment: str = "development"
    log_level: str = "INFO"

    # Vault root; the configured working directory is resolved against it
    vault_path: str = "."

    # Settings store
    data_path: str = "~/.vault-sync/data.db"
    settings_namespace: str = "vault-sync"

    # Sync flow
    sync_branch: str = "main"
    sync_directories: list[str] = ["public", "content"]
    ignored_name_token: str = ".DS_Store"
    error_notice_duration_ms: int = 10000
    # Matches the JavaScript Date.toString() layout
    commit_timestamp_format: str = "%a %b %d %Y %H:%M:%S GMT%z (%Z)"

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8765

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.data_path = str(Path(self.data_path).expanduser())
        self.vault_path = str(Path(self.vault_path).expanduser())

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
