"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from vault_sync.config.settings import Settings, get_settings
from vault_sync.core.models.config import SyncConfig
from vault_sync.core.models.sync import Notice

from gitutil import git, init_repo


class NoticeCollector:
    """Notifier that keeps every notice for assertions."""

    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)

    @property
    def messages(self) -> list[str]:
        return [notice.message for notice in self.notices]


@pytest.fixture
def vault_path(tmp_path: Path) -> Path:
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def working_tree(vault_path: Path) -> Path:
    """A blog checkout inside the vault with one initial commit."""
    repo_path = vault_path / "blog"
    init_repo(repo_path)

    (repo_path / "public").mkdir()
    (repo_path / "public" / "index.html").write_text("<h1>Blog</h1>\n")
    (repo_path / "content").mkdir()
    (repo_path / "content" / "first-post.md").write_text("# First post\n")
    (repo_path / "README.md").write_text("# Blog\n")

    git(repo_path, "add", ".")
    git(repo_path, "commit", "-m", "Initial commit")
    return repo_path


@pytest.fixture
def settings(tmp_path: Path, vault_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        vault_path=str(vault_path),
        data_path=str(tmp_path / "data" / "vault-sync.db"),
    )


@pytest.fixture
def sync_config() -> SyncConfig:
    # Port 9 on loopback refuses connections, so a real push fails fast
    return SyncConfig(
        username="octocat",
        repository_url="127.0.0.1:9/octocat/blog",
        access_token="ghp_testtoken",
        working_directory="blog",
        author_name="Vault Bot",
        author_email="bot@example.com",
    )


@pytest.fixture
def notifier() -> NoticeCollector:
    return NoticeCollector()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
