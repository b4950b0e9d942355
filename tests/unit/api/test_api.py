"""Tests for the HTTP API."""

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from vault_sync.api.dependencies import get_settings_service, get_sync_service
from vault_sync.api.main import create_app
from vault_sync.config.settings import Settings
from vault_sync.core.models.config import SyncConfig
from vault_sync.core.models.sync import SyncPhase
from vault_sync.git.repository import GitRepository
from vault_sync.services.settings import SettingsService
from vault_sync.services.sync import SyncService

from gitutil import tree_files


class MemoryStore:
    """In-memory stand-in for the SQLite settings store."""

    def __init__(self) -> None:
        self.records: dict[str, dict[str, Any]] = {}

    async def load(self, namespace: str) -> dict[str, Any] | None:
        return self.records.get(namespace)

    async def save(self, namespace: str, data: dict[str, Any]) -> None:
        self.records[namespace] = dict(data)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def sync_service(settings: Settings, notifier) -> SyncService:
    return SyncService(settings=settings, notifier=notifier)


@pytest.fixture
async def client(sync_service: SyncService, sync_config: SyncConfig, store: MemoryStore) -> TestClient:
    store.records["vault-sync"] = sync_config.to_storage()
    settings_service = SettingsService(store=store, namespace="vault-sync")
    await settings_service.load()

    app = create_app()
    app.dependency_overrides[get_settings_service] = lambda: settings_service
    app.dependency_overrides[get_sync_service] = lambda: sync_service
    return TestClient(app)


@pytest.mark.unit
class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


@pytest.mark.unit
class TestSyncEndpoints:
    """Tests for the sync trigger endpoints."""

    def test_status_idle(self, client: TestClient) -> None:
        response = client.get("/api/v1/sync/status")
        assert response.status_code == 200
        assert response.json() == {"phase": "idle", "running": False}

    def test_trigger_sync(
        self, client: TestClient, working_tree: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(GitRepository, "push", AsyncMock(return_value=None))
        (working_tree / "public" / "feed.xml").write_text("<rss/>\n")

        response = client.post("/api/v1/sync")

        assert response.status_code == 200
        body = response.json()
        assert body["phase"] == "done"
        assert body["staged"] == ["public/feed.xml"]
        assert body["error"] is None
        assert body["notices"][-1]["message"] == "Vault Sync: Pushed to 127.0.0.1:9/octocat/blog"
        assert "public/feed.xml" in tree_files(working_tree)

        status = client.get("/api/v1/sync/status").json()
        assert status == {"phase": SyncPhase.DONE.value, "running": False}

    def test_trigger_sync_failure_in_body(self, client: TestClient, working_tree: Path) -> None:
        response = client.post("/api/v1/sync")

        assert response.status_code == 200
        body = response.json()
        assert body["phase"] == "failed"
        assert body["failed_step"] == "committing"
        assert "nothing to commit" in body["error"]
        assert body["notices"][-1]["duration_ms"] == 10000

    def test_overlapping_sync_conflict(self, client: TestClient, sync_service: SyncService) -> None:
        sync_service._running = True
        response = client.post("/api/v1/sync")
        assert response.status_code == 409
        assert "current sync" in response.json()["detail"]


@pytest.mark.unit
class TestSettingsEndpoints:
    """Tests for the settings endpoints."""

    def test_get_settings_masks_token(self, client: TestClient) -> None:
        response = client.get("/api/v1/settings")
        assert response.status_code == 200
        body = response.json()
        assert body["repository_url"] == "127.0.0.1:9/octocat/blog"
        assert body["access_token"] == "********"

    def test_update_setting(self, client: TestClient, store: MemoryStore) -> None:
        response = client.put("/api/v1/settings/author_name", json={"value": "Octo Cat"})
        assert response.status_code == 200
        assert response.json()["author_name"] == "Octo Cat"
        assert store.records["vault-sync"]["author_name"] == "Octo Cat"
        assert store.records["vault-sync"]["access_token"] == "ghp_testtoken"

    def test_update_unknown_setting(self, client: TestClient) -> None:
        response = client.put("/api/v1/settings/password", json={"value": "x"})
        assert response.status_code == 404
