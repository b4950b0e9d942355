"""Sync service: stage, commit and push the vault."""

import asyncio
import socket
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import structlog

from vault_sync.config.settings import Settings
from vault_sync.core.exceptions import (
    CommitError,
    GitCommandError,
    PushError,
    StagingError,
    SyncInProgressError,
    VaultSyncError,
)
from vault_sync.core.models.config import SyncConfig
from vault_sync.core.models.sync import Notice, SyncPhase, SyncResult
from vault_sync.git.repository import GitRepository
from vault_sync.git.url_resolver import PushURLResolver
from vault_sync.notifications.notifier import Notifier

logger = structlog.get_logger(__name__)

START_MESSAGE = "Will push to repository"
FAILURE_PREFIXES = {
    SyncPhase.STAGING: "Couldn't add updated files.",
    SyncPhase.COMMITTING: "Couldn't commit changes to the branch.",
    SyncPhase.PUSHING: "Couldn't push changes to the repository.",
}
OVERLAP_PREFIX = "A sync is already running."


def _local_now() -> datetime:
    return datetime.now().astimezone()


class SyncService:
    """Runs the stage -> commit -> push flow for one working tree.

    Each step's failure is reported through the notifier and ends the
    invocation; nothing is retried or rolled back. A second invocation
    while one is in flight is rejected.
    """

    def __init__(
        self,
        settings: Settings,
        notifier: Notifier,
        hostname: Callable[[], str] = socket.gethostname,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self._settings = settings
        self._notifier = notifier
        self._hostname = hostname
        self._clock = clock
        self._phase = SyncPhase.IDLE
        self._running = False

    @property
    def phase(self) -> SyncPhase:
        return self._phase

    @property
    def is_running(self) -> bool:
        return self._running

    def working_tree(self, config: SyncConfig) -> Path:
        return Path(self._settings.vault_path) / config.working_directory

    def commit_message(self) -> str:
        timestamp = self._clock().strftime(self._settings.commit_timestamp_format)
        return f"{self._hostname()} {timestamp}"

    async def sync(self, config: SyncConfig) -> SyncResult:
        """Run one sync and return its result. Never raises step errors."""
        if self._running:
            result = SyncResult(phase=SyncPhase.FAILED, repository=config.repository_url)
            error = SyncInProgressError(
                "Wait for the current sync to finish",
                details={"phase": self._phase.value},
            )
            return self._fail(result, self._phase, error, OVERLAP_PREFIX)

        self._running = True
        try:
            return await self._run(config)
        finally:
            self._running = False

    async def _run(self, config: SyncConfig) -> SyncResult:
        result = SyncResult(phase=SyncPhase.IDLE, repository=config.repository_url)
        self._notify(result, Notice(message=START_MESSAGE))
        repo = GitRepository(self.working_tree(config))
        branch = self._settings.sync_branch

        log = logger.bind(working_tree=str(repo.path), branch=branch)
        log.info("Sync started")

        self._enter(result, SyncPhase.STAGING)
        try:
            await self._stage_changes(repo, result)
        except StagingError as e:
            return self._fail(result, SyncPhase.STAGING, e)

        self._enter(result, SyncPhase.COMMITTING)
        try:
            result.commit = await self._commit(repo, config, branch)
        except CommitError as e:
            return self._fail(result, SyncPhase.COMMITTING, e)

        self._enter(result, SyncPhase.PUSHING)
        try:
            await self._push(repo, config, branch)
        except PushError as e:
            return self._fail(result, SyncPhase.PUSHING, e)

        self._enter(result, SyncPhase.DONE)
        self._notify(result, Notice(message=f"Vault Sync: Pushed to {config.repository_url}"))
        log.info(
            "Sync finished",
            commit=result.commit[:8] if result.commit else None,
            staged=len(result.staged),
            removed=len(result.removed),
        )
        return result

    async def _stage_changes(self, repo: GitRepository, result: SyncResult) -> None:
        """Stage or unstage every changed path under the watched directories.

        Operations within one directory are launched together and awaited
        as a group; the first failure aborts the step.
        """
        token = self._settings.ignored_name_token
        try:
            if not await repo.is_repository_root():
                raise StagingError(
                    f"Not the top level of a git checkout: {repo.path}",
                    details={"working_tree": str(repo.path)},
                )
            for directory in self._settings.sync_directories:
                entries = await repo.status(directory)
                operations = []
                for entry in entries:
                    if token and entry.contains(token):
                        result.skipped.append(entry.path)
                        continue
                    if repo.exists_in_worktree(entry.path):
                        result.staged.append(entry.path)
                        operations.append(repo.add(entry.path))
                    else:
                        result.removed.append(entry.path)
                        operations.append(repo.remove(entry.path))
                logger.debug("Staging directory", directory=directory, operations=len(operations))
                await asyncio.gather(*operations)
        except StagingError:
            raise
        except Exception as e:
            raise StagingError(str(e), details={"working_tree": str(repo.path)}) from e

    async def _commit(self, repo: GitRepository, config: SyncConfig, branch: str) -> str:
        """Commit the index on `branch`, or reuse a commit still waiting to be pushed."""
        try:
            current = await repo.current_branch()
            if current != branch:
                raise CommitError(
                    f"HEAD is on {current or 'a detached commit'}, expected branch {branch}",
                    details={"branch": branch, "current": current},
                )

            if not await repo.has_staged_changes():
                if await repo.has_unpushed(branch):
                    commit = await repo.head_commit()
                    if commit is None:
                        raise CommitError("pending commit marker is set but HEAD does not resolve")
                    logger.info("Nothing new to commit, pushing pending commit", commit=commit[:8])
                    return commit
                raise CommitError("nothing to commit, working tree clean")

            commit = await repo.commit(self.commit_message(), config.author_name, config.author_email)
        except CommitError:
            raise
        except Exception as e:
            raise CommitError(str(e), details={"branch": branch}) from e

        # The commit exists from here on; a missing marker only loses the retry
        try:
            await repo.mark_unpushed(branch, commit)
        except GitCommandError as e:
            logger.warning("Could not record unpushed commit", commit=commit[:8], error=str(e))
        return commit

    async def _push(self, repo: GitRepository, config: SyncConfig, branch: str) -> None:
        try:
            url = PushURLResolver(config.repository_url).resolve()
            await repo.push(url, branch, config.access_token.get_secret_value())
        except Exception as e:
            raise PushError(str(e), details={"branch": branch}) from e

        try:
            await repo.clear_unpushed(branch)
        except GitCommandError as e:
            logger.warning("Could not clear unpushed marker", branch=branch, error=str(e))

    def _enter(self, result: SyncResult, phase: SyncPhase) -> None:
        self._phase = phase
        result.phase = phase

    def _fail(
        self,
        result: SyncResult,
        step: SyncPhase,
        error: VaultSyncError,
        prefix: str | None = None,
    ) -> SyncResult:
        if not isinstance(error, SyncInProgressError):
            self._phase = SyncPhase.FAILED
        result.phase = SyncPhase.FAILED
        result.failed_step = step
        result.error = error
        message = f"{prefix or FAILURE_PREFIXES[step]} Problem: {error}"
        self._notify(
            result,
            Notice(
                message=message,
                duration_ms=self._settings.error_notice_duration_ms,
                is_error=True,
            ),
        )
        logger.warning("Sync failed", step=step.value, error=str(error))
        return result

    def _notify(self, result: SyncResult, notice: Notice) -> None:
        result.notices.append(notice)
        self._notifier.notify(notice)
