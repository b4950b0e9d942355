"""Async git working-tree operations using the git CLI."""

import asyncio
import base64
import os
from pathlib import Path

import structlog

from vault_sync.core.exceptions import GitCommandError
from vault_sync.core.models.status import FileState, StatusEntry

logger = structlog.get_logger(__name__)

UNPUSHED_REF_PREFIX = "refs/vault-sync/unpushed"


class GitRepository:
    """Stages, commits and pushes in a local git checkout.

    Runs the git CLI as child processes on the event loop (no gitpython
    dependency). Index writes are serialized with a lock because git
    refuses a second writer while `index.lock` exists.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).resolve()
        self._index_lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def _run_git(
        self,
        *args: str,
        env: dict[str, str] | None = None,
        ok_codes: tuple[int, ...] = (0,),
        secrets: tuple[str, ...] = (),
    ) -> tuple[int, str]:
        """Run a git command and return (exit code, stdout).

        Raises GitCommandError for an exit code outside `ok_codes`. Every
        value in `secrets` is redacted from the reported arguments and
        error text.
        """
        process_env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
        if env:
            process_env.update(env)

        process = await asyncio.create_subprocess_exec(
            "git",
            *args,
            cwd=self._path,
            env=process_env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate()
        returncode = process.returncode if process.returncode is not None else -1
        if returncode not in ok_codes:
            error_text = stderr.decode("utf-8", errors="replace")
            raise GitCommandError(
                [_redact(arg, secrets) for arg in args],
                returncode,
                _redact(error_text, secrets),
            )
        return returncode, stdout.decode("utf-8", errors="replace")

    async def is_repository_root(self) -> bool:
        """Check that the path is the top level of its own git checkout.

        A plain folder nested inside another repository is not a root:
        status paths would be relative to the enclosing checkout.
        """
        if not self._path.is_dir():
            return False
        try:
            _, output = await self._run_git("rev-parse", "--show-toplevel")
        except GitCommandError:
            return False
        return Path(output.strip()).resolve() == self._path

    async def status(self, subdirectory: str) -> list[StatusEntry]:
        """List changed tracked and untracked files under a subdirectory.

        Paths are relative to the working tree root. Renames are reported
        as a deletion plus an addition.
        """
        _, output = await self._run_git(
            "status",
            "--porcelain=v1",
            "-z",
            "--no-renames",
            "--untracked-files=all",
            "--",
            subdirectory,
        )
        return self.parse_porcelain(output)

    @staticmethod
    def parse_porcelain(output: str) -> list[StatusEntry]:
        """Parse `git status --porcelain=v1 -z --no-renames` output."""
        entries = []
        for record in output.split("\0"):
            if len(record) < 4:
                continue
            entries.append(
                StatusEntry(
                    path=record[3:],
                    index_state=FileState(record[0]),
                    worktree_state=FileState(record[1]),
                )
            )
        return entries

    def exists_in_worktree(self, relative_path: str) -> bool:
        """True if the path is present in the working tree (symlinks included)."""
        return os.path.lexists(self._path / relative_path)

    async def add(self, relative_path: str) -> None:
        """Stage a working-tree file."""
        async with self._index_lock:
            await self._run_git("add", "--", relative_path)
        logger.debug("Staged path", path=relative_path)

    async def remove(self, relative_path: str) -> None:
        """Remove a path from the index, leaving the working tree alone."""
        async with self._index_lock:
            await self._run_git("rm", "--cached", "--quiet", "--ignore-unmatch", "--", relative_path)
        logger.debug("Removed path from index", path=relative_path)

    async def current_branch(self) -> str | None:
        """Name of the branch HEAD points at, or None when detached."""
        code, output = await self._run_git("symbolic-ref", "--quiet", "--short", "HEAD", ok_codes=(0, 1))
        return output.strip() if code == 0 else None

    async def head_commit(self) -> str | None:
        """The HEAD commit hash, or None on an unborn branch."""
        code, output = await self._run_git("rev-parse", "--verify", "--quiet", "HEAD", ok_codes=(0, 1))
        return output.strip() if code == 0 else None

    async def has_staged_changes(self) -> bool:
        """True if the index differs from HEAD (or HEAD is unborn and the index is not empty)."""
        code, _ = await self._run_git("diff", "--cached", "--quiet", ok_codes=(0, 1))
        return code == 1

    async def commit(self, message: str, author_name: str, author_email: str) -> str:
        """Commit the index on the current branch and return the new hash.

        The configured identity is used for both author and committer.
        """
        env = {
            "GIT_AUTHOR_NAME": author_name,
            "GIT_AUTHOR_EMAIL": author_email,
            "GIT_COMMITTER_NAME": author_name,
            "GIT_COMMITTER_EMAIL": author_email,
        }
        async with self._index_lock:
            await self._run_git("commit", "--quiet", "--no-verify", "-m", message, env=env)
        commit = await self.head_commit()
        if commit is None:
            raise GitCommandError(["rev-parse", "HEAD"], 1, "HEAD does not resolve after commit")
        logger.info("Created commit", commit=commit[:8])
        return commit

    async def push(self, url: str, branch: str, token: str) -> None:
        """Push a local branch to the same branch name at `url`.

        The token is sent as the basic-auth username with an empty
        password, passed through the environment so it never appears on
        the git command line.
        """
        env = {}
        secrets: tuple[str, ...] = ()
        if token:
            credentials = base64.b64encode(f"{token}:".encode()).decode("ascii")
            secrets = (token, credentials)
            env = {
                "GIT_CONFIG_COUNT": "1",
                "GIT_CONFIG_KEY_0": "http.extraHeader",
                "GIT_CONFIG_VALUE_0": f"Authorization: Basic {credentials}",
            }
        refspec = f"refs/heads/{branch}:refs/heads/{branch}"
        await self._run_git("push", url, refspec, env=env, secrets=secrets)
        logger.info("Pushed branch", url=url, branch=branch)

    async def mark_unpushed(self, branch: str, commit: str) -> None:
        """Record a commit that still has to be pushed."""
        await self._run_git("update-ref", f"{UNPUSHED_REF_PREFIX}/{branch}", commit)

    async def clear_unpushed(self, branch: str) -> None:
        await self._run_git("update-ref", "-d", f"{UNPUSHED_REF_PREFIX}/{branch}")

    async def has_unpushed(self, branch: str) -> bool:
        code, _ = await self._run_git(
            "show-ref", "--verify", "--quiet", f"{UNPUSHED_REF_PREFIX}/{branch}", ok_codes=(0, 1)
        )
        return code == 0


def _redact(text: str, secrets: tuple[str, ...]) -> str:
    for secret in secrets:
        if secret:
            text = text.replace(secret, "***")
    return text
