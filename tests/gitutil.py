"""Git helpers for building test repositories."""

import subprocess
from pathlib import Path


def git(repo_path: Path, *args: str) -> str:
    """Run a git command in `repo_path` and return stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo_path,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def init_repo(repo_path: Path, bare: bool = False) -> None:
    """Create an empty repository on branch main with a test identity."""
    repo_path.mkdir(parents=True, exist_ok=True)
    git(repo_path, "init", *(["--bare"] if bare else []))
    git(repo_path, "symbolic-ref", "HEAD", "refs/heads/main")
    if not bare:
        git(repo_path, "config", "user.email", "test@test.com")
        git(repo_path, "config", "user.name", "Test")
        git(repo_path, "config", "commit.gpgsign", "false")


def tree_files(repo_path: Path, rev: str = "HEAD") -> list[str]:
    """All file paths in a commit's tree."""
    return git(repo_path, "ls-tree", "-r", "--name-only", rev).splitlines()


def index_files(repo_path: Path) -> list[str]:
    """All file paths currently in the index."""
    return git(repo_path, "ls-files").splitlines()
