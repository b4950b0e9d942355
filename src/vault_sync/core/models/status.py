"""Working-tree status entries reported by git."""

from enum import Enum

from pydantic import BaseModel


class FileState(str, Enum):
    """One column of a porcelain status code."""

    UNMODIFIED = " "
    MODIFIED = "M"
    TYPE_CHANGED = "T"
    ADDED = "A"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    UNMERGED = "U"
    UNTRACKED = "?"
    IGNORED = "!"


class StatusEntry(BaseModel):
    """A changed path under a watched subdirectory.

    `path` is relative to the working tree root, using forward slashes.
    """

    path: str
    index_state: FileState
    worktree_state: FileState

    def contains(self, token: str) -> bool:
        return token in self.path
