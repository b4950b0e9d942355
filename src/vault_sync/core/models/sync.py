"""Sync invocation models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SyncPhase(str, Enum):
    """Progress of a sync invocation."""

    IDLE = "idle"
    STAGING = "staging"
    COMMITTING = "committing"
    PUSHING = "pushing"
    DONE = "done"
    FAILED = "failed"


class Notice(BaseModel):
    """A transient notification shown to the user."""

    message: str
    duration_ms: int | None = None
    is_error: bool = False


class SyncResult(BaseModel):
    """Outcome of one sync invocation.

    `phase` is DONE on success; on failure it is FAILED and `failed_step`
    names the phase that raised.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    phase: SyncPhase
    repository: str = ""
    commit: str | None = None
    staged: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    failed_step: SyncPhase | None = None
    error: Exception | None = Field(default=None, exclude=True)
    notices: list[Notice] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.phase == SyncPhase.DONE

    @property
    def error_message(self) -> str | None:
        return str(self.error) if self.error is not None else None
