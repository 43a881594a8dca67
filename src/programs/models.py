"""Guided program models — pure data, no I/O."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field, model_validator


class ProgramStatus(StrEnum):
    """Lifecycle of a user's run through a guided program."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class GuidedProgram(BaseModel):
    """A named, ordered sequence of prompts answered one per session."""

    id: str
    name: str
    description: str = ""
    prompts: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _require_prompts(self) -> GuidedProgram:
        if not self.prompts:
            raise ValueError(f"program {self.id!r} has no prompts")
        return self

    @property
    def duration(self) -> int:
        """Number of days (one prompt per day)."""
        return len(self.prompts)


class ProgramEntry(BaseModel):
    """A saved response to one prompt slot of a guided program."""

    user_id: str
    program_id: str
    prompt_index: int
    content: str = ""
    word_count: int = 0
    completed_at: datetime | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def key(self) -> tuple[str, str, int]:
        """Canonical key: ``(user_id, program_id, prompt_index)``."""
        return (self.user_id, self.program_id, self.prompt_index)


class ProgramProgress(BaseModel):
    """Day pointer for one (user, program) pair.

    ``current_day`` is 1-based while in progress, 0 before the program
    is started, and clamped to the program length once completed.
    """

    user_id: str
    program_id: str
    status: ProgramStatus = ProgramStatus.NOT_STARTED
    current_day: int = 0
    started_at: datetime | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.user_id, self.program_id)
