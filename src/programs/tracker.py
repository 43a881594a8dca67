"""Per-(user, program) day sequencing for guided programs.

State machine::

    NOT_STARTED --start--> IN_PROGRESS(day=1) --complete current--> ... --> COMPLETED

Day ``k`` points at prompt index ``k - 1``.  Saving a response never
moves the pointer; completing the prompt the pointer is on advances it
by one, and completing the final prompt finishes the program.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Protocol

from pagebound.entries.text import count_words
from pagebound.errors import PromptOutOfRangeError
from pagebound.programs.catalog import GUIDED_PROGRAMS
from pagebound.programs.models import (
    GuidedProgram,
    ProgramEntry,
    ProgramProgress,
    ProgramStatus,
)

logger = logging.getLogger(__name__)


class ProgramRepository(Protocol):
    """Persistence collaborator for program responses and progress."""

    def program_entries(self) -> dict[tuple[str, str, int], ProgramEntry]: ...

    def save_program_entry(self, entry: ProgramEntry) -> None: ...

    def progress_records(self) -> dict[tuple[str, str], ProgramProgress]: ...

    def save_progress(self, progress: ProgramProgress) -> None: ...


class InMemoryProgramRepository:
    def __init__(self) -> None:
        self._entries: dict[tuple[str, str, int], ProgramEntry] = {}
        self._progress: dict[tuple[str, str], ProgramProgress] = {}

    def program_entries(self) -> dict[tuple[str, str, int], ProgramEntry]:
        return dict(self._entries)

    def save_program_entry(self, entry: ProgramEntry) -> None:
        self._entries[entry.key] = entry

    def progress_records(self) -> dict[tuple[str, str], ProgramProgress]:
        return dict(self._progress)

    def save_progress(self, progress: ProgramProgress) -> None:
        self._progress[progress.key] = progress


class ProgramProgressTracker:
    """Day pointer and responses for every (user, program) pair.

    Operations on an unknown program id do nothing and return ``None``.
    """

    def __init__(
        self,
        repository: ProgramRepository | None = None,
        programs: Iterable[GuidedProgram] = GUIDED_PROGRAMS,
        *,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._repository: ProgramRepository = repository or InMemoryProgramRepository()
        self._programs = {p.id: p for p in programs}
        self._now = now or datetime.now

    # ── Reads ────────────────────────────────────────────────────

    def program(self, program_id: str) -> GuidedProgram | None:
        return self._programs.get(program_id)

    def progress(self, user_id: str, program_id: str) -> ProgramProgress | None:
        if self._lookup(program_id) is None:
            return None
        stored = self._repository.progress_records().get((user_id, program_id))
        return stored or ProgramProgress(user_id=user_id, program_id=program_id)

    def responses(self, user_id: str, program_id: str) -> list[ProgramEntry]:
        """Saved responses, in prompt order."""
        rows = [
            e
            for (uid, pid, _), e in self._repository.program_entries().items()
            if uid == user_id and pid == program_id
        ]
        return sorted(rows, key=lambda e: e.prompt_index)

    def response(self, user_id: str, program_id: str, prompt_index: int) -> ProgramEntry | None:
        return self._repository.program_entries().get((user_id, program_id, prompt_index))

    def completed_count(self, user_id: str, program_id: str) -> int:
        """Number of responses marked complete.  Drafts are not counted."""
        return sum(1 for e in self.responses(user_id, program_id) if e.completed_at is not None)

    def percent_complete(self, user_id: str, program_id: str) -> int:
        """Share of days behind the day pointer, as a whole percent.

        Not started (or reset) is 0 and completed is 100, whatever
        responses are stored.
        """
        program = self._programs.get(program_id)
        if program is None:
            return 0
        progress = self.progress(user_id, program_id)
        match progress.status:
            case ProgramStatus.NOT_STARTED:
                return 0
            case ProgramStatus.COMPLETED:
                return 100
        done = min(max(progress.current_day - 1, 0), program.duration)
        return int(done / program.duration * 100)

    def current_prompt(self, user_id: str, program_id: str) -> str | None:
        """Prompt the day pointer is on; ``None`` when not started or unknown."""
        program = self._programs.get(program_id)
        progress = self.progress(user_id, program_id)
        if program is None or progress is None or progress.status is ProgramStatus.NOT_STARTED:
            return None
        index = min(progress.current_day, program.duration) - 1
        return program.prompts[index]

    # ── Transitions ──────────────────────────────────────────────

    def start_program(self, user_id: str, program_id: str) -> ProgramProgress | None:
        progress = self.progress(user_id, program_id)
        if progress is None:
            return None
        if progress.status is not ProgramStatus.NOT_STARTED:
            return progress
        progress = progress.model_copy(
            update={
                "status": ProgramStatus.IN_PROGRESS,
                "current_day": 1,
                "started_at": self._now(),
            }
        )
        self._repository.save_progress(progress)
        logger.info("User %s started program %s", user_id, program_id)
        return progress

    def record_response(
        self, user_id: str, program_id: str, prompt_index: int, content: str
    ) -> ProgramEntry | None:
        """Save the response for a prompt slot without moving the day pointer.

        Raises PromptOutOfRangeError when the slot does not exist.
        """
        program = self._lookup(program_id)
        if program is None:
            return None
        self._check_range(program, prompt_index)
        now = self._now()
        existing = self.response(user_id, program_id, prompt_index)
        if existing is None:
            entry = ProgramEntry(
                user_id=user_id,
                program_id=program_id,
                prompt_index=prompt_index,
                content=content,
                word_count=count_words(content),
                created_at=now,
                updated_at=now,
            )
        else:
            entry = existing.model_copy(
                update={
                    "content": content,
                    "word_count": count_words(content),
                    "updated_at": now,
                }
            )
        self._repository.save_program_entry(entry)
        return entry

    def complete_and_advance(
        self, user_id: str, program_id: str, prompt_index: int, content: str
    ) -> ProgramProgress | None:
        """Save the response and advance if it answers the current day's prompt."""
        program = self._lookup(program_id)
        if program is None:
            return None
        self._check_range(program, prompt_index)
        entry = self.record_response(user_id, program_id, prompt_index, content)
        if entry is not None and entry.completed_at is None:
            entry = entry.model_copy(update={"completed_at": self._now()})
            self._repository.save_program_entry(entry)

        progress = self.progress(user_id, program_id)
        if progress is None or progress.status is not ProgramStatus.IN_PROGRESS:
            return progress
        if prompt_index != progress.current_day - 1:
            return progress

        if progress.current_day >= program.duration:
            progress = progress.model_copy(
                update={"status": ProgramStatus.COMPLETED, "current_day": program.duration}
            )
            logger.info("User %s completed program %s", user_id, program_id)
        else:
            progress = progress.model_copy(update={"current_day": progress.current_day + 1})
        self._repository.save_progress(progress)
        return progress

    def reset_program(self, user_id: str, program_id: str) -> ProgramProgress | None:
        """Return the pointer to NOT_STARTED.  Saved responses are kept."""
        if self._lookup(program_id) is None:
            return None
        progress = ProgramProgress(user_id=user_id, program_id=program_id)
        self._repository.save_progress(progress)
        logger.info("User %s reset program %s", user_id, program_id)
        return progress

    # ── Private helpers ──────────────────────────────────────────

    def _lookup(self, program_id: str) -> GuidedProgram | None:
        program = self._programs.get(program_id)
        if program is None:
            logger.warning("Unknown program %s", program_id)
        return program

    @staticmethod
    def _check_range(program: GuidedProgram, prompt_index: int) -> None:
        if not 0 <= prompt_index < program.duration:
            raise PromptOutOfRangeError(program.id, prompt_index, program.duration)
