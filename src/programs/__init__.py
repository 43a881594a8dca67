"""Guided multi-day writing programs and per-user progress."""

from pagebound.programs.catalog import GUIDED_PROGRAMS, get_program
from pagebound.programs.models import (
    GuidedProgram,
    ProgramEntry,
    ProgramProgress,
    ProgramStatus,
)
from pagebound.programs.tracker import (
    InMemoryProgramRepository,
    ProgramProgressTracker,
    ProgramRepository,
)

__all__ = [
    "GUIDED_PROGRAMS",
    "GuidedProgram",
    "InMemoryProgramRepository",
    "ProgramEntry",
    "ProgramProgress",
    "ProgramProgressTracker",
    "ProgramRepository",
    "ProgramStatus",
    "get_program",
]
