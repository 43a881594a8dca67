"""Journal entry domain models — pure Pydantic v2 data types.

A JournalEntry belongs to one calendar day; a day may hold any number
of entries.  Word counts are derived from the markup content, tags are
normalized on the way in, and locking is one-way.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from pagebound.entries.text import count_words, extract_plain_text


def new_id() -> str:
    return uuid4().hex


def normalize_tag(tag: str) -> str:
    """Lower-case and trim a tag."""
    return tag.strip().lower()


def normalize_tags(tags: list[str] | tuple[str, ...] | set[str] | None) -> list[str]:
    """Normalize tags, dropping blanks and collapsing duplicates.

    First-seen order is kept so the stored list stays stable between saves.
    """
    if not tags:
        return []
    seen: dict[str, None] = {}
    for raw in tags:
        tag = normalize_tag(raw)
        if tag:
            seen.setdefault(tag, None)
    return list(seen)


class Mood(StrEnum):
    """Moods a user can attach to an entry.

    Declaration order is significant: it breaks ties in mood rankings.
    """

    HAPPY = "happy"
    SAD = "sad"
    ANXIOUS = "anxious"
    CALM = "calm"
    EXCITED = "excited"
    GRATEFUL = "grateful"
    TIRED = "tired"
    ENERGETIC = "energetic"
    THOUGHTFUL = "thoughtful"
    CREATIVE = "creative"
    ANGRY = "angry"
    FRUSTRATED = "frustrated"
    DEFEATED = "defeated"
    STRESSED = "stressed"
    HOPEFUL = "hopeful"
    LONELY = "lonely"
    PROUD = "proud"
    CONFUSED = "confused"
    LOVED = "loved"
    CONTENT = "content"
    NUMB = "numb"


class EntryUpdate(BaseModel):
    """A timestamped note appended to an entry after the fact."""

    id: str = Field(default_factory=new_id)
    content: str
    created_at: datetime = Field(default_factory=datetime.now)


class ImageAttachment(BaseModel):
    """A photo attached to an entry."""

    id: str = Field(default_factory=new_id)
    url: str
    caption: str | None = None
    size: int | None = None


class JournalEntry(BaseModel):
    """A single journal entry on a calendar day."""

    id: str = Field(default_factory=new_id)
    date: date
    content: str = ""
    mood: Mood | None = None
    tags: list[str] = Field(default_factory=list)
    images: list[ImageAttachment] = Field(default_factory=list)
    is_locked: bool = False
    is_bookmarked: bool = False
    updates: list[EntryUpdate] = Field(default_factory=list)
    word_count: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: object) -> object:
        if isinstance(value, (set, frozenset)):
            return sorted(normalize_tags([str(v) for v in value]))
        if isinstance(value, (list, tuple)):
            return normalize_tags([str(v) for v in value])
        return value

    @property
    def plain_text(self) -> str:
        """Content with markup stripped."""
        return extract_plain_text(self.content)

    def recount(self) -> None:
        """Recompute ``word_count`` from the current content."""
        self.word_count = count_words(self.content)
