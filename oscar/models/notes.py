"""Data models for formatted and saved notes."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class FormatterTier(Enum):
    """Which formatting tier produced a note's text."""
    REMOTE = "remote"
    HEURISTIC = "heuristic"
    BASIC = "basic"


class ContentStyle(Enum):
    """Layout chosen by the heuristic formatter."""
    MEETING = "meeting"
    LIST = "list"
    NATURAL = "natural"


class SentenceCategory(Enum):
    """Bucket of a sentence in meeting-style notes."""
    DISCUSSION = "discussion"
    ACTION_ITEM = "action_item"
    QUESTION = "question"
    OTHER = "other"


@dataclass(frozen=True)
class FormattedNote:
    """Result of structuring one finished transcript."""
    raw_text: str
    formatted_text: str
    title: str
    formatter: FormatterTier = FormatterTier.REMOTE


@dataclass
class SavedNote:
    """One entry of the saved-note history."""
    id: int  # Creation time in milliseconds since the epoch
    text: str
    created_at: str  # ISO-8601
    title: str = ""
    raw_text: str = ""

    @classmethod
    def create(cls, text: str, title: str = "", raw_text: str = "") -> "SavedNote":
        now = datetime.now()
        return cls(
            id=int(now.timestamp() * 1000),
            text=text,
            created_at=now.isoformat(),
            title=title,
            raw_text=raw_text,
        )


@dataclass
class NoteDraft:
    """The in-progress note for the current session."""
    formatted_note: str
    raw_text: str
    title: str = ""
    updated_at: str = field(default_factory=lambda: datetime.now().isoformat())
