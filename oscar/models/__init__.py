"""Data models for the OSCAR application."""

from .transcription import TranscriptUpdate, TranscriptBuffer
from .notes import (
    FormatterTier,
    ContentStyle,
    SentenceCategory,
    FormattedNote,
    SavedNote,
    NoteDraft,
)

__all__ = [
    "TranscriptUpdate",
    "TranscriptBuffer",
    "FormatterTier",
    "ContentStyle",
    "SentenceCategory",
    "FormattedNote",
    "SavedNote",
    "NoteDraft",
]
