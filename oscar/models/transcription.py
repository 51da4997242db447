"""Transcription-related data models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class TranscriptUpdate:
    """One incremental transcript snapshot emitted by the speech recognizer."""
    text: str
    is_final: bool = False
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class TranscriptBuffer:
    """Accumulated transcript text for a single recording session."""
    text: str = ""
    frozen: bool = False
    update_count: int = 0
