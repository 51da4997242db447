"""Storage for OSCAR notes."""

from .note_store import NoteStore

__all__ = ["NoteStore"]
