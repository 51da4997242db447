"""Services layer for OSCAR application logic."""

from .notes_service import NotesService

__all__ = [
    "NotesService",
]
