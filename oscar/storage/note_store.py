"""Note storage: the in-progress draft, saved-note history and text export."""

import json
import logging
from dataclasses import asdict, replace
from pathlib import Path
from typing import List, Optional, Union

from ..models.notes import NoteDraft, SavedNote

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_FILENAME = "oscar-note.txt"


class NoteStore:
    """Keeps notes as JSON documents under a data directory."""

    def __init__(self, data_dir: str = "./data"):
        """Initialize note store with data directory.

        Args:
            data_dir: Base directory for storing all data
        """
        self.data_dir = Path(data_dir)
        self.notes_dir = self.data_dir / "notes"
        self.history_file = self.notes_dir / "oscar_notes.json"
        self.draft_file = self.notes_dir / "draft.json"
        self.exports_dir = self.data_dir / "exports"

        for directory in [self.data_dir, self.notes_dir, self.exports_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        logger.info(f"NoteStore initialized with data_dir: {self.data_dir}")

    def save_draft(self, draft: NoteDraft) -> None:
        with open(self.draft_file, 'w', encoding='utf-8') as f:
            json.dump(asdict(draft), f, indent=2, ensure_ascii=False)
        logger.debug(f"Draft saved: {self.draft_file}")

    def load_draft(self) -> Optional[NoteDraft]:
        """Load the in-progress note.

        Returns:
            NoteDraft or None if there is no readable draft
        """
        if not self.draft_file.exists():
            return None

        try:
            with open(self.draft_file, 'r', encoding='utf-8') as f:
                return NoteDraft(**json.load(f))
        except (ValueError, TypeError) as e:
            logger.error(f"Error loading draft: {e}")
            return None

    def clear_draft(self) -> None:
        if self.draft_file.exists():
            self.draft_file.unlink()
            logger.debug("Draft cleared")

    def append_note(self, text: str, title: str = "", raw_text: str = "") -> SavedNote:
        """Add a note to the front of the history.

        Args:
            text: Final note text
            title: Note title
            raw_text: Transcript the note was made from

        Returns:
            The stored entry

        Raises:
            ValueError: If the existing history cannot be read. The file is
                        left untouched.
        """
        notes = self._read_history()
        entry = SavedNote.create(text=text, title=title, raw_text=raw_text)
        # Ids are creation times in ms; keep them unique within the history
        if notes and entry.id <= notes[0].id:
            entry = replace(entry, id=notes[0].id + 1)
        notes.insert(0, entry)

        with open(self.history_file, 'w', encoding='utf-8') as f:
            json.dump([asdict(note) for note in notes], f, indent=2, ensure_ascii=False)

        logger.info(f"Saved note {entry.id} ({len(notes)} notes in history)")
        return entry

    def list_notes(self) -> List[SavedNote]:
        """List saved notes, newest first.

        Returns:
            Saved notes; empty if the history is missing or unreadable
        """
        try:
            return self._read_history()
        except ValueError as e:
            logger.error(f"Error loading note history: {e}")
            return []

    def _read_history(self) -> List[SavedNote]:
        if not self.history_file.exists():
            return []

        with open(self.history_file, 'r', encoding='utf-8') as f:
            data = json.load(f)

        try:
            return [SavedNote(**item) for item in data]
        except TypeError as e:
            raise ValueError(f"Unexpected note history format: {e}") from e

    def export_note(self, text: str, path: Optional[Union[str, Path]] = None) -> str:
        """Write a note as plain text.

        Args:
            text: Note text
            path: Target file; defaults to oscar-note.txt in the exports directory

        Returns:
            Path of the written file
        """
        target = Path(path) if path else self.exports_dir / DEFAULT_EXPORT_FILENAME
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding='utf-8')

        logger.info(f"Note exported: {target}")
        return str(target)
