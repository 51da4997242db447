"""Notes service: high-level API from recording session to saved note."""

import logging
import uuid
from typing import Any, Callable, Dict, Optional

from ..config import OscarConfig
from ..formatting.chat_completion_engine import ChatCompletionEngine
from ..formatting.base import StructuringProvider
from ..formatting.structurer import TextStructurer
from ..models.notes import FormattedNote, NoteDraft
from ..storage.note_store import NoteStore
from ..transcription.publisher import STOP_TOPIC, UPDATE_TOPIC, TranscriptPublisher
from ..transcription.reconciler import TranscriptReconciler

logger = logging.getLogger(__name__)

NO_SPEECH_MESSAGE = (
    "No speech detected. Please try recording again.\n\n"
    "Tips:\n"
    "• Make sure your microphone is working\n"
    "• Speak clearly and loudly\n"
    "• Check microphone permissions\n"
    "• Record for at least 3-5 seconds"
)


class NotesService:
    """High-level service for turning recognizer output into notes.

    This service provides a clean API for clients to:
    1. Start/stop recording sessions fed by a speech recognizer
    2. Get the live transcript while recording
    3. Format the finished transcript and title it
    4. Save, list and export notes

    Results are returned as dicts with a ``success`` flag.
    """

    def __init__(
        self,
        config: OscarConfig,
        provider: Optional[StructuringProvider] = None,
        on_transcript_change: Optional[Callable[[str], None]] = None,
    ):
        """Initialize notes service.

        Args:
            config: Application configuration
            provider: Structuring provider; built from the formatter settings
                      when not given
            on_transcript_change: Live transcript callback
        """
        self.config = config
        settings = config.get_formatter_settings()

        if provider is None:
            if settings.api_key:
                provider = ChatCompletionEngine(settings)
            else:
                logger.warning("No API key configured; notes will use heuristic formatting")

        self.structurer = TextStructurer(provider, temperature=settings.temperature)
        self.store = NoteStore(config.get_data_directory())
        # Topics are private to this service so concurrent services stay independent
        channel = uuid.uuid4().hex[:8]
        self.publisher = TranscriptPublisher(
            topic=f"{UPDATE_TOPIC}_{channel}",
            stop_topic=f"{STOP_TOPIC}_{channel}",
        )
        self.reconciler = TranscriptReconciler(
            topic=self.publisher.topic,
            stop_topic=self.publisher.stop_topic,
            on_change=on_transcript_change,
        )

        self.current_note: Optional[FormattedNote] = None

        logger.info("NotesService initialized")

    def start_recording_session(self) -> Dict[str, Any]:
        """Start a new recording session.

        Returns:
            Dict with success status
        """
        self.reconciler.start_session()
        self.current_note = None
        self.store.clear_draft()
        logger.info("Started recording session")
        return {"success": True}

    def get_live_transcript(self) -> str:
        return self.reconciler.current_text

    async def stop_recording_session(self) -> Dict[str, Any]:
        """Stop the session, then format and title the transcript.

        Returns:
            Dict with success status and the formatted note
        """
        transcript = self.reconciler.stop().strip()
        if not transcript:
            logger.warning("Recording stopped with an empty transcript")
            return {"success": False, "error": NO_SPEECH_MESSAGE}

        note = await self.structurer.structure_note(transcript)
        self.current_note = note

        try:
            self.store.save_draft(NoteDraft(
                formatted_note=note.formatted_text,
                raw_text=note.raw_text,
                title=note.title,
            ))
        except OSError as e:
            logger.error(f"Error saving draft: {e}")

        logger.info(f"Formatted note '{note.title}' with {note.formatter.value} formatter")
        return {"success": True, "note": note}

    def save_note(self, edited_text: Optional[str] = None) -> Dict[str, Any]:
        """Save the current note, optionally with edited text, to history.

        Args:
            edited_text: Replacement for the formatted text

        Returns:
            Dict with success status and the saved entry
        """
        draft = self.store.load_draft()
        if draft is None:
            return {"success": False, "error": "No note to save"}

        if edited_text is not None:
            draft.formatted_note = edited_text

        try:
            self.store.save_draft(draft)
            entry = self.store.append_note(draft.formatted_note, title=draft.title, raw_text=draft.raw_text)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to save history: {e}")
            return {"success": False, "error": str(e)}

        return {"success": True, "saved": entry}

    def list_notes(self):
        return self.store.list_notes()

    def export_note(self, path: Optional[str] = None) -> Dict[str, Any]:
        """Export the current note as plain text.

        Args:
            path: Target file path

        Returns:
            Dict with success status and the written path
        """
        draft = self.store.load_draft()
        if draft is None:
            return {"success": False, "error": "No note to export"}

        try:
            written = self.store.export_note(draft.formatted_note, path)
        except OSError as e:
            logger.error(f"Failed to export note: {e}")
            return {"success": False, "error": str(e)}

        return {"success": True, "path": written}

    def shutdown(self) -> None:
        self.reconciler.shutdown()
