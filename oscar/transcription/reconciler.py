"""Transcript reconciler that keeps the authoritative running transcript.

Subscribes to the transcript update topic and folds every incoming
`TranscriptUpdate` into a single `TranscriptBuffer` with `merge_transcripts`.
Updates are applied one at a time under a lock, in delivery order. The
buffer is frozen when the stop signal arrives (or `stop()` is called) and
only an explicit `start_session()` clears it.
"""

import logging
import threading
from typing import Callable, Optional
from pubsub import pub

from ..models.transcription import TranscriptBuffer, TranscriptUpdate
from .merge import merge_transcripts
from .publisher import UPDATE_TOPIC, STOP_TOPIC

logger = logging.getLogger(__name__)


class TranscriptReconciler:
    """Accumulates recognizer snapshots into one monotonically growing text."""

    def __init__(
        self,
        topic: str = UPDATE_TOPIC,
        stop_topic: str = STOP_TOPIC,
        on_change: Optional[Callable[[str], None]] = None,
    ):
        """Initialize transcript reconciler.

        Args:
            topic: Topic for transcript updates
            stop_topic: Topic for the end-of-recording signal
            on_change: Called with the merged text after every applied update
        """
        self.topic = topic
        self.stop_topic = stop_topic
        self.on_change = on_change

        self.buffer = TranscriptBuffer()
        self.lock = threading.RLock()

        pub.subscribe(self._on_update, topic)
        pub.subscribe(self._on_stop, stop_topic)

        logger.info(f"TranscriptReconciler initialized - subscribed to {topic}")

    def _on_update(self, update: TranscriptUpdate) -> None:
        """Handle transcript update."""
        self.apply(update.text)

    def _on_stop(self) -> None:
        self.stop()

    def apply(self, incoming: str) -> str:
        """Merge one recognizer snapshot into the buffer.

        Args:
            incoming: Snapshot text

        Returns:
            The accumulated text after the merge
        """
        with self.lock:
            if self.buffer.frozen:
                logger.debug(f"Ignoring update after stop: {incoming[:50]!r}")
                return self.buffer.text

            merged = merge_transcripts(self.buffer.text, incoming or "")
            changed = merged != self.buffer.text
            self.buffer.text = merged
            self.buffer.update_count += 1

            if self.on_change is not None and changed:
                self.on_change(merged)

        return merged

    @property
    def current_text(self) -> str:
        with self.lock:
            return self.buffer.text

    def start_session(self) -> None:
        """Discard the previous buffer and start accumulating a new session."""
        with self.lock:
            self.buffer = TranscriptBuffer()
        logger.info("Transcript buffer reset for new session")

    def stop(self) -> str:
        """Freeze the buffer and return the final transcript.

        Returns:
            Final accumulated transcript
        """
        with self.lock:
            if not self.buffer.frozen:
                self.buffer.frozen = True
                logger.info(
                    f"Transcript frozen after {self.buffer.update_count} updates "
                    f"({len(self.buffer.text)} chars)"
                )
            return self.buffer.text

    def shutdown(self) -> None:
        """Unsubscribe from the update and stop topics."""
        try:
            pub.unsubscribe(self._on_update, self.topic)
            pub.unsubscribe(self._on_stop, self.stop_topic)
        except Exception as e:
            logger.warning(f"Error during unsubscribe: {e}")
