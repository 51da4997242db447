"""Transcript publisher module for pub/sub event publishing."""

import logging
from typing import Callable
from pubsub import pub
from ..models.transcription import TranscriptUpdate

logger = logging.getLogger(__name__)

UPDATE_TOPIC = "transcript.update"
STOP_TOPIC = "transcript.stop"


class TranscriptPublisher:
    """Publishes recognizer transcript snapshots using pubsub.pub."""

    def __init__(self, topic: str = UPDATE_TOPIC, stop_topic: str = STOP_TOPIC):
        """Initialize transcript publisher.

        Args:
            topic: Pub/sub topic name for transcript updates
            stop_topic: Pub/sub topic name for the end-of-recording signal
        """
        self.topic = topic
        self.stop_topic = stop_topic
        logger.info(f"TranscriptPublisher initialized with topic: {topic}")

    def publish_transcript(self, text: str, is_final: bool = False) -> None:
        """Publish a transcript snapshot to the pub/sub topic.

        Args:
            text: Transcript text as reported by the recognizer (may be None)
            is_final: Whether the recognizer marked this snapshot final
        """
        update = TranscriptUpdate(text=text or "", is_final=is_final)
        pub.sendMessage(self.topic, update=update)
        logger.debug(f"Published transcript update ({len(update.text)} chars, final={is_final})")

    def publish_stop(self) -> None:
        """Signal that the recognizer has stopped."""
        pub.sendMessage(self.stop_topic)
        logger.debug("Published transcript stop signal")

    def get_callback(self) -> Callable[[str], None]:
        """Get callback function for the speech recognizer to call.

        Returns:
            Callback function that publishes transcript snapshots
        """
        return self.publish_transcript
