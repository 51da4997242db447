"""Unit tests for TranscriptReconciler and TranscriptPublisher."""

import pytest
import threading
from unittest.mock import MagicMock

from oscar.transcription.publisher import TranscriptPublisher
from oscar.transcription.reconciler import TranscriptReconciler


@pytest.fixture
def wired(topics):
    """Reconciler subscribed to a publisher on private topics."""
    update_topic, stop_topic = topics
    on_change = MagicMock()
    reconciler = TranscriptReconciler(topic=update_topic, stop_topic=stop_topic, on_change=on_change)
    publisher = TranscriptPublisher(topic=update_topic, stop_topic=stop_topic)
    yield reconciler, publisher, on_change
    reconciler.shutdown()


@pytest.mark.unit
class TestTranscriptReconciler:
    """Test cases for TranscriptReconciler."""

    def test_updates_are_merged(self, wired):
        reconciler, publisher, _ = wired

        publisher.publish_transcript("hello wor")
        publisher.publish_transcript("world peace")

        assert reconciler.current_text == "hello world peace"
        assert reconciler.buffer.update_count == 2

    def test_none_and_empty_updates_are_ignored(self, wired):
        reconciler, publisher, _ = wired

        publisher.publish_transcript("keep this")
        publisher.publish_transcript(None)
        publisher.publish_transcript("")

        assert reconciler.current_text == "keep this"

    def test_on_change_called_with_merged_text(self, wired):
        reconciler, publisher, on_change = wired

        publisher.publish_transcript("one")
        publisher.publish_transcript("one")  # duplicate, no change
        publisher.publish_transcript("one two")

        assert [c.args[0] for c in on_change.call_args_list] == ["one", "one two"]

    def test_stop_freezes_buffer(self, wired):
        reconciler, publisher, _ = wired

        publisher.publish_transcript("final words")
        publisher.publish_stop()
        publisher.publish_transcript("final words and late noise")

        assert reconciler.buffer.frozen
        assert reconciler.stop() == "final words"

    def test_start_session_resets(self, wired):
        reconciler, publisher, _ = wired

        publisher.publish_transcript("old session")
        reconciler.stop()
        reconciler.start_session()
        publisher.publish_transcript("new session")

        assert reconciler.current_text == "new session"
        assert not reconciler.buffer.frozen

    def test_concurrent_continuations_keep_longest(self, topics):
        """Prefix continuations applied from many threads never lose content."""
        update_topic, stop_topic = topics
        reconciler = TranscriptReconciler(topic=update_topic, stop_topic=stop_topic)
        words = [f"w{i}" for i in range(40)]
        snapshots = [" ".join(words[:n]) for n in range(1, len(words) + 1)]

        threads = [threading.Thread(target=reconciler.apply, args=(s,)) for s in snapshots]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        try:
            assert reconciler.current_text == snapshots[-1]
        finally:
            reconciler.shutdown()

    def test_publisher_callback(self, wired):
        reconciler, publisher, _ = wired

        callback = publisher.get_callback()
        callback("from the recognizer")

        assert reconciler.current_text == "from the recognizer"
