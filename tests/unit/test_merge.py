"""Unit tests for transcript merging."""

import pytest
from functools import reduce
from itertools import product

from oscar.transcription.merge import merge_transcripts


@pytest.mark.unit
class TestMergeTranscripts:
    """Test cases for merge_transcripts."""

    @pytest.mark.parametrize("text", ["", "hello", "hello world ", "ünïcode tëxt"])
    def test_empty_sides_return_other_side(self, text):
        """Empty incoming keeps previous; empty previous takes incoming."""
        assert merge_transcripts(text, "") == text
        assert merge_transcripts("", text) == text

    def test_prefix_continuation_replaces(self):
        assert merge_transcripts("hello", "hello world") == "hello world"
        assert merge_transcripts("hello", "hello") == "hello"

    def test_superset_replaces(self):
        """Incoming that contains previous anywhere becomes the new text."""
        assert merge_transcripts("world", "hello world today") == "hello world today"

    def test_stale_restart_is_discarded(self):
        """Incoming contained in previous never truncates the buffer."""
        previous = "hello world today"
        assert merge_transcripts(previous, "world") == previous
        assert merge_transcripts(previous, "hello") == previous

    def test_suffix_prefix_overlap(self):
        assert merge_transcripts("hello wor", "world peace") == "hello world peace"

    def test_longest_overlap_wins(self):
        """A four-character overlap is preferred over a two-character one."""
        assert merge_transcripts("xabab", "ababy") == "xababy"

    def test_no_overlap_adds_space(self):
        assert merge_transcripts("foo", "bar") == "foo bar"

    def test_no_overlap_keeps_existing_whitespace(self):
        assert merge_transcripts("foo ", "bar") == "foo bar"
        assert merge_transcripts("foo\n", "bar") == "foo\nbar"

    def test_restart_sequence(self):
        """Folding a stream with restarts yields one coherent transcript."""
        updates = [
            "hello",
            "hello there",
            "there",
            "there general",
            "general kenobi",
            "",
        ]
        assert reduce(merge_transcripts, updates, "") == "hello there general kenobi"

    @pytest.mark.parametrize("previous,incoming,expected", [
        ("xaabaa", "aabaac", "xaabaac"),
        ("xabcab", "abcabd", "xabcabd"),
        ("xabaab", "abaaba", "xabaaba"),
        ("aaab", "baaa", "aaabaaa"),
        ("abaa", "aab", "abaab"),
        ("tooth", "thought", "toothought"),
    ])
    def test_overlap_with_repeated_prefixes(self, previous, incoming, expected):
        assert merge_transcripts(previous, incoming) == expected

    def test_overlap_matches_exhaustive_scan(self):
        """Every pair over a small alphabet merges as a longest-first scan would."""
        def scan(previous, incoming):
            for overlap in range(min(len(previous), len(incoming)), 0, -1):
                if previous.endswith(incoming[:overlap]):
                    return previous + incoming[overlap:]
            return previous + ("" if previous[-1].isspace() else " ") + incoming

        words = ["".join(p) for n in range(1, 6) for p in product("ab", repeat=n)]
        for previous in words:
            for incoming in words:
                if incoming.startswith(previous) or previous in incoming:
                    expected = incoming
                elif incoming in previous:
                    expected = previous
                else:
                    expected = scan(previous, incoming)
                assert merge_transcripts(previous, incoming) == expected, (previous, incoming)

    def test_long_repetitive_snapshots(self):
        previous = "a" * 20000 + "b"
        incoming = "b" + "a" * 20000 + "c"

        assert merge_transcripts(previous, incoming) == "a" * 20000 + "b" + "a" * 20000 + "c"
