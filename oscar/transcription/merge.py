"""Merging of incremental speech-recognition transcripts."""


def _longest_overlap(previous: str, incoming: str) -> int:
    """Length of the longest suffix of ``previous`` that is a prefix of ``incoming``.

    Runs the Knuth-Morris-Pratt matcher for ``incoming`` over the tail of
    ``previous``, so the cost is linear in the length of ``incoming``.
    """
    failure = [0] * len(incoming)
    k = 0
    for i in range(1, len(incoming)):
        while k and incoming[i] != incoming[k]:
            k = failure[k - 1]
        if incoming[i] == incoming[k]:
            k += 1
        failure[i] = k

    matched = 0
    for ch in previous[-len(incoming):]:
        if matched == len(incoming):
            matched = failure[matched - 1]
        while matched and ch != incoming[matched]:
            matched = failure[matched - 1]
        if ch == incoming[matched]:
            matched += 1
    return matched


def merge_transcripts(previous: str, incoming: str) -> str:
    """Merge an incoming transcript snapshot into the accumulated text.

    Recognizers restart internally and resend overlapping spans, so the
    incoming text may continue, contain, repeat or partially overlap what
    has already been accumulated. Containment is checked before falling back
    to suffix/prefix overlap, and the overlap scan takes the longest match.

    Args:
        previous: Text accumulated so far
        incoming: Latest snapshot from the recognizer

    Returns:
        The new accumulated text
    """
    if not incoming:
        return previous
    if not previous:
        return incoming

    # Superset of what we already have: the recognizer resent the session.
    if incoming.startswith(previous):
        return incoming
    if previous in incoming:
        return incoming

    # Stale or partial restart; keep the longer text.
    if incoming in previous:
        return previous

    overlap = _longest_overlap(previous, incoming)
    if overlap:
        return previous + incoming[overlap:]

    separator = "" if previous[-1].isspace() else " "
    return previous + separator + incoming
