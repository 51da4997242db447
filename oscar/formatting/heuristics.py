"""Local rule-based note formatting.

Used when the remote formatter is unavailable. The raw transcript is
normalized, split into sentences and laid out in one of three styles:

 - meeting: Key Discussion Points / Action Items / Questions / Notes sections
 - list: one bullet per sentence
 - natural: paragraphs of up to four sentences, broken early on transitions

`format_basic` is the last resort when the heuristics themselves fail.

Keyword signals match only at the start of a word, not anywhere inside
one: `steam` is not a `team` meeting signal and `context` is not a `next`
list signal, while `discussed` still counts as `discuss`. Transitions must
be the whole first word of a sentence, so `Butter` and `Nowhere` do not
start a new paragraph. Plain substring matching would classify such
transcripts differently.
"""

import logging
import re
from typing import Dict, List, Tuple

from ..models.notes import ContentStyle, SentenceCategory

logger = logging.getLogger(__name__)

BULLET = "•"
MAX_PARAGRAPH_SENTENCES = 4
LIST_SENTENCE_THRESHOLD = 5

_WHITESPACE = re.compile(r"\s+")
_SPACE_BEFORE_PUNCT = re.compile(r"\s+([,.!?])")
_NO_SPACE_AFTER_PUNCT = re.compile(r"([,.!?])(?=[^\s,.!?])")
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
_BASIC_BOUNDARY = re.compile(r"[.!?]+")
_LIST_MARKER = re.compile(r"^[-•*]\s*")

MEETING_SIGNALS = re.compile(r"\b(meeting|discuss|agenda|action|follow-up|team|project)", re.IGNORECASE)
LIST_SIGNALS = re.compile(
    r"\b(first|second|third|then|next|also|additionally|finally|pehle|phir|baad|uske)",
    re.IGNORECASE,
)
ACTION_SIGNALS = re.compile(
    r"\b(need to|should|must|will|going to|plan to|karna|hoga|chahiye)",
    re.IGNORECASE,
)

ACTION_ITEM_PATTERN = re.compile(
    r"\b(need to|should|must|will|going to|plan to|action|task|todo|karna|hoga|chahiye)",
    re.IGNORECASE,
)
DISCUSSION_PATTERN = re.compile(r"\b(discuss|talk|review|decide|agreed|baat|charcha)", re.IGNORECASE)
LEADING_PRONOUN = re.compile(r"^(I|we|they|you|main|hum)\s+", re.IGNORECASE)

TRANSITION_WORDS = (
    "however", "but", "also", "additionally", "furthermore", "meanwhile",
    "next", "then", "now", "lekin", "par", "aur", "phir",
)
_TRANSITION_START = re.compile(r"^(%s)\b" % "|".join(TRANSITION_WORDS), re.IGNORECASE)

SECTION_TITLES = {
    SentenceCategory.DISCUSSION: "Key Discussion Points:",
    SentenceCategory.ACTION_ITEM: "Action Items:",
    SentenceCategory.QUESTION: "Questions:",
    SentenceCategory.OTHER: "Notes:",
}
SECTION_ORDER = (
    SentenceCategory.DISCUSSION,
    SentenceCategory.ACTION_ITEM,
    SentenceCategory.QUESTION,
    SentenceCategory.OTHER,
)


def normalize_text(text: str) -> str:
    """Collapse whitespace and fix spacing around punctuation.

    Runs of whitespace become one space, whitespace before ``, . ! ?`` is
    removed and a single space is inserted after them when a word follows.
    Applying it twice gives the same result as applying it once.
    """
    cleaned = _WHITESPACE.sub(" ", text)
    cleaned = _SPACE_BEFORE_PUNCT.sub(r"\1", cleaned)
    cleaned = _NO_SPACE_AFTER_PUNCT.sub(r"\1 ", cleaned)
    return cleaned.strip()


def split_sentences(text: str) -> List[str]:
    """Split normalized text after ``.``, ``!`` or ``?`` followed by whitespace."""
    return [s.strip() for s in _SENTENCE_BOUNDARY.split(text) if s.strip()]


def detect_content_style(cleaned: str, sentences: List[str]) -> ContentStyle:
    """Pick the layout for a transcript from keyword signals."""
    is_meeting = bool(MEETING_SIGNALS.search(cleaned))
    is_list = bool(LIST_SIGNALS.search(cleaned))
    has_action_items = bool(ACTION_SIGNALS.search(cleaned))

    if is_meeting and (has_action_items or is_list):
        return ContentStyle.MEETING
    if is_list or len(sentences) > LIST_SENTENCE_THRESHOLD:
        return ContentStyle.LIST
    return ContentStyle.NATURAL


def is_topic_change(next_sentence: str) -> bool:
    return bool(_TRANSITION_START.match(next_sentence))


def format_natural_style(sentences: List[str]) -> str:
    paragraphs: List[str] = []
    current: List[str] = []

    for i, sentence in enumerate(sentences):
        current.append(sentence)

        is_last = i == len(sentences) - 1
        should_break = (
            len(current) >= MAX_PARAGRAPH_SENTENCES
            or (not is_last and is_topic_change(sentences[i + 1]))
        )
        if should_break or is_last:
            paragraphs.append(" ".join(current))
            current = []

    return "\n\n".join(paragraphs)


def format_list_style(sentences: List[str]) -> str:
    return "\n".join(f"{BULLET} {_LIST_MARKER.sub('', s).strip()}" for s in sentences)


def classify_sentence(sentence: str) -> Tuple[SentenceCategory, str]:
    """Assign a sentence to a meeting-notes bucket.

    Questions win over action items, action items over discussion points.
    Action items lose their leading pronoun ("We need to..." -> "need to...").
    """
    if "?" in sentence:
        return SentenceCategory.QUESTION, sentence
    if ACTION_ITEM_PATTERN.search(sentence):
        return SentenceCategory.ACTION_ITEM, LEADING_PRONOUN.sub("", sentence)
    if DISCUSSION_PATTERN.search(sentence):
        return SentenceCategory.DISCUSSION, sentence
    return SentenceCategory.OTHER, sentence


def format_meeting_style(sentences: List[str]) -> str:
    buckets: Dict[SentenceCategory, List[str]] = {category: [] for category in SECTION_ORDER}
    for sentence in sentences:
        category, text = classify_sentence(sentence)
        buckets[category].append(text)

    sections: List[str] = []
    for category in SECTION_ORDER:
        items = buckets[category]
        if not items:
            continue
        if category is SentenceCategory.OTHER:
            body = "\n\n".join(items)
        else:
            body = "\n".join(f"{BULLET} {item}" for item in items)
        sections.append(f"{SECTION_TITLES[category]}\n\n{body}")

    return "\n\n".join(sections).strip() or " ".join(sentences)


def format_heuristic(text: str) -> str:
    """Format a raw transcript without the remote formatter."""
    if not text or not text.strip():
        return text

    cleaned = normalize_text(text)
    sentences = split_sentences(cleaned)
    if not sentences:
        return cleaned

    style = detect_content_style(cleaned, sentences)
    logger.debug(f"Heuristic formatting: {len(sentences)} sentences, style={style.value}")

    if style is ContentStyle.MEETING:
        return format_meeting_style(sentences)
    if style is ContentStyle.LIST:
        return format_list_style(sentences)
    return format_natural_style(sentences)


def format_basic(text: str) -> str:
    """Bullet every fragment between sentence punctuation."""
    fragments = [f.strip() for f in _BASIC_BOUNDARY.split(text or "") if f.strip()]
    if not fragments:
        return (text or "").strip()
    return "\n".join(f"{BULLET} {fragment}" for fragment in fragments)
