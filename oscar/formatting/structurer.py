"""Text structurer that turns a finished transcript into notes and a title.

Formatting degrades through three tiers and never raises:

 1. remote provider (chat-completion endpoint)
 2. local heuristics (`heuristics.format_heuristic`)
 3. one bullet per fragment (`heuristics.format_basic`)

Title generation falls back to the first sentence of the text.
"""

import logging
import re
from typing import Optional, Tuple

from ..models.notes import FormattedNote, FormatterTier
from .base import HeuristicFailure, RemoteCallFailure, StructuringProvider
from .heuristics import format_basic, format_heuristic
from .prompts import build_format_request, build_title_request

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 60
TRUNCATED_TITLE_LENGTH = 57
ELLIPSIS = "…"

_NEWLINES = re.compile(r"[\r\n]+")
_TITLE_EDGES = re.compile(r"^[\"'\s]+|[\"'\s]+$")
_FIRST_SENTENCE = re.compile(r"[^.!?]+[.!?]?")
_WHITESPACE = re.compile(r"\s+")


def sanitize_title(title: str) -> str:
    """Single-line title without surrounding quotes or whitespace."""
    title = _NEWLINES.sub(" ", title or "")
    return _TITLE_EDGES.sub("", title).strip()


def fallback_title(text: str) -> str:
    """Title from the first sentence, truncated to fit on one line."""
    cleaned = _WHITESPACE.sub(" ", text or "").strip()
    match = _FIRST_SENTENCE.search(cleaned)
    first_sentence = match.group(0).strip() if match else ""

    if len(first_sentence) > MAX_TITLE_LENGTH:
        first_sentence = first_sentence[:TRUNCATED_TITLE_LENGTH].strip() + ELLIPSIS

    return sanitize_title(first_sentence or cleaned[:MAX_TITLE_LENGTH])


class TextStructurer:
    """Formats transcripts with a provider, falling back to local heuristics."""

    def __init__(self, provider: Optional[StructuringProvider] = None, temperature: float = 0.3):
        """Initialize text structurer.

        Args:
            provider: Remote structuring provider. When None only the local
                      tiers are used.
            temperature: Sampling temperature for remote requests
        """
        self.provider = provider
        self.temperature = temperature

        logger.info(f"TextStructurer initialized (remote provider: {provider is not None})")

    async def structure(self, raw_text: str) -> str:
        """Format a raw transcript into readable notes.

        Args:
            raw_text: Finished transcript

        Returns:
            Formatted notes; never raises
        """
        formatted, _ = await self._structure_with_tier(raw_text)
        return formatted

    async def structure_note(self, raw_text: str) -> FormattedNote:
        """Format a transcript and title it.

        The title is generated from the formatted text, falling back to the
        raw text when formatting produced nothing.
        """
        formatted, tier = await self._structure_with_tier(raw_text)
        title = await self.generate_title(formatted or raw_text)
        return FormattedNote(
            raw_text=raw_text,
            formatted_text=formatted,
            title=title,
            formatter=tier,
        )

    async def _structure_with_tier(self, raw_text: str) -> Tuple[str, FormatterTier]:
        raw_text = raw_text or ""
        if not raw_text.strip():
            return raw_text, FormatterTier.HEURISTIC

        if self.provider is not None:
            try:
                formatted = await self.provider.complete(build_format_request(raw_text, self.temperature))
                return formatted, FormatterTier.REMOTE
            except RemoteCallFailure as e:
                logger.warning(f"Remote formatting failed, using heuristic formatting: {e}")
            except Exception as e:
                logger.error(f"Unexpected error from formatting provider: {e}")

        try:
            return self._format_heuristic(raw_text), FormatterTier.HEURISTIC
        except HeuristicFailure as e:
            logger.error(f"Heuristic formatting failed, using basic formatting: {e}")

        return format_basic(raw_text), FormatterTier.BASIC

    def _format_heuristic(self, raw_text: str) -> str:
        try:
            return format_heuristic(raw_text)
        except Exception as e:
            raise HeuristicFailure(str(e)) from e

    async def generate_title(self, text: str) -> str:
        """Produce a short single-line title.

        Args:
            text: Note or transcript text

        Returns:
            Title of at most ~60 characters, or "" for blank input
        """
        source = (text or "").strip()
        if not source:
            return ""

        if self.provider is not None:
            try:
                title = sanitize_title(
                    await self.provider.complete(build_title_request(source, self.temperature))
                )
                if title:
                    return title
                logger.warning("Remote title was empty, using first sentence")
            except RemoteCallFailure as e:
                logger.warning(f"Remote title generation failed, using first sentence: {e}")
            except Exception as e:
                logger.error(f"Unexpected error from title provider: {e}")

        return fallback_title(source)
