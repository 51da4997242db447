"""Note formatting for OSCAR."""

from .base import StructuringProvider, StructuringRequest, RemoteCallFailure, HeuristicFailure
from .chat_completion_engine import ChatCompletionEngine
from .structurer import TextStructurer, sanitize_title, fallback_title
from .heuristics import format_heuristic, format_basic, normalize_text, split_sentences

__all__ = [
    "StructuringProvider",
    "StructuringRequest",
    "RemoteCallFailure",
    "HeuristicFailure",
    "ChatCompletionEngine",
    "TextStructurer",
    "sanitize_title",
    "fallback_title",
    "format_heuristic",
    "format_basic",
    "normalize_text",
    "split_sentences",
]
