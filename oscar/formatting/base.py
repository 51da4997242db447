"""Provider seam and errors for note formatting."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class RemoteCallFailure(Exception):
    """A remote structuring or title call did not produce usable text."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class HeuristicFailure(Exception):
    """The local heuristic formatter raised unexpectedly."""


@dataclass(frozen=True)
class StructuringRequest:
    """One completion request sent to a structuring provider."""
    kind: str  # "format" | "title"
    system_prompt: str
    user_prompt: str
    temperature: float = 0.3
    top_p: float = 0.95
    max_tokens: int = 4096


class StructuringProvider(ABC):
    """Abstract text-to-structured-text provider."""

    @abstractmethod
    async def complete(self, request: StructuringRequest) -> str:
        """Send a request and return the completion text.

        Raises:
            RemoteCallFailure: On transport error, timeout, non-success
                status or a response without completion text
        """
        pass
