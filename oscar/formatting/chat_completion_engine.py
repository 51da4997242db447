"""Chat-completion engine for sending formatting prompts and getting responses."""

import asyncio
import logging
import re
from typing import Any, Dict

import aiohttp

from ..config import FormatterSettings
from .base import RemoteCallFailure, StructuringProvider, StructuringRequest

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```[\w]*\n")
_TRAILING_FENCE = re.compile(r"\n```$")


def strip_code_fence(text: str) -> str:
    """Remove a markdown code fence wrapped around a completion."""
    text = text.strip()
    text = _LEADING_FENCE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    return text.strip()


def extract_completion(payload: Any) -> str:
    """Pull ``choices[0].message.content`` out of a response body.

    Raises:
        RemoteCallFailure: If the field is missing or empty
    """
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        raise RemoteCallFailure("Invalid response format from completion API")

    if not isinstance(content, str) or not content.strip():
        raise RemoteCallFailure("Empty completion from completion API")

    return strip_code_fence(content)


class ChatCompletionEngine(StructuringProvider):
    """Sends structuring requests to a chat-completion style HTTP endpoint."""

    def __init__(self, settings: FormatterSettings):
        """Initialize chat-completion engine.

        Args:
            settings: Endpoint, credential, model and timeout
        """
        self.endpoint = settings.endpoint
        self.api_key = settings.api_key
        self.model = settings.model
        self.timeout = aiohttp.ClientTimeout(total=settings.timeout_seconds)

        logger.info(f"ChatCompletionEngine initialized with model: {self.model}")

    def _build_payload(self, request: StructuringRequest) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": request.system_prompt},
                {"role": "user", "content": request.user_prompt},
            ],
            "temperature": request.temperature,
            "top_p": request.top_p,
            "max_tokens": request.max_tokens,
            "stream": False,
        }

    async def complete(self, request: StructuringRequest) -> str:
        """Send a request to the endpoint and get the completion text.

        Args:
            request: Prompts and sampling options

        Returns:
            Completion text with any code fence removed

        Raises:
            RemoteCallFailure: If the API call fails for any reason
        """
        if not self.api_key:
            raise RemoteCallFailure("No API key configured for the completion endpoint")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(self.endpoint, headers=headers, json=self._build_payload(request)) as response:
                    if response.status < 200 or response.status >= 300:
                        error_text = await response.text()
                        logger.error(f"Completion API error ({request.kind}): {response.status} {error_text[:200]}")
                        raise RemoteCallFailure(
                            f"Completion API request failed: {response.status}",
                            status=response.status,
                        )

                    try:
                        result = await response.json(content_type=None)
                    except ValueError as e:
                        raise RemoteCallFailure(f"Completion API returned invalid JSON: {e}", status=response.status)
        except asyncio.TimeoutError:
            raise RemoteCallFailure(f"Completion API timed out after {self.timeout.total}s")
        except aiohttp.ClientError as e:
            raise RemoteCallFailure(f"Completion API transport error: {e}")

        return extract_completion(result)
