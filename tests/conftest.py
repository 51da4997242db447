"""Pytest configuration and fixtures for OSCAR tests."""

import pytest
import tempfile
import logging
import uuid
from typing import List

from oscar.config import OscarConfig
from oscar.formatting.base import RemoteCallFailure, StructuringProvider, StructuringRequest


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast isolated tests")
    config.addinivalue_line("markers", "integration: tests spanning several components")


class FakeProvider(StructuringProvider):
    """Provider returning canned completions, or failing, and recording requests."""

    def __init__(self, format_reply=None, title_reply=None, error=None):
        self.format_reply = format_reply
        self.title_reply = title_reply
        self.error = error
        self.requests: List[StructuringRequest] = []

    async def complete(self, request: StructuringRequest) -> str:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        reply = self.format_reply if request.kind == "format" else self.title_reply
        if reply is None:
            raise RemoteCallFailure(f"No canned {request.kind} reply")
        return reply


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def test_config(temp_data_dir, monkeypatch):
    """In-memory configuration writing under a temporary directory."""
    monkeypatch.delenv("OSCAR_API_KEY", raising=False)
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)
    return OscarConfig(config={
        "storage": {"data_directory": temp_data_dir},
        "logging": {"file_path": f"{temp_data_dir}/logs/oscar.log", "console_output": False},
    })


@pytest.fixture
def topics():
    """Unique pub/sub topic names so tests do not see each other's messages."""
    suffix = uuid.uuid4().hex[:8]
    return f"test_update_{suffix}", f"test_stop_{suffix}"


@pytest.fixture
def make_provider():
    return FakeProvider


@pytest.fixture
def failing_provider():
    return FakeProvider(error=RemoteCallFailure("Completion API request failed: 503", status=503))


@pytest.fixture
def meeting_transcript():
    return (
        "We discussed the budget. We need to finalize the report by Friday. "
        "Is the deadline fixed?"
    )
