"""Pytest configuration file."""

import os

os.environ.setdefault("LOG_TO_FILE", "false")

from typing import Any  # noqa: E402

import pytest  # noqa: E402
from legal_intent.models.adapter import ChatMessage  # noqa: E402


class FakeCompletionService:
    """Completion service double that records calls and replays a canned reply."""

    def __init__(self, reply: str | None = None, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[dict[str, Any]] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def complete(
        self,
        messages: list[ChatMessage],
        response_format: str | None = None,
        **kwargs: Any,
    ) -> str:
        self.calls.append(
            {"messages": messages, "response_format": response_format, **kwargs}
        )
        if self.error is not None:
            raise self.error
        return self.reply or ""


@pytest.fixture
def fake_service():
    """Factory for completion doubles: ``fake_service(reply=...)``."""
    return FakeCompletionService


@pytest.fixture
def failing_service() -> FakeCompletionService:
    return FakeCompletionService(error=TimeoutError("upstream timed out"))
