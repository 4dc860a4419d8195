"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - make_chunk: Builds serialized completion chunks
    - fake_service: In-memory stand-in for the hosted assistant
    - async_client: HTTPX client for API testing, wired to fake_service
"""

import json
from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from assistant_chat.api import app
from assistant_chat.api.routes import get_optional_service
from assistant_chat.assistant.client import AssistantAPIError
from assistant_chat.models.schemas import AssistantFile, AssistantStatus, ChatMessage


def chunk(content: str | None) -> str:
    """Serialize a completion chunk carrying one text delta."""
    delta = {} if content is None else {"content": content}
    return json.dumps({"id": "chatcmpl-1", "choices": [{"index": 0, "delta": delta}]})


async def iterate(items: list[str]) -> AsyncGenerator[str]:
    """Async iterator over a fixed list of chunks."""
    for item in items:
        yield item


class FakeAssistantService:
    """In-memory assistant used in place of the hosted API."""

    def __init__(self) -> None:
        self.exists = True
        self.assistant_name = "test-assistant"
        self.files = [AssistantFile(name="notes.txt", id="file-1", status="Available")]
        self.chunks = [chunk("Hello"), chunk(" world")]
        self.fail_after: int | None = None
        self.fail_describe = False
        self.fail_files = False
        self.received: list[list[ChatMessage]] = []

    async def describe_assistant(self) -> AssistantStatus:
        if self.fail_describe:
            raise AssistantAPIError("Connection failed: boom")
        return AssistantStatus(exists=self.exists, assistant_name=self.assistant_name)

    async def list_files(self) -> list[AssistantFile]:
        if self.fail_files:
            raise AssistantAPIError("HTTP 500")
        return self.files

    async def stream_chat(self, messages: list[ChatMessage]) -> AsyncGenerator[str]:
        self.received.append(messages)
        for i, item in enumerate(self.chunks):
            if self.fail_after is not None and i >= self.fail_after:
                raise AssistantAPIError("Connection failed: reset")
            yield item


@pytest.fixture
def make_chunk() -> Callable[[str | None], str]:
    return chunk


@pytest.fixture
def fake_service() -> FakeAssistantService:
    return FakeAssistantService()


@pytest.fixture
async def async_client(fake_service: FakeAssistantService) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient bound to the app with the fake assistant injected.
    """
    app.dependency_overrides[get_optional_service] = lambda: fake_service
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
