"""Unit tests for AssistantService against a mocked upstream API."""

import json

import httpx
import pytest
import pytest_check as check

from assistant_chat.assistant.client import (
    AssistantAPIError,
    AssistantService,
    get_assistant_service,
)
from assistant_chat.assistant.config import AssistantConfig
from assistant_chat.models.schemas import ChatMessage, Role

CONFIG = AssistantConfig(
    api_key="pc-test",
    assistant_name="docs",
    control_url="https://control.test",
    data_url="https://data.test",
)


def service_for(handler) -> AssistantService:
    return AssistantService(config=CONFIG, transport=httpx.MockTransport(handler))


class TestDescribeAssistant:
    """Tests for the existence check."""

    async def test_existing_assistant(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"name": "docs", "status": "Ready"})

        status = await service_for(handler).describe_assistant()

        check.is_true(status.exists)
        check.equal(status.assistant_name, "docs")
        check.equal(str(requests[0].url), "https://control.test/assistant/assistants/docs")
        check.equal(requests[0].headers["Api-Key"], "pc-test")

    async def test_missing_assistant(self) -> None:
        status = await service_for(lambda r: httpx.Response(404)).describe_assistant()

        assert status.exists is False

    async def test_server_error_raises(self) -> None:
        with pytest.raises(AssistantAPIError, match="HTTP 500"):
            await service_for(lambda r: httpx.Response(500)).describe_assistant()

    async def test_connection_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(AssistantAPIError, match="Connection failed"):
            await service_for(handler).describe_assistant()


class TestListFiles:
    """Tests for the file listing."""

    async def test_returns_files(self) -> None:
        payload = {
            "files": [
                {"name": "a.pdf", "id": "f1", "status": "Available", "size": 42, "extra": 1},
                {"name": "b.txt", "id": "f2"},
            ]
        }

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/assistant/files/docs"
            return httpx.Response(200, json=payload)

        files = await service_for(handler).list_files()

        check.equal([f.name for f in files], ["a.pdf", "b.txt"])
        check.equal(files[0].size, 42)

    async def test_missing_files_key(self) -> None:
        files = await service_for(lambda r: httpx.Response(200, json={})).list_files()

        assert files == []

    async def test_error_raises(self) -> None:
        with pytest.raises(AssistantAPIError):
            await service_for(lambda r: httpx.Response(401)).list_files()


class TestStreamChat:
    """Tests for the streaming chat pass-through."""

    async def test_yields_raw_chunks(self) -> None:
        body = (
            'data:{"choices":[{"delta":{"content":"Hi"}}]}\n\n'
            ": keep-alive\n\n"
            'data: {"choices":[{"delta":{"content":"!"}}]}\n\n'
            "data: [DONE]\n\n"
        )
        captured: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(json.loads(request.content))
            return httpx.Response(
                200, text=body, headers={"content-type": "text/event-stream"}
            )

        service = service_for(handler)
        messages = [ChatMessage(role=Role.USER, content="Hello")]

        chunks = [c async for c in service.stream_chat(messages)]

        check.equal(
            chunks,
            [
                '{"choices":[{"delta":{"content":"Hi"}}]}',
                '{"choices":[{"delta":{"content":"!"}}]}',
            ],
        )
        check.equal(
            captured[0],
            {"messages": [{"role": "user", "content": "Hello"}], "stream": True},
        )

    async def test_http_error_raises(self) -> None:
        service = service_for(lambda r: httpx.Response(503))

        with pytest.raises(AssistantAPIError, match="HTTP 503"):
            async for _ in service.stream_chat([ChatMessage(role=Role.USER, content="x")]):
                pass


class TestGetAssistantService:
    """Tests for the get_assistant_service singleton."""

    def test_singleton_returns_same_instance(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import assistant_chat.assistant.client as client_module

        monkeypatch.setattr(client_module, "_assistant_service", None)
        monkeypatch.setenv("PINECONE_API_KEY", "pc-key")
        monkeypatch.setenv("PINECONE_ASSISTANT_NAME", "docs")

        first = get_assistant_service()
        second = get_assistant_service()

        assert first is second
        assert first.assistant_name == "docs"

    def test_missing_config_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import assistant_chat.assistant.client as client_module

        monkeypatch.setattr(client_module, "_assistant_service", None)
        monkeypatch.delenv("PINECONE_API_KEY", raising=False)
        monkeypatch.delenv("PINECONE_ASSISTANT_NAME", raising=False)

        with pytest.raises(ValueError):
            get_assistant_service()
