"""HTTP client the chat page uses to reach the API."""

import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

import httpx

from assistant_chat.chat.session import ChatSession
from assistant_chat.models.schemas import AssistantStatus, ChatMessage, ChatRequest

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """Raised when an API call fails or returns an unusable payload."""

    pass


class ChatStreamError(Exception):
    """Raised when the chat stream fails as a whole."""

    pass


class ApiClient:
    """Thin async wrapper around the assistant chat API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def check_assistant(self) -> AssistantStatus:
        """Fetch the assistant existence status.

        Raises:
            ApiClientError: If the API is unreachable, answers with an error,
                or returns a payload that is not an assistant status.
        """
        try:
            async with self._client() as client:
                response = await client.get("/api/assistants")
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise ApiClientError(f"Connection failed: {e}") from e

        # JSONDecodeError and ValidationError are both ValueErrors
        try:
            return AssistantStatus.model_validate(response.json())
        except ValueError as e:
            raise ApiClientError(f"Invalid assistant status: {e}") from e

    async def fetch_files(self) -> dict[str, Any]:
        """Fetch the raw file-listing payload.

        Connection problems and undecodable bodies are reported as an
        error payload.
        """
        try:
            async with self._client() as client:
                response = await client.get("/api/files")
                response.raise_for_status()
        except httpx.HTTPError as e:
            return {"status": "error", "message": str(e)}
        try:
            payload = response.json()
        except ValueError as e:
            return {"status": "error", "message": f"Invalid file list: {e}"}
        if not isinstance(payload, dict):
            return {"status": "error", "message": "Invalid file list"}
        return payload

    async def stream_chat(self, history: list[ChatMessage]) -> AsyncGenerator[str]:
        """Consume the SSE stream from /api/chat.

        Args:
            history: Conversation so far, oldest first.

        Yields:
            Serialized completion chunks, undecoded.

        Raises:
            ChatStreamError: On HTTP errors, connection failures, or an
                ``error`` event from the server.
        """
        request = ChatRequest(messages=history)
        event = "message"

        async with self._client() as client:
            try:
                async with client.stream(
                    "POST",
                    "/api/chat",
                    json=request.model_dump(mode="json"),
                    headers={"Accept": "text/event-stream"},
                ) as response:
                    response.raise_for_status()
                    async for line in response.aiter_lines():
                        if not line:
                            event = "message"
                            continue
                        if line.startswith("event:"):
                            event = line[6:].strip()
                            continue
                        if not line.startswith("data:"):
                            continue
                        data = line[5:].strip()
                        if event == "error":
                            raise ChatStreamError(_error_message(data))
                        yield data
            except httpx.HTTPStatusError as e:
                raise ChatStreamError(f"HTTP {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise ChatStreamError(f"Connection failed: {e}") from e


def _error_message(data: str) -> str:
    try:
        return str(json.loads(data).get("error", data))
    except (ValueError, AttributeError):
        return data


async def load_assistant_state(api: ApiClient, session: ChatSession) -> None:
    """Run the existence check and file listing for a fresh page.

    Always leaves the session out of the loading state.
    """
    try:
        status = await api.check_assistant()
    except ApiClientError as e:
        logger.error(f"Error connecting to the Assistant: {e}")
        session.apply_connection_error()
        return

    session.apply_assistant_status(status)
    if session.assistant_exists:
        session.apply_files(await api.fetch_files())
