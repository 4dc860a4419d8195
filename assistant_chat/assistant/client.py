"""Client for the hosted Pinecone Assistant.

Wraps the three upstream calls the app needs behind one service:

1. **Describe assistant** - backs the existence check that decides whether
   the chat UI or the setup panel is shown.
2. **List files** - the documents the assistant answers from.
3. **Chat completions** - OpenAI-compatible streaming endpoint. Chunks are
   passed through as serialized JSON; decoding happens in the chat core.

The service holds no per-request state. A transport can be injected so tests
can stand in for the upstream API without network access.
"""

import logging
from collections.abc import AsyncGenerator

import httpx

from assistant_chat.assistant.config import AssistantConfig, get_assistant_config
from assistant_chat.models.schemas import AssistantFile, AssistantStatus, ChatMessage

logger = logging.getLogger(__name__)

_SSE_DATA_PREFIX = "data:"
_SSE_DONE = "[DONE]"


class AssistantAPIError(Exception):
    """Raised when the assistant API fails or is unreachable."""

    pass


class AssistantService:
    """Service for talking to the hosted assistant.

    Wraps the Pinecone Assistant HTTP API with:
    - Configuration from the environment
    - A clean async generator for streamed completions
    - Centralized error handling
    """

    def __init__(
        self,
        config: AssistantConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the assistant service.

        Args:
            config: Optional assistant configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport, used by tests.
        """
        self._config = config or get_assistant_config()
        self._transport = transport

    @property
    def assistant_name(self) -> str:
        return self._config.assistant_name

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={
                "Api-Key": self._config.api_key,
                "X-Pinecone-API-Version": "2025-01",
            },
            timeout=self._config.timeout,
            transport=self._transport,
        )

    async def describe_assistant(self) -> AssistantStatus:
        """Check whether the configured assistant exists.

        Returns:
            AssistantStatus; ``exists`` is False when the API answers 404.

        Raises:
            AssistantAPIError: On any other HTTP or connection failure.
        """
        url = f"{self._config.control_url}/assistant/assistants/{self.assistant_name}"
        async with self._client() as client:
            try:
                response = await client.get(url)
            except httpx.RequestError as e:
                raise AssistantAPIError(f"Connection failed: {e}") from e

        if response.status_code == httpx.codes.NOT_FOUND:
            logger.warning(f"Assistant not found: {self.assistant_name}")
            return AssistantStatus(exists=False, assistant_name=self.assistant_name)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AssistantAPIError(f"HTTP {e.response.status_code}") from e

        return AssistantStatus(exists=True, assistant_name=self.assistant_name)

    async def list_files(self) -> list[AssistantFile]:
        """List files uploaded to the assistant.

        Raises:
            AssistantAPIError: If the request fails.
        """
        url = f"{self._config.control_url}/assistant/files/{self.assistant_name}"
        async with self._client() as client:
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise AssistantAPIError(f"HTTP {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise AssistantAPIError(f"Connection failed: {e}") from e

        files = response.json().get("files") or []
        return [AssistantFile.model_validate(f) for f in files]

    async def stream_chat(
        self,
        messages: list[ChatMessage],
    ) -> AsyncGenerator[str]:
        """Stream serialized completion chunks for a conversation.

        Args:
            messages: Conversation history, oldest first.

        Yields:
            Raw JSON chunk strings in arrival order.

        Raises:
            AssistantAPIError: If the request fails before or during streaming.
        """
        url = f"{self._config.data_url}/assistant/chat/{self.assistant_name}/chat/completions"
        payload = {
            "messages": [m.model_dump(mode="json") for m in messages],
            "stream": True,
        }

        async with self._client() as client:
            try:
                async with client.stream("POST", url, json=payload) as response:
                    response.raise_for_status()
                    async for line in response.aiter_lines():
                        if not line.startswith(_SSE_DATA_PREFIX):
                            continue
                        data = line[len(_SSE_DATA_PREFIX) :].strip()
                        if not data or data == _SSE_DONE:
                            continue
                        yield data
            except httpx.HTTPStatusError as e:
                raise AssistantAPIError(f"HTTP {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise AssistantAPIError(f"Connection failed: {e}") from e


# Module-level singleton instance
_assistant_service: AssistantService | None = None


def get_assistant_service() -> AssistantService:
    """Get or create the global assistant service.

    Returns:
        The AssistantService instance.

    Raises:
        ValueError: If the assistant configuration is incomplete.
    """
    global _assistant_service
    if _assistant_service is None:
        _assistant_service = AssistantService()
    return _assistant_service
