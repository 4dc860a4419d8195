"""Hosted assistant integration.

Talks to the Pinecone Assistant HTTP API on behalf of the chat server.

Responsibilities:
    - Configuration from environment variables
    - Assistant existence check
    - Assistant file listing
    - Streaming chat completions as raw serialized chunks

Maintains clean separation from the HTTP layer and the chat core.
"""

from assistant_chat.assistant.client import (
    AssistantAPIError,
    AssistantService,
    get_assistant_service,
)
from assistant_chat.assistant.config import AssistantConfig, get_assistant_config

__all__ = [
    "AssistantAPIError",
    "AssistantConfig",
    "AssistantService",
    "get_assistant_config",
    "get_assistant_service",
]
