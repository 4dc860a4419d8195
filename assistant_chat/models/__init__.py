"""Pydantic models for the chat transcript and the assistant API.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Message: A transcript turn (user or assistant)
    - Reference: A file cited in an assistant response
    - ChatMessage / ChatRequest: Payload sent to the chat endpoint
    - CompletionChunk: One serialized delta of a streamed response
    - AssistantFile / FilesResponse: Assistant file listing
    - AssistantStatus: Assistant existence check result
"""

from assistant_chat.models.schemas import (
    AssistantFile,
    AssistantStatus,
    ChatMessage,
    ChatRequest,
    CompletionChunk,
    FilesResponse,
    Message,
    Reference,
    Role,
)

__all__ = [
    "AssistantFile",
    "AssistantStatus",
    "ChatMessage",
    "ChatRequest",
    "CompletionChunk",
    "FilesResponse",
    "Message",
    "Reference",
    "Role",
]
