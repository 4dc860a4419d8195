"""Pass-through endpoints for the hosted assistant.

Handles the existence check, file listing, and streaming chat. Chat chunks
are forwarded as Server-Sent Events without decoding them.
"""

import json
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from assistant_chat.assistant.client import (
    AssistantAPIError,
    AssistantService,
    get_assistant_service,
)
from assistant_chat.models.schemas import (
    AssistantStatus,
    ChatMessage,
    ChatRequest,
    FilesResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["assistant"])


def get_optional_service() -> AssistantService | None:
    """Resolve the assistant service, or None when it is not configured."""
    try:
        return get_assistant_service()
    except ValueError as e:
        logger.warning(f"Assistant is not configured: {e}")
        return None


def _require_service(service: AssistantService | None) -> AssistantService:
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Assistant is not configured",
        )
    return service


@router.get("/assistants", response_model=AssistantStatus)
async def check_assistant(
    service: AssistantService | None = Depends(get_optional_service),
) -> AssistantStatus:
    """Report whether the configured assistant exists.

    An unreachable assistant API surfaces as 502 through the app's
    AssistantAPIError handler.
    """
    if service is None:
        return AssistantStatus(exists=False)

    return await service.describe_assistant()


@router.get("/files", response_model=FilesResponse, response_model_exclude_none=True)
async def list_files(
    service: AssistantService | None = Depends(get_optional_service),
) -> FilesResponse:
    """List the assistant's files.

    Failures are reported in the payload rather than as an HTTP error.
    """
    if service is None:
        return FilesResponse(status="error", message="Assistant is not configured")

    try:
        files = await service.list_files()
    except AssistantAPIError as e:
        logger.error(f"Error fetching files: {e}")
        return FilesResponse(status="error", message=str(e))

    return FilesResponse(status="success", files=files)


async def _event_stream(
    service: AssistantService,
    messages: list[ChatMessage],
) -> AsyncGenerator[str]:
    """Forward upstream chunks as SSE frames.

    An upstream failure ends the stream with a single ``error`` event.
    """
    try:
        async for chunk in service.stream_chat(messages):
            yield f"data: {chunk}\n\n"
    except AssistantAPIError as e:
        logger.error(f"Chat stream failed: {e}")
        yield f"event: error\ndata: {json.dumps({'error': str(e)})}\n\n"


@router.post("/chat")
async def chat(
    request: ChatRequest,
    service: AssistantService | None = Depends(get_optional_service),
) -> StreamingResponse:
    """Stream the assistant's reply to a conversation.

    Args:
        request: Conversation history, oldest first.

    Returns:
        A text/event-stream of serialized completion chunks.

    Raises:
        422: Empty history or blank message content.
        503: Assistant is not configured.
    """
    service = _require_service(service)
    logger.info(f"Chat request with {len(request.messages)} message(s)")

    return StreamingResponse(
        _event_stream(service, request.messages),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
