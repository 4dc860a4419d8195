"""Stream consumer that drains assistant deltas into the transcript.

Reads serialized completion chunks one at a time, accumulates their text
into the open assistant message, and extracts references once the stream
is exhausted.
"""

import logging
from collections.abc import AsyncIterable

from pydantic import ValidationError

from assistant_chat.chat.references import extract_references
from assistant_chat.chat.transcript import TranscriptStore
from assistant_chat.models.schemas import CompletionChunk

logger = logging.getLogger(__name__)


class ChunkDecodeError(Exception):
    """Raised when a streamed chunk cannot be decoded."""

    pass


def parse_delta(chunk: str | bytes) -> str | None:
    """Decode one serialized chunk into its text delta.

    Args:
        chunk: JSON-encoded completion chunk.

    Returns:
        The delta text, or None when the chunk carries no content.

    Raises:
        ChunkDecodeError: If the chunk is not a valid completion chunk.
    """
    try:
        parsed = CompletionChunk.model_validate_json(chunk)
    except ValidationError as e:
        raise ChunkDecodeError(f"Invalid chunk: {e.error_count()} validation error(s)") from e
    return parsed.text


async def consume_stream(
    chunks: AsyncIterable[str | bytes],
    store: TranscriptStore,
) -> str:
    """Drain a chunk stream into the open assistant message.

    Malformed chunks are logged and skipped. Errors raised by the stream
    itself propagate; the message keeps the content accumulated so far.

    Args:
        chunks: Serialized completion chunks in arrival order.
        store: Transcript whose last message is the open assistant message.

    Returns:
        The final accumulated text.
    """
    accumulated = ""

    async for chunk in chunks:
        try:
            content = parse_delta(chunk)
        except ChunkDecodeError as e:
            logger.warning(f"Skipping malformed chunk: {e}")
            content = None

        if content:
            accumulated += content

        store.update_last_assistant_content(accumulated)

    store.attach_references(extract_references(accumulated))
    return accumulated
