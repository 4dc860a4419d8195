"""Chat core: transcript state and response streaming.

Independent of both the HTTP layer and the NiceGUI page.

Responsibilities:
    - Transcript values and the store the view binds to
    - Draining streamed completion chunks into the open assistant message
    - Extracting cited file names from finished responses
    - Session state for the page (loading, streaming, errors, files)
"""

from assistant_chat.chat.references import extract_references, link_references
from assistant_chat.chat.session import ChatSession
from assistant_chat.chat.stream import ChunkDecodeError, consume_stream, parse_delta
from assistant_chat.chat.transcript import Transcript, TranscriptStore

__all__ = [
    "ChatSession",
    "ChunkDecodeError",
    "Transcript",
    "TranscriptStore",
    "consume_stream",
    "extract_references",
    "link_references",
    "parse_delta",
]
