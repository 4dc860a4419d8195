"""Chat session state owned by the page.

Holds the transcript store together with the loading, streaming and error
flags the view renders from. Keeping this outside the page makes the whole
submit flow testable without NiceGUI.
"""

import logging
from collections.abc import AsyncIterable, Callable
from typing import Any, Literal

from pydantic import ValidationError

from assistant_chat.chat.stream import consume_stream
from assistant_chat.chat.transcript import TranscriptStore
from assistant_chat.models.schemas import (
    AssistantFile,
    AssistantStatus,
    ChatMessage,
    FilesResponse,
    Reference,
)

logger = logging.getLogger(__name__)

ChatStream = Callable[[list[ChatMessage]], AsyncIterable[str | bytes]]

CHAT_ERROR = "An error occurred while chatting."
MISSING_ASSISTANT_ERROR = "Please create an Assistant"
CONNECTION_ERROR = "Error connecting to the Assistant"

REMEDIATION_STEPS = (
    "Create a Pinecone Assistant at https://app.pinecone.io",
    "Export the environment variable PINECONE_ASSISTANT_NAME with the value "
    "of your assistant's name",
    "Restart your application",
)


class ChatSession:
    """Manages chat state for a single page visit.

    Attributes:
        store: The transcript store.
        loading: True until the assistant existence check completes.
        assistant_exists: Result of the existence check.
        assistant_name: Name reported by the existence check.
        is_streaming: True while a response stream is being drained.
        error: User-visible error text, empty when there is none.
        files: Files known to the assistant.
        referenced_files: References extracted from the latest response.
        show_assistant_files: Whether the file panel is shown.
        show_citations: Whether references are listed under responses.
    """

    def __init__(
        self,
        on_change: Callable[[], None] | None = None,
        show_assistant_files: bool = False,
        show_citations: bool = True,
    ) -> None:
        self.store = TranscriptStore(on_change=on_change)
        self.loading: bool = True
        self.assistant_exists: bool = False
        self.assistant_name: str = ""
        self.is_streaming: bool = False
        self.error: str = ""
        self.files: list[AssistantFile] = []
        self.referenced_files: list[Reference] = []
        self.show_assistant_files = show_assistant_files
        self.show_citations = show_citations

    @property
    def view(self) -> Literal["loading", "chat", "setup"]:
        if self.loading:
            return "loading"
        return "chat" if self.assistant_exists else "setup"

    def apply_assistant_status(self, status: AssistantStatus) -> None:
        self.loading = False
        self.assistant_exists = status.exists
        self.assistant_name = status.assistant_name
        if not status.exists:
            self.error = MISSING_ASSISTANT_ERROR

    def apply_connection_error(self) -> None:
        self.loading = False
        self.assistant_exists = False
        self.error = CONNECTION_ERROR

    def apply_files(self, payload: dict[str, Any]) -> None:
        """Record the file list from a file-listing response.

        Anything other than a "success" payload is logged and ignored.
        """
        try:
            response = FilesResponse.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Error fetching files: {e}")
            return

        if response.status != "success":
            logger.error(f"Error fetching files: {response.message}")
            return

        self.files = response.files

    async def submit(self, text: str, chat: ChatStream) -> bool:
        """Send a user message and stream the assistant's reply.

        Args:
            text: Raw input text.
            chat: Called with the conversation history; returns the chunk stream.

        Returns:
            False if the input was rejected (blank, or a stream is active),
            True once the turn has finished, successfully or not.
        """
        if not text.strip():
            return False
        if self.is_streaming:
            logger.warning("Submission rejected: a response is still streaming")
            return False

        self.is_streaming = True
        self.error = ""
        try:
            self.store.append_user_message(text)
            history = self.store.history()
            self.store.append_assistant_placeholder()

            await consume_stream(chat(history), self.store)

            last = self.store.last
            self.referenced_files = list(last.references or ()) if last else []
        except Exception as e:
            logger.error(f"Error in chat: {e}")
            self.error = CHAT_ERROR
            self.store.close_last_assistant()
        finally:
            self.is_streaming = False

        return True
