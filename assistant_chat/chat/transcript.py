"""Transcript store for the chat view.

A transcript is an immutable tuple of messages. The module-level functions
are pure transformations that return a new transcript; ``TranscriptStore``
holds the current value and notifies the view after each change.
"""

import logging
from collections.abc import Callable, Iterable

from assistant_chat.models.schemas import ChatMessage, Message, Reference, Role

logger = logging.getLogger(__name__)

Transcript = tuple[Message, ...]


def _open_assistant_index(transcript: Transcript) -> int | None:
    """Index of the last message if it is an assistant message still streaming."""
    if not transcript:
        return None
    last = transcript[-1]
    if last.role is Role.ASSISTANT and last.streaming:
        return len(transcript) - 1
    return None


def _replace_at(transcript: Transcript, index: int, message: Message) -> Transcript:
    return transcript[:index] + (message,) + transcript[index + 1 :]


def append_user_message(transcript: Transcript, text: str) -> Transcript:
    return transcript + (Message(role=Role.USER, content=text),)


def append_assistant_placeholder(transcript: Transcript) -> Transcript:
    placeholder = Message(role=Role.ASSISTANT, references=(), streaming=True)
    return transcript + (placeholder,)


def update_last_assistant_content(transcript: Transcript, content: str) -> Transcript:
    """Replace the content of the open assistant message.

    Returns the transcript unchanged when the last message is not an
    assistant message that is still streaming.
    """
    index = _open_assistant_index(transcript)
    if index is None:
        return transcript
    updated = transcript[index].model_copy(update={"content": content})
    return _replace_at(transcript, index, updated)


def attach_references(
    transcript: Transcript, references: Iterable[Reference]
) -> Transcript:
    """Set references on the open assistant message and close it.

    After this call the message's content is final.
    """
    index = _open_assistant_index(transcript)
    if index is None:
        logger.debug("No open assistant message to attach references to")
        return transcript
    updated = transcript[index].model_copy(
        update={"references": tuple(references), "streaming": False}
    )
    return _replace_at(transcript, index, updated)


def close_last_assistant(transcript: Transcript) -> Transcript:
    """Close the open assistant message, keeping whatever content it has."""
    index = _open_assistant_index(transcript)
    if index is None:
        return transcript
    updated = transcript[index].model_copy(update={"streaming": False})
    return _replace_at(transcript, index, updated)


def to_history(transcript: Transcript) -> list[ChatMessage]:
    """Role/content pairs for the assistant API.

    Open and empty messages are left out.
    """
    return [
        ChatMessage(role=message.role, content=message.content)
        for message in transcript
        if not message.streaming and message.content.strip()
    ]


class TranscriptStore:
    """Holds the current transcript and notifies a listener on every change.

    Each operation reassigns ``messages`` to a new tuple, so a reader always
    sees a consistent snapshot.
    """

    def __init__(self, on_change: Callable[[], None] | None = None) -> None:
        self.messages: Transcript = ()
        self.on_change = on_change

    def _set(self, transcript: Transcript) -> None:
        self.messages = transcript
        if self.on_change is not None:
            self.on_change()

    @property
    def last(self) -> Message | None:
        return self.messages[-1] if self.messages else None

    @property
    def has_open_message(self) -> bool:
        return _open_assistant_index(self.messages) is not None

    def append_user_message(self, text: str) -> None:
        self._set(append_user_message(self.messages, text))

    def append_assistant_placeholder(self) -> None:
        self._set(append_assistant_placeholder(self.messages))

    def update_last_assistant_content(self, content: str) -> None:
        self._set(update_last_assistant_content(self.messages, content))

    def attach_references(self, references: Iterable[Reference]) -> None:
        self._set(attach_references(self.messages, references))

    def close_last_assistant(self) -> None:
        self._set(close_last_assistant(self.messages))

    def history(self) -> list[ChatMessage]:
        return to_history(self.messages)
