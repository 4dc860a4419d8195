import uuid
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Speaker of a transcript message."""

    USER = "user"
    ASSISTANT = "assistant"


class Reference(BaseModel):
    """A file-like token cited in an assistant response.

    Attributes:
        name: The extracted file name.
        url: Link to the file, when one is known.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    url: str | None = None


class Message(BaseModel):
    """A single turn in the chat transcript.

    Messages are immutable values. The transcript functions build updated
    copies instead of mutating a message in place.

    Attributes:
        id: Unique identifier for the message.
        role: Who wrote the message.
        content: Message text, growing while the message streams.
        timestamp: Creation time (UTC).
        references: Cited files, present only on assistant messages.
        streaming: Whether the message is still receiving deltas.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    role: Role
    content: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    references: tuple[Reference, ...] | None = None
    streaming: bool = False


class ChatMessage(BaseModel):
    """A role/content pair sent to the assistant API.

    Attributes:
        role: The speaker identifier (user or assistant).
        content: The message text.
    """

    role: Role
    content: str = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def reject_blank_content(cls, v: str) -> str:
        """Reject whitespace-only content."""
        if not v.strip():
            raise ValueError("Message content must not be blank")
        return v


class ChatRequest(BaseModel):
    """Request payload for the streaming chat endpoint.

    Attributes:
        messages: Conversation history, oldest first.
    """

    messages: list[ChatMessage] = Field(..., min_length=1)


class ChunkDelta(BaseModel):
    content: str | None = None


class ChunkChoice(BaseModel):
    delta: ChunkDelta = Field(default_factory=ChunkDelta)


class CompletionChunk(BaseModel):
    """One serialized chunk of a streamed chat completion.

    Only the fields the stream consumer reads are modelled; everything else
    in the upstream payload is ignored.
    """

    choices: list[ChunkChoice]

    @property
    def text(self) -> str | None:
        """Text delta of the first choice, if any."""
        if not self.choices:
            return None
        return self.choices[0].delta.content


class AssistantFile(BaseModel):
    """A file uploaded to the assistant.

    Attributes:
        name: File name as shown to users.
        id: Upstream file identifier.
        status: Processing status reported by the assistant API.
        size: File size in bytes.
        created_on: Upload timestamp as reported upstream.
        signed_url: Temporary download link, when provided.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    id: str | None = None
    status: str | None = None
    size: int | None = None
    created_on: str | None = None
    signed_url: str | None = None


class AssistantStatus(BaseModel):
    """Result of the assistant existence check.

    Attributes:
        exists: Whether the configured assistant is reachable.
        assistant_name: Configured assistant name.
    """

    exists: bool
    assistant_name: str = ""


class FilesResponse(BaseModel):
    """Payload returned by the file-listing endpoint.

    Attributes:
        status: "success" or "error".
        files: Files known to the assistant (empty on error).
        message: Error description when status is not "success".
    """

    status: str
    files: list[AssistantFile] = Field(default_factory=list)
    message: str | None = None
