"""Assistant configuration with environment variable loading.

Pydantic-based configuration for the hosted Pinecone Assistant.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class AssistantConfig(BaseModel):
    """Configuration for the hosted assistant.

    Attributes:
        api_key: Pinecone API key.
        assistant_name: Name of the assistant to chat with.
        control_url: Base URL for assistant and file management calls.
        data_url: Base URL for chat completion calls.
        timeout: Request timeout in seconds.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("PINECONE_API_KEY", ""),
        description="API key for the Pinecone Assistant",
    )
    assistant_name: str = Field(
        default_factory=lambda: os.getenv("PINECONE_ASSISTANT_NAME", ""),
        description="Name of the assistant to chat with",
    )
    control_url: str = Field(
        default_factory=lambda: os.getenv("PINECONE_CONTROL_URL", "https://api.pinecone.io"),
        description="Base URL for assistant and file management",
    )
    data_url: str = Field(
        default_factory=lambda: os.getenv(
            "PINECONE_ASSISTANT_URL", "https://prod-1-data.ke.pinecone.io"
        ),
        description="Base URL for chat completions",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("ASSISTANT_TIMEOUT", "120")),
        gt=0.0,
        description="Request timeout in seconds",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set PINECONE_API_KEY in .env")
        return v.strip()

    @field_validator("assistant_name")
    @classmethod
    def validate_assistant_name(cls, v: str) -> str:
        """Validate that an assistant name is provided."""
        if not v or not v.strip():
            raise ValueError(
                "Assistant name required. Set PINECONE_ASSISTANT_NAME in .env"
            )
        return v.strip()

    @field_validator("control_url", "data_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def get_assistant_config() -> AssistantConfig:
    """Create assistant configuration from environment.

    Returns:
        Configured AssistantConfig instance.

    Raises:
        ValueError: If the API key or assistant name is not set.
    """
    return AssistantConfig()
