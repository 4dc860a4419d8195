"""UI configuration loaded from the environment.

Kept separate from the assistant configuration so the page can still render
its setup panel when the assistant credentials are missing.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}

# Key for the persisted dark-mode preference
DARK_MODE_KEY = "darkMode"

# Bind-all addresses the page cannot connect to directly
_WILDCARD_HOSTS = {"", "0.0.0.0", "::"}


def local_api_url() -> str:
    """URL of the API served by this process, from HOST and PORT."""
    host = os.getenv("HOST", "0.0.0.0")
    if host in _WILDCARD_HOSTS:
        host = "127.0.0.1"
    return f"http://{host}:{os.getenv('PORT', '8000')}"


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


class UIConfig(BaseModel):
    """Settings for the chat page.

    Attributes:
        api_base_url: Base URL of the chat API the page talks to. Defaults
            to the API mounted in this process.
        title: Page and header title.
        show_assistant_files: Whether the assistant's file list is shown.
        show_citations: Whether references are listed under responses.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL") or local_api_url()
    )
    title: str = Field(default_factory=lambda: os.getenv("APP_TITLE", "Pinecone Assistant"))
    show_assistant_files: bool = Field(
        default_factory=lambda: _env_flag("SHOW_ASSISTANT_FILES", False)
    )
    show_citations: bool = Field(default_factory=lambda: _env_flag("SHOW_CITATIONS", True))


def get_ui_config() -> UIConfig:
    return UIConfig()
