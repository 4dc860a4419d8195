"""Server entry point.

Serves the chat API and the NiceGUI page from one uvicorn process, so the
page reaches the API on the same host and port unless API_BASE_URL points
it elsewhere.
"""

import logging
import os
import sys

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from nicegui import ui
from pydantic import BaseModel, Field, field_validator

from assistant_chat.api.app import create_app
from assistant_chat.ui.config import UIConfig, get_ui_config

load_dotenv()

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_STORAGE_SECRET_DEFAULT = "assistant-chat-secret"


class ServerConfig(BaseModel):
    """Settings for the uvicorn process.

    Attributes:
        host: Interface to bind.
        port: Port serving both the API and the page.
        log_level: Root logging level name.
        storage_secret: Secret signing the per-browser NiceGUI storage.
    """

    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(
        default_factory=lambda: int(os.getenv("PORT", "8000")),
        ge=1,
        le=65535,
    )
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    storage_secret: str = Field(
        default_factory=lambda: os.getenv("NICEGUI_STORAGE_SECRET", _STORAGE_SECRET_DEFAULT)
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )


def build_app(server: ServerConfig, ui_config: UIConfig) -> FastAPI:
    """Create the API app and mount the chat page on it."""
    from assistant_chat.ui import chat_page  # noqa: F401 - registers "/"

    app = create_app()
    ui.run_with(
        app,
        title=ui_config.title,
        favicon="💬",
        storage_secret=server.storage_secret,
    )
    return app


def main() -> None:
    server = ServerConfig()
    configure_logging(server.log_level)
    ui_config = get_ui_config()

    app = build_app(server, ui_config)

    logger.info(f"Serving on http://{server.host}:{server.port}")
    logger.info(f"Chat page talks to the API at {ui_config.api_base_url}")
    if server.storage_secret == _STORAGE_SECRET_DEFAULT:
        logger.warning("NICEGUI_STORAGE_SECRET is not set; using the default secret")

    uvicorn.run(
        app,
        host=server.host,
        port=server.port,
        log_level=server.log_level.lower(),
    )


if __name__ == "__main__":
    main()
