"""FastAPI application for the assistant chat API.

Builds the app that fronts the hosted assistant: upstream failures are
mapped to a 502 in one place, and startup reports whether the assistant
credentials are present.
"""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from assistant_chat import __version__
from assistant_chat.api.routes import get_optional_service
from assistant_chat.api.routes import router as assistant_router
from assistant_chat.assistant.client import AssistantAPIError, AssistantService
from assistant_chat.assistant.config import get_assistant_config
from assistant_chat.chat.session import CONNECTION_ERROR

logger = logging.getLogger(__name__)


def cors_origins() -> list[str]:
    """Allowed origins from the comma-separated CORS_ORIGINS variable."""
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    try:
        config = get_assistant_config()
    except ValueError as e:
        logger.warning(f"Assistant is not configured, chat is disabled: {e}")
    else:
        logger.info(f"Proxying assistant '{config.assistant_name}' at {config.data_url}")
    yield
    logger.info("Assistant chat API stopped")


async def assistant_error_handler(request: Request, exc: AssistantAPIError) -> JSONResponse:
    """Report an upstream assistant failure as 502 Bad Gateway."""
    logger.error(f"{request.method} {request.url.path} failed upstream: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": CONNECTION_ERROR},
    )


def create_app() -> FastAPI:
    application = FastAPI(
        title="Assistant Chat API",
        description=(
            "Thin pass-through to a hosted Pinecone Assistant. Streams chat "
            "completions as Server-Sent Events and exposes the assistant's "
            "file list and existence check."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    origins = cors_origins()
    application.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers refuse credentialed requests to a wildcard origin
        allow_credentials=origins != ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    application.add_exception_handler(AssistantAPIError, assistant_error_handler)
    application.include_router(assistant_router)

    @application.get("/health")
    async def health_check(
        service: AssistantService | None = Depends(get_optional_service),
    ) -> dict[str, str | bool]:
        return {
            "status": "healthy",
            "service": "assistant-chat",
            "assistant_configured": service is not None,
        }

    return application


app = create_app()
