"""FastAPI endpoints for the assistant chat.

Thin HTTP layer over the hosted assistant with async request handling.
Supports Server-Sent Events for real-time chat streaming.

Endpoints:
    - GET /health: Service health status
    - GET /api/assistants: Assistant existence check
    - GET /api/files: Assistant file listing
    - POST /api/chat: Streaming chat completion
"""

from assistant_chat.api.app import app, create_app

__all__ = ["app", "create_app"]
