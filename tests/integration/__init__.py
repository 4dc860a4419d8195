"""Integration tests for components working together as a system.

Coverage:
    - API endpoints with real HTTP requests through ASGITransport
    - SSE pass-through of completion chunks
    - Full chat turns from ChatSession through ApiClient to the API

The hosted assistant is injected through FastAPI dependency overrides.
"""
