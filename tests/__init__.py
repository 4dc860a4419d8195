"""Test package for Assistant Chat.

Unit tests cover isolated logic; integration tests drive the real FastAPI
app end to end.

Structure:
    - unit/: Chat core, configuration, upstream client and UI helpers
    - integration/: API routes and full chat turns over HTTP

The hosted assistant is always replaced by an in-memory fake; no network
access or API key is needed. Leverages pytest with pytest-check for soft
assertions.
"""
