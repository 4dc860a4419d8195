"""Unit tests for individual components in isolation.

Coverage:
    - chat/: Transcript transformations, stream consumer, references, session
    - assistant/: Configuration and the upstream HTTP client
    - ui/: API client, preferences and markdown formatting

Upstream HTTP is replaced with httpx.MockTransport.
"""
