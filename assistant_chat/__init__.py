"""Assistant Chat - streaming chat front end for a hosted Pinecone Assistant.

Combines FastAPI for HTTP streaming, NiceGUI for the chat page,
httpx for upstream calls, and Pydantic for data validation.

Components:
    - api: HTTP endpoints and streaming responses
    - assistant: Hosted assistant client and configuration
    - chat: Transcript store, stream consumer, reference extraction
    - ui: Web interface for chat interactions
    - models: Transcript and request/response schemas
"""

__version__ = "0.1.0"
