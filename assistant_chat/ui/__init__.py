"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with streaming support
    - Setup panel when the assistant is missing or unreachable
    - Assistant file list with referenced files highlighted
    - Dark/light theme toggle persisted per user

Contains minimal business logic. Chat state lives in ``assistant_chat.chat``
and all upstream calls go through the API.
"""
