"""Dark-mode preference persisted in per-user storage.

The page passes NiceGUI's ``app.storage.user``; any mutable mapping works,
which keeps these helpers testable without a running client.
"""

from collections.abc import MutableMapping
from typing import Any

from assistant_chat.ui.config import DARK_MODE_KEY


def load_dark_mode(storage: MutableMapping[str, Any]) -> bool:
    """Read the stored preference, defaulting to light mode."""
    value = storage.get(DARK_MODE_KEY, False)
    if isinstance(value, str):
        return value.lower() == "true"
    return bool(value)


def toggle_dark_mode(storage: MutableMapping[str, Any], current: bool) -> bool:
    """Flip the preference, persist it, and return the new value."""
    enabled = not current
    storage[DARK_MODE_KEY] = enabled
    return enabled
