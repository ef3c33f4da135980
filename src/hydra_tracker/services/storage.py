"""Key-value persistence interface."""

from typing import Protocol


class StorageError(Exception):
    """Raised when the underlying store cannot be read or written."""


class KeyValueStore(Protocol):
    """Durable mapping from string keys to string values."""

    def get_string(self, key: str) -> str | None:
        """Return the stored text for a key, or None when absent."""

    def set_string(self, key: str, value: str) -> None:
        """Store text under a key, replacing any previous value."""
