"""Protocol for the durable key-value store (can implement for SQLAlchemy / in memory / browser-like storage etc.)"""

from typing import Protocol


class KeyValueStore(Protocol):
    """Durable string-to-string storage. Every key is written independently of the others."""

    def get_item(self, key: str) -> str | None:
        """Value stored under key, if any."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Create or overwrite the value stored under key."""
        ...

    def remove_item(self, key: str) -> None:
        """Forget key. Removing an unknown key is fine."""
        ...
