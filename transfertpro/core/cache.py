"""Per-session directory cache."""

from typing import Generic, TypeVar

T = TypeVar("T")


class NodeCache(Generic[T]):
    """
    Identifier-keyed cache that lives as long as one session.

    Entries are never evicted; a key is only overwritten by a newer fetch of
    the same identifier, or dropped by ``clear()`` on reconnect.
    """

    def __init__(self) -> None:
        self._entries: dict[str, T] = {}

    def get(self, key: str) -> T | None:
        """
        Get item from cache.

        Args:
            key: Cache key.

        Returns:
            Cached item or None.
        """
        return self._entries.get(key)

    def put(self, key: str, value: T) -> None:
        """
        Put item in cache, replacing any previous entry for the key.

        Args:
            key: Cache key.
            value: Value to cache.
        """
        self._entries[key] = value

    def remove(self, key: str) -> T | None:
        """Remove item from cache and return it, if present."""
        return self._entries.pop(key, None)

    def clear(self) -> None:
        """Clear all items from cache."""
        self._entries.clear()
