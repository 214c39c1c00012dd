"""Abstract durable key -> string blob store (browser-style local storage)."""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Implementations raise ``StorageUnavailableError`` when the backing
    medium is disabled, full or unreadable."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the blob stored under *key*, or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous blob."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete *key*; a missing key is not an error."""
