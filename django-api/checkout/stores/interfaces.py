"""Store interfaces (repository pattern).

A checkout store is a plain key-value boundary holding serialized
checkout blobs. Freshness and camp matching are decided by the caller.
"""

from abc import ABC, abstractmethod


class CheckoutStore(ABC):
    """Interface for durable checkout blob storage."""

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the blob stored under ``key``, or None if absent."""
        ...

    @abstractmethod
    def write(self, key: str, blob: str) -> None:
        """Store ``blob`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        ...
