"""Key/value byte storage abstractions."""

from dataclasses import dataclass
from typing import Protocol


class BlobStore(Protocol):
    """Durable storage for opaque byte blobs keyed by name."""

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes for a key, if present."""

    def set(self, key: str, data: bytes) -> None:
        """Store bytes under a key, replacing any previous value."""


@dataclass
class InMemoryBlobStore(BlobStore):
    """Process-local blob store, useful for local runs."""

    _blobs: dict[str, bytes]

    def __init__(self) -> None:
        self._blobs = {}

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes for a key, if present."""
        return self._blobs.get(key)

    def set(self, key: str, data: bytes) -> None:
        """Store bytes under a key."""
        self._blobs[key] = bytes(data)
