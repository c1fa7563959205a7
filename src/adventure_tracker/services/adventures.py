"""Record store for adventures with best-effort persistence."""

import logging
from concurrent.futures import Executor, Future
from dataclasses import dataclass, field
from datetime import UTC, datetime, tzinfo
from uuid import UUID

from adventure_tracker.domain.adventures import Adventure
from adventure_tracker.domain.detection import (
    DUPLICATE_RADIUS_M,
    DUPLICATE_WINDOW_SECONDS,
)
from adventure_tracker.services.blob_store import BlobStore
from adventure_tracker.services.codec import (
    AdventureDecodeError,
    decode_adventures,
    encode_adventures,
)

_logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "SavedAdventures"
RECENT_LIMIT = 5


@dataclass
class AdventureStore:
    """Ordered in-memory adventure collection backed by a blob store.

    The in-memory list is authoritative. Every mutation encodes a snapshot
    and hands it to the writer: inline when no executor is given, otherwise
    on the executor, which must run writes in submission order (a single
    worker). Write failures are logged and otherwise ignored.
    """

    blob_store: BlobStore
    storage_key: str = DEFAULT_STORAGE_KEY
    duplicate_window_seconds: float = DUPLICATE_WINDOW_SECONDS
    duplicate_radius_m: float = DUPLICATE_RADIUS_M
    executor: Executor | None = None
    _adventures: list[Adventure] = field(default_factory=list, init=False)
    _pending: Future[bool] | None = field(default=None, init=False)
    _last_write_ok: bool = field(default=True, init=False)

    @classmethod
    def open(
        cls,
        blob_store: BlobStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        duplicate_window_seconds: float = DUPLICATE_WINDOW_SECONDS,
        duplicate_radius_m: float = DUPLICATE_RADIUS_M,
        executor: Executor | None = None,
    ) -> "AdventureStore":
        """Create a store and load any previously persisted adventures."""
        store = cls(
            blob_store=blob_store,
            storage_key=storage_key,
            duplicate_window_seconds=duplicate_window_seconds,
            duplicate_radius_m=duplicate_radius_m,
            executor=executor,
        )
        store.load()
        return store

    def append(self, adventure: Adventure) -> None:
        """Add an adventure and persist the collection."""
        self._adventures.append(adventure)
        self.persist()

    def delete(self, adventure_id: UUID) -> bool:
        """Remove an adventure by id; unknown ids are ignored."""
        remaining = [item for item in self._adventures if item.id != adventure_id]
        if len(remaining) == len(self._adventures):
            return False
        self._adventures = remaining
        self.persist()
        return True

    def clear(self) -> None:
        """Remove every adventure."""
        self._adventures = []
        self.persist()

    def get(self, adventure_id: UUID) -> Adventure | None:
        """Return an adventure by id, if present."""
        for adventure in self._adventures:
            if adventure.id == adventure_id:
                return adventure
        return None

    def all(self) -> list[Adventure]:
        """Return adventures in insertion order."""
        return list(self._adventures)

    def __len__(self) -> int:
        return len(self._adventures)

    def sorted_by_recency(self) -> list[Adventure]:
        """Return adventures newest first; ties keep insertion order."""
        return sorted(self._adventures, key=lambda item: item.timestamp, reverse=True)

    def recent(self, limit: int = RECENT_LIMIT) -> list[Adventure]:
        """Return the most recent adventures."""
        return self.sorted_by_recency()[:limit]

    def filter_by_current_month(self, now: datetime) -> list[Adventure]:
        """Return adventures in the same calendar month as ``now``."""
        tz = now.tzinfo or UTC
        return [
            adventure
            for adventure in self._adventures
            if _month_key(adventure.timestamp, tz) == (now.year, now.month)
        ]

    def unique_month_count(self, tz: tzinfo = UTC) -> int:
        """Return the number of distinct calendar months with adventures."""
        return len({_month_key(item.timestamp, tz) for item in self._adventures})

    def export_bytes(self) -> bytes:
        """Return a serialized snapshot of every adventure."""
        return encode_adventures(self._adventures)

    def import_merge(self, data: bytes) -> bool:
        """Merge serialized adventures, skipping ones that look like duplicates."""
        try:
            incoming = decode_adventures(data)
        except AdventureDecodeError:
            _logger.warning("Adventure import rejected: payload could not be decoded")
            return False

        added = 0
        for candidate in incoming:
            if any(
                self._is_duplicate(existing, candidate)
                for existing in self._adventures
            ):
                continue
            self._adventures.append(candidate)
            added += 1
        _logger.info(
            "Adventure import merged: received=%s added=%s", len(incoming), added
        )
        self.persist()
        return True

    def persist(self) -> None:
        """Snapshot the collection and queue it for writing."""
        data = encode_adventures(self._adventures)
        if self.executor is None:
            self._last_write_ok = self._write(data)
            return
        self._pending = self.executor.submit(self._write, data)

    def flush(self) -> bool:
        """Wait for queued writes; return whether the latest one succeeded."""
        pending = self._pending
        if pending is not None:
            self._last_write_ok = pending.result()
        return self._last_write_ok

    def _write(self, data: bytes) -> bool:
        try:
            self.blob_store.set(self.storage_key, data)
        except Exception:
            _logger.exception(
                "Failed to persist adventures", extra={"key": self.storage_key}
            )
            return False
        return True

    def load(self) -> None:
        """Replace the collection with persisted data, or empty it."""
        try:
            data = self.blob_store.get(self.storage_key)
        except Exception:
            _logger.exception(
                "Failed to read adventures", extra={"key": self.storage_key}
            )
            self._adventures = []
            return
        if data is None:
            _logger.info("No saved adventures found")
            self._adventures = []
            return
        try:
            self._adventures = decode_adventures(data)
        except AdventureDecodeError:
            _logger.warning("Saved adventures are corrupt; starting empty")
            self._adventures = []
            return
        _logger.info("Loaded adventures: count=%s", len(self._adventures))

    def _is_duplicate(self, existing: Adventure, candidate: Adventure) -> bool:
        if existing.id == candidate.id:
            return True
        gap = abs((existing.timestamp - candidate.timestamp).total_seconds())
        return (
            gap < self.duplicate_window_seconds
            and existing.distance_to(candidate.coordinate) < self.duplicate_radius_m
        )


def _month_key(timestamp: datetime, tz: tzinfo) -> tuple[int, int]:
    local = timestamp.astimezone(tz)
    return local.year, local.month
