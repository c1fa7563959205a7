"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

import pytest

from adventure_tracker.config import Settings
from adventure_tracker.containers import AppContainer
from adventure_tracker.domain.adventures import Adventure, LocationFix
from adventure_tracker.domain.detection import DetectionConfig
from adventure_tracker.domain.geo import Coordinate
from adventure_tracker.services.adventures import AdventureStore
from adventure_tracker.services.blob_store import BlobStore, InMemoryBlobStore
from adventure_tracker.services.lifecycle import AdventureLifecycleController
from adventure_tracker.services.ticker import TickScheduler

START = datetime(2025, 6, 25, 12, 0, tzinfo=UTC)


@dataclass
class ManualClock:
    """Clock advanced explicitly by tests."""

    now: datetime = START

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


@dataclass
class RecordingTickScheduler(TickScheduler):
    """Tick scheduler that records requests instead of running timers."""

    scheduled: list[UUID] = field(default_factory=list)
    cancellations: int = 0
    current: UUID | None = None

    def schedule(self, session_id: UUID) -> None:
        self.scheduled.append(session_id)
        self.current = session_id

    def cancel(self) -> None:
        self.cancellations += 1
        self.current = None


@dataclass
class FailingBlobStore(BlobStore):
    """Blob store whose reads and writes always fail."""

    def get(self, key: str) -> bytes | None:
        raise ConnectionError("storage offline")

    def set(self, key: str, data: bytes) -> None:
        raise ConnectionError("storage offline")


def make_fix(
    latitude: float,
    longitude: float,
    at: datetime = START,
    accuracy_m: float = 10.0,
) -> LocationFix:
    return LocationFix(
        coordinate=Coordinate(latitude, longitude),
        accuracy_m=accuracy_m,
        timestamp=at,
    )


def make_adventure(
    name: str,
    latitude: float,
    longitude: float,
    at: datetime = START,
    attachments: tuple[bytes, ...] = (),
    address: str | None = None,
) -> Adventure:
    return Adventure(
        name=name,
        coordinate=Coordinate(latitude, longitude),
        timestamp=at,
        attachments=attachments,
        address=address,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(admin_token="admin-token", storage_backend="memory")


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def scheduler() -> RecordingTickScheduler:
    return RecordingTickScheduler()


@pytest.fixture
def store(blob_store: InMemoryBlobStore) -> AdventureStore:
    return AdventureStore.open(blob_store)


@pytest.fixture
def controller(
    store: AdventureStore,
    scheduler: RecordingTickScheduler,
    clock: ManualClock,
) -> AdventureLifecycleController:
    return AdventureLifecycleController(
        store=store,
        scheduler=scheduler,
        config=DetectionConfig(minimum_stay_seconds=300, new_location_radius_m=100),
        clock=clock,
    )


@pytest.fixture
def container(
    settings: Settings,
    store: AdventureStore,
    controller: AdventureLifecycleController,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        adventure_store=store,
        controller=controller,
        tick_scheduler=None,
        close_resources=close_resources,
    )
