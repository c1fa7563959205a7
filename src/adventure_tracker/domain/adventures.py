"""Domain models for adventures and location fixes."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from adventure_tracker.domain.geo import Coordinate, distance_m

DEFAULT_ADVENTURE_NAME = "Unnamed Adventure"
MAX_NAME_LENGTH = 50
UNKNOWN_ADDRESS = "Unknown Location"
SUGGESTED_NAMES = (
    "Coffee Shop",
    "Park",
    "Restaurant",
    "Home",
    "Work",
    "Gym",
    "Library",
    "Store",
    "Beach",
    "Trail",
)


@dataclass(frozen=True)
class LocationFix:
    """A single reported location sample."""

    coordinate: Coordinate
    accuracy_m: float
    timestamp: datetime


@dataclass(frozen=True)
class Adventure:
    """A place visited long enough to be worth remembering."""

    name: str
    coordinate: Coordinate
    timestamp: datetime
    attachments: tuple[bytes, ...] = ()
    address: str | None = None
    id: UUID = field(default_factory=uuid4)

    @property
    def display_address(self) -> str:
        """Return the address or a placeholder for display."""
        return self.address or UNKNOWN_ADDRESS

    @property
    def has_attachments(self) -> bool:
        """Return True when at least one attachment was captured."""
        return bool(self.attachments)

    def distance_to(self, coordinate: Coordinate) -> float:
        """Return the distance in meters from this adventure to a coordinate."""
        return distance_m(self.coordinate, coordinate)


def normalize_name(raw: str | None) -> str:
    """Trim and truncate a user-supplied name, falling back to a default."""
    cleaned = (raw or "").strip()[:MAX_NAME_LENGTH].strip()
    return cleaned or DEFAULT_ADVENTURE_NAME
