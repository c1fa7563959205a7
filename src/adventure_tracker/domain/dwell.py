"""Domain models for dwell tracking."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from adventure_tracker.domain.adventures import LocationFix
from adventure_tracker.domain.geo import Coordinate


class DwellState(str, Enum):
    """Lifecycle states of the dwell timer."""

    IDLE = "idle"
    TRACKING = "tracking"
    PROMPTING = "prompting"


@dataclass(frozen=True)
class DwellSession:
    """The candidate place currently being timed."""

    session_id: UUID
    anchor: LocationFix
    started_at: datetime

    def elapsed_seconds(self, now: datetime) -> float:
        """Seconds spent at the anchor, never negative."""
        return max(0.0, (now - self.started_at).total_seconds())


@dataclass(frozen=True)
class DwellSnapshot:
    """Derived dwell values published to observers."""

    state: DwellState
    anchor: Coordinate | None
    session_id: UUID | None
    elapsed_seconds: float
    remaining_seconds: float
    progress: float

    @property
    def prompt_pending(self) -> bool:
        """True while the user is being asked to record an adventure."""
        return self.state is DwellState.PROMPTING

    @property
    def is_tracking(self) -> bool:
        """True while a candidate place is being timed."""
        return self.state is DwellState.TRACKING

    @property
    def formatted_elapsed(self) -> str:
        return format_duration(self.elapsed_seconds)

    @property
    def formatted_remaining(self) -> str:
        return format_duration(self.remaining_seconds)


def idle_snapshot(minimum_stay_seconds: float) -> DwellSnapshot:
    """Snapshot published when no session is active."""
    return DwellSnapshot(
        state=DwellState.IDLE,
        anchor=None,
        session_id=None,
        elapsed_seconds=0.0,
        remaining_seconds=minimum_stay_seconds,
        progress=0.0,
    )


def format_duration(seconds: float) -> str:
    """Format seconds as MM:SS, truncating fractions."""
    total = int(max(seconds, 0.0))
    return f"{total // 60:02d}:{total % 60:02d}"
