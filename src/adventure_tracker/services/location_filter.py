"""Filters applied to incoming location fixes."""

from dataclasses import dataclass
from datetime import UTC, datetime

from adventure_tracker.domain.adventures import LocationFix
from adventure_tracker.domain.detection import (
    JITTER_THRESHOLD_M,
    MAX_FIX_ACCURACY_M,
    MAX_FIX_AGE_SECONDS,
)
from adventure_tracker.domain.geo import distance_m


@dataclass(frozen=True)
class FixGate:
    """Reject stale or inaccurate fixes before they reach detection."""

    max_age_seconds: float = MAX_FIX_AGE_SECONDS
    max_accuracy_m: float = MAX_FIX_ACCURACY_M

    def accepts(self, fix: LocationFix, now: datetime) -> bool:
        """Return True when the fix is recent and accurate enough."""
        timestamp = fix.timestamp
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        age = abs((now - timestamp).total_seconds())
        if age >= self.max_age_seconds:
            return False
        # Negative accuracy marks an invalid reading.
        return 0.0 <= fix.accuracy_m < self.max_accuracy_m


@dataclass
class LocationEventFilter:
    """Suppress fixes that barely moved since the last processed one."""

    jitter_threshold_m: float = JITTER_THRESHOLD_M
    last_processed: LocationFix | None = None

    def should_process(self, fix: LocationFix, forced: bool = False) -> bool:
        """Return True if the fix should be classified, remembering it if so."""
        if (
            not forced
            and self.last_processed is not None
            and distance_m(fix.coordinate, self.last_processed.coordinate)
            < self.jitter_threshold_m
        ):
            return False
        self.last_processed = fix
        return True

    def reset(self) -> None:
        """Forget the last processed fix."""
        self.last_processed = None
