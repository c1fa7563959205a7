"""Dwell timer state machine.

Tracks how long the user has stayed at a candidate new place and raises a
prompt once the configured minimum stay is reached::

    IDLE --start--> TRACKING --tick >= threshold--> PROMPTING --resolve--> IDLE
                      |  ^
                      |  +--start (new candidate supersedes)
                      +--reset--> IDLE

The timer never reads the wall clock itself; callers pass ``now`` so the
owning controller decides how time is sourced.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from adventure_tracker.domain.adventures import LocationFix
from adventure_tracker.domain.detection import MINIMUM_STAY_DURATION_SECONDS
from adventure_tracker.domain.dwell import (
    DwellSession,
    DwellSnapshot,
    DwellState,
    idle_snapshot,
)

_logger = logging.getLogger(__name__)


@dataclass
class DwellTimer:
    """Single-session dwell timer."""

    minimum_stay_seconds: float = MINIMUM_STAY_DURATION_SECONDS
    state: DwellState = field(default=DwellState.IDLE, init=False)
    session: DwellSession | None = field(default=None, init=False)
    _last_elapsed: float = field(default=0.0, init=False)

    def start(self, anchor: LocationFix, now: datetime) -> DwellSession:
        """Begin timing a new candidate place, superseding any prior session."""
        self.session = DwellSession(session_id=uuid4(), anchor=anchor, started_at=now)
        self.state = DwellState.TRACKING
        self._last_elapsed = 0.0
        _logger.debug("Dwell session started: session_id=%s", self.session.session_id)
        return self.session

    def tick(self, now: datetime, session_id: UUID | None = None) -> bool:
        """Advance the timer; return True only when the prompt is raised."""
        if self.session is None or self.state is DwellState.IDLE:
            return False
        if session_id is not None and session_id != self.session.session_id:
            return False

        self._last_elapsed = self.session.elapsed_seconds(now)
        if (
            self.state is DwellState.TRACKING
            and self._last_elapsed >= self.minimum_stay_seconds
        ):
            self.state = DwellState.PROMPTING
            _logger.info(
                "Dwell threshold reached: session_id=%s elapsed=%.0f",
                self.session.session_id,
                self._last_elapsed,
            )
            return True
        return False

    def reset(self) -> None:
        """Discard the current session without prompting."""
        self.session = None
        self.state = DwellState.IDLE
        self._last_elapsed = 0.0

    def resolve(self) -> LocationFix | None:
        """Consume a pending prompt and return its anchor."""
        if self.state is not DwellState.PROMPTING or self.session is None:
            return None
        anchor = self.session.anchor
        self.reset()
        return anchor

    def snapshot(self) -> DwellSnapshot:
        """Return the values derived at the most recent start or tick."""
        if self.session is None:
            return idle_snapshot(self.minimum_stay_seconds)
        elapsed = self._last_elapsed
        if self.minimum_stay_seconds > 0:
            progress = min(elapsed / self.minimum_stay_seconds, 1.0)
        else:
            progress = 1.0
        return DwellSnapshot(
            state=self.state,
            anchor=self.session.anchor.coordinate,
            session_id=self.session.session_id,
            elapsed_seconds=elapsed,
            remaining_seconds=max(self.minimum_stay_seconds - elapsed, 0.0),
            progress=progress,
        )
