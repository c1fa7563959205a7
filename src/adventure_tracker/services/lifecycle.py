"""Adventure lifecycle controller.

The controller is the single owner of detection state. Every public method
takes the same re-entrant lock, so fixes delivered from a location thread,
ticks fired by the scheduler and user decisions never interleave.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, tzinfo
from uuid import UUID

from adventure_tracker.domain.adventures import Adventure, LocationFix, normalize_name
from adventure_tracker.domain.detection import DetectionConfig
from adventure_tracker.domain.dwell import DwellSnapshot, DwellState
from adventure_tracker.domain.stats import AdventureStatistics
from adventure_tracker.services.adventures import RECENT_LIMIT, AdventureStore
from adventure_tracker.services.classifier import is_new_place
from adventure_tracker.services.dwell import DwellTimer
from adventure_tracker.services.location_filter import FixGate, LocationEventFilter
from adventure_tracker.services.ticker import TickScheduler

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class AdventureLifecycleController:
    """Routes fixes through detection and resolves adventure prompts."""

    store: AdventureStore
    scheduler: TickScheduler
    config: DetectionConfig = field(default_factory=DetectionConfig)
    clock: Callable[[], datetime] = _utcnow
    timezone: tzinfo = UTC
    active: bool = True
    _timer: DwellTimer = field(init=False)
    _filter: LocationEventFilter = field(init=False)
    _gate: FixGate = field(init=False)
    _lock: threading.RLock = field(init=False, default_factory=threading.RLock)
    _snapshot: DwellSnapshot = field(init=False)
    _last_fix: LocationFix | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self._timer = DwellTimer(self.config.minimum_stay_seconds)
        self._filter = LocationEventFilter(self.config.jitter_threshold_m)
        self._gate = FixGate(
            max_age_seconds=self.config.max_fix_age_seconds,
            max_accuracy_m=self.config.max_fix_accuracy_m,
        )
        self._snapshot = self._timer.snapshot()

    @property
    def snapshot(self) -> DwellSnapshot:
        """Published dwell state as of the last completed operation."""
        with self._lock:
            return self._snapshot

    def submit_fix(self, fix: LocationFix, forced: bool = False) -> DwellSnapshot:
        """Process a location fix, starting or resetting the dwell session."""
        with self._lock:
            if not self.active:
                _logger.debug("Ignoring fix while inactive")
                return self._snapshot
            now = self.clock()
            if not self._gate.accepts(fix, now):
                _logger.debug(
                    "Ignoring stale or inaccurate fix: accuracy=%s", fix.accuracy_m
                )
                return self._snapshot
            self._last_fix = fix
            if not self._filter.should_process(fix, forced=forced):
                return self._snapshot
            if self._timer.state is DwellState.PROMPTING:
                # A pending prompt stays anchored until the user resolves it.
                return self._snapshot

            if is_new_place(
                fix.coordinate, self.store.all(), self.config.new_location_radius_m
            ):
                session = self._timer.start(fix, now)
                self.scheduler.schedule(session.session_id)
                _logger.info(
                    "New place detected, timing dwell: forced=%s session_id=%s",
                    forced,
                    session.session_id,
                )
            elif self._timer.state is DwellState.TRACKING:
                self._timer.reset()
                self.scheduler.cancel()
                _logger.info("Returned to a known place, dwell timer reset")
            return self._publish()

    def tick(self, session_id: UUID | None = None) -> DwellSnapshot:
        """Advance the dwell timer; stale session ids are ignored."""
        with self._lock:
            if self._timer.tick(self.clock(), session_id):
                _logger.info(
                    "Adventure prompt raised: session_id=%s",
                    self._timer.session.session_id if self._timer.session else None,
                )
            return self._publish()

    def create_adventure(
        self,
        name: str | None,
        attachments: Iterable[bytes] = (),
        address: str | None = None,
    ) -> Adventure | None:
        """Record the pending place as an adventure; no-op without a prompt."""
        with self._lock:
            anchor = self._timer.resolve()
            if anchor is None:
                _logger.debug("No pending prompt; create ignored")
                return None
            self.scheduler.cancel()
            adventure = Adventure(
                name=normalize_name(name),
                coordinate=anchor.coordinate,
                timestamp=self.clock(),
                attachments=tuple(bytes(blob) for blob in attachments),
                address=address,
            )
            self.store.append(adventure)
            self._publish()
            _logger.info("Adventure created: id=%s", adventure.id)
            return adventure

    def dismiss_prompt(self) -> bool:
        """Drop the pending prompt without recording an adventure."""
        with self._lock:
            if self._timer.resolve() is None:
                return False
            self.scheduler.cancel()
            self._publish()
            _logger.info("Adventure prompt dismissed")
            return True

    def delete_adventure(self, adventure_id: UUID) -> bool:
        """Delete an adventure by id."""
        with self._lock:
            return self.store.delete(adventure_id)

    def export_bytes(self) -> bytes:
        """Return the serialized adventure collection."""
        with self._lock:
            return self.store.export_bytes()

    def import_bytes(self, data: bytes) -> bool:
        """Merge serialized adventures into the store."""
        with self._lock:
            return self.store.import_merge(data)

    def reset_all_data(self) -> None:
        """Delete every adventure and abandon any dwell session."""
        with self._lock:
            self.store.clear()
            self._timer.reset()
            self._filter.reset()
            self.scheduler.cancel()
            self._publish()
            _logger.info("All adventure data reset")

    def set_active(self, active: bool) -> None:
        """Pause or resume fix processing."""
        with self._lock:
            self.active = active

    def adventures(self) -> list[Adventure]:
        with self._lock:
            return self.store.all()

    def sorted_adventures(self) -> list[Adventure]:
        with self._lock:
            return self.store.sorted_by_recency()

    def recent_adventures(self, limit: int = RECENT_LIMIT) -> list[Adventure]:
        with self._lock:
            return self.store.recent(limit)

    def current_month_adventures(self) -> list[Adventure]:
        with self._lock:
            return self.store.filter_by_current_month(self._local_now())

    def statistics(self) -> AdventureStatistics:
        """Return counters for the adventure overview."""
        with self._lock:
            last_fix = self._last_fix
            return AdventureStatistics(
                total_adventures=len(self.store),
                unique_months=self.store.unique_month_count(self.timezone),
                current_month_adventures=len(
                    self.store.filter_by_current_month(self._local_now())
                ),
                last_fix_accuracy_m=last_fix.accuracy_m if last_fix else None,
                last_fix_at=last_fix.timestamp if last_fix else None,
            )

    def _local_now(self) -> datetime:
        return self.clock().astimezone(self.timezone)

    def _publish(self) -> DwellSnapshot:
        self._snapshot = self._timer.snapshot()
        return self._snapshot
