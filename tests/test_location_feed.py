"""Tests for consuming an injected location stream."""

import asyncio
from collections.abc import AsyncIterator

from adventure_tracker.domain.adventures import LocationFix
from adventure_tracker.domain.dwell import DwellState
from adventure_tracker.services.lifecycle import AdventureLifecycleController
from adventure_tracker.services.location_feed import consume_fixes
from tests.conftest import ManualClock, make_fix


def test_consume_fixes_feeds_controller(
    controller: AdventureLifecycleController, clock: ManualClock
) -> None:
    async def stream() -> AsyncIterator[LocationFix]:
        yield make_fix(37.0, -122.0, at=clock())
        yield make_fix(37.00001, -122.0, at=clock())
        yield make_fix(37.0, -122.0, at=clock(), accuracy_m=500)

    consumed = asyncio.run(consume_fixes(stream(), controller))

    assert consumed == 3
    assert controller.snapshot.state is DwellState.TRACKING
    assert controller.statistics().last_fix_accuracy_m == 10.0


def test_consume_fixes_accepts_naive_timestamps(
    controller: AdventureLifecycleController, clock: ManualClock
) -> None:
    async def stream() -> AsyncIterator[LocationFix]:
        yield make_fix(37.0, -122.0, at=clock().replace(tzinfo=None))

    assert asyncio.run(consume_fixes(stream(), controller)) == 1
    assert controller.snapshot.state is DwellState.TRACKING
    assert controller.statistics().last_fix_at == clock()
