"""Adapters feeding an injected location stream into the controller."""

from collections.abc import AsyncIterable
from dataclasses import replace
from datetime import UTC

from adventure_tracker.domain.adventures import LocationFix
from adventure_tracker.services.lifecycle import AdventureLifecycleController


async def consume_fixes(
    fixes: AsyncIterable[LocationFix], controller: AdventureLifecycleController
) -> int:
    """Submit every fix from the stream and return how many were consumed.

    Fixes without a timezone are taken to be UTC, matching the HTTP surface.
    """
    count = 0
    async for fix in fixes:
        if fix.timestamp.tzinfo is None:
            fix = replace(fix, timestamp=fix.timestamp.replace(tzinfo=UTC))
        controller.submit_fix(fix)
        count += 1
    return count
