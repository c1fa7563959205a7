"""JSON views of domain objects for the HTTP API."""

from adventure_tracker.domain.adventures import Adventure
from adventure_tracker.domain.dwell import DwellSnapshot
from adventure_tracker.domain.stats import AdventureStatistics


def serialize_adventure(adventure: Adventure) -> dict[str, object]:
    return {
        "id": str(adventure.id),
        "name": adventure.name,
        "latitude": adventure.coordinate.latitude,
        "longitude": adventure.coordinate.longitude,
        "timestamp": adventure.timestamp.isoformat(),
        "address": adventure.address,
        "display_address": adventure.display_address,
        "attachment_count": len(adventure.attachments),
    }


def serialize_snapshot(snapshot: DwellSnapshot) -> dict[str, object]:
    anchor = snapshot.anchor
    return {
        "state": snapshot.state.value,
        "prompt_pending": snapshot.prompt_pending,
        "is_tracking": snapshot.is_tracking,
        "anchor": (
            {"latitude": anchor.latitude, "longitude": anchor.longitude}
            if anchor
            else None
        ),
        "elapsed_seconds": snapshot.elapsed_seconds,
        "remaining_seconds": snapshot.remaining_seconds,
        "progress": snapshot.progress,
        "formatted_elapsed": snapshot.formatted_elapsed,
        "formatted_remaining": snapshot.formatted_remaining,
    }


def serialize_statistics(stats: AdventureStatistics) -> dict[str, object]:
    return {
        "total_adventures": stats.total_adventures,
        "unique_months": stats.unique_months,
        "current_month_adventures": stats.current_month_adventures,
        "last_fix_accuracy_m": stats.last_fix_accuracy_m,
        "last_fix_at": stats.last_fix_at.isoformat() if stats.last_fix_at else None,
    }
