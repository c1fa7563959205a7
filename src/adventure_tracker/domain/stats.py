"""Domain models for adventure statistics."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AdventureStatistics:
    """Summary counters shown alongside the adventure list."""

    total_adventures: int
    unique_months: int
    current_month_adventures: int
    last_fix_accuracy_m: float | None
    last_fix_at: datetime | None
