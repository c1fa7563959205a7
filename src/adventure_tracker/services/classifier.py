"""New-place classification against visited adventures."""

from collections.abc import Iterable

from adventure_tracker.domain.adventures import Adventure
from adventure_tracker.domain.geo import Coordinate


def is_new_place(
    coordinate: Coordinate, adventures: Iterable[Adventure], radius_m: float
) -> bool:
    """Return True when no adventure lies within ``radius_m`` of the coordinate."""
    for adventure in adventures:
        if adventure.distance_to(coordinate) < radius_m:
            return False
    return True
