"""Tunable constants for adventure detection."""

from dataclasses import dataclass

# Two constant sets existed historically (60 s / 27 m and 300 s / 100 m).
# The longer, wider pair is the default; both are overridable via Settings.
MINIMUM_STAY_DURATION_SECONDS = 300.0
NEW_LOCATION_RADIUS_M = 100.0
JITTER_THRESHOLD_M = 5.0
TICK_INTERVAL_SECONDS = 1.0
MAX_FIX_AGE_SECONDS = 30.0
MAX_FIX_ACCURACY_M = 100.0
DUPLICATE_WINDOW_SECONDS = 3600.0
DUPLICATE_RADIUS_M = 50.0


@dataclass(frozen=True)
class DetectionConfig:
    """Knobs controlling fix filtering, dwell timing and import merging."""

    minimum_stay_seconds: float = MINIMUM_STAY_DURATION_SECONDS
    new_location_radius_m: float = NEW_LOCATION_RADIUS_M
    jitter_threshold_m: float = JITTER_THRESHOLD_M
    tick_interval_seconds: float = TICK_INTERVAL_SECONDS
    max_fix_age_seconds: float = MAX_FIX_AGE_SECONDS
    max_fix_accuracy_m: float = MAX_FIX_ACCURACY_M
    duplicate_window_seconds: float = DUPLICATE_WINDOW_SECONDS
    duplicate_radius_m: float = DUPLICATE_RADIUS_M
