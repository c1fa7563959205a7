"""Application configuration."""

import os
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

from adventure_tracker.domain.detection import (
    DUPLICATE_RADIUS_M,
    DUPLICATE_WINDOW_SECONDS,
    JITTER_THRESHOLD_M,
    MAX_FIX_ACCURACY_M,
    MAX_FIX_AGE_SECONDS,
    MINIMUM_STAY_DURATION_SECONDS,
    NEW_LOCATION_RADIUS_M,
    TICK_INTERVAL_SECONDS,
    DetectionConfig,
)

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    admin_token: str
    storage_backend: str = "supabase"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    storage_table: str = "blob_store"
    storage_key: str = "SavedAdventures"
    timezone: str = "UTC"
    minimum_stay_seconds: float = MINIMUM_STAY_DURATION_SECONDS
    new_location_radius_m: float = NEW_LOCATION_RADIUS_M
    jitter_threshold_m: float = JITTER_THRESHOLD_M
    tick_interval_seconds: float = TICK_INTERVAL_SECONDS
    max_fix_age_seconds: float = MAX_FIX_AGE_SECONDS
    max_fix_accuracy_m: float = MAX_FIX_ACCURACY_M
    duplicate_window_seconds: float = DUPLICATE_WINDOW_SECONDS
    duplicate_radius_m: float = DUPLICATE_RADIUS_M
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def detection_config(self) -> DetectionConfig:
        """Build detection knobs from settings."""
        return DetectionConfig(
            minimum_stay_seconds=self.minimum_stay_seconds,
            new_location_radius_m=self.new_location_radius_m,
            jitter_threshold_m=self.jitter_threshold_m,
            tick_interval_seconds=self.tick_interval_seconds,
            max_fix_age_seconds=self.max_fix_age_seconds,
            max_fix_accuracy_m=self.max_fix_accuracy_m,
            duplicate_window_seconds=self.duplicate_window_seconds,
            duplicate_radius_m=self.duplicate_radius_m,
        )

    def tzinfo(self) -> ZoneInfo:
        """Return the timezone used for calendar-month statistics."""
        return ZoneInfo(self.timezone)
