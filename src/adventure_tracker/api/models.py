"""Pydantic models for HTTP request payloads."""

from datetime import datetime

from pydantic import BaseModel, Field


class FixPayload(BaseModel):
    """A location fix reported by the client."""

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    accuracy_m: float
    timestamp: datetime | None = None
    forced: bool = False


class CreateAdventurePayload(BaseModel):
    """User decision to record the pending place."""

    name: str | None = None
    attachments: list[str] = Field(default_factory=list)
    address: str | None = None
