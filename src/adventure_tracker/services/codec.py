"""JSON wire format for persisted adventures."""

import base64
from datetime import UTC, datetime
from uuid import UUID

from pydantic import BaseModel, TypeAdapter, ValidationError

from adventure_tracker.domain.adventures import Adventure, normalize_name
from adventure_tracker.domain.geo import Coordinate


class AdventureDecodeError(ValueError):
    """Raised when serialized adventures cannot be decoded."""


class AdventurePayload(BaseModel):
    """Serialized shape of a single adventure."""

    id: UUID
    name: str
    timestamp: datetime
    attachments: list[str] = []
    address: str | None = None
    latitude: float
    longitude: float


_PAYLOAD_LIST = TypeAdapter(list[AdventurePayload])


def encode_adventures(adventures: list[Adventure]) -> bytes:
    """Serialize adventures to a JSON array."""
    payloads = [_to_payload(adventure) for adventure in adventures]
    return _PAYLOAD_LIST.dump_json(payloads, exclude_none=True)


def decode_adventures(data: bytes) -> list[Adventure]:
    """Deserialize a JSON array produced by ``encode_adventures``."""
    try:
        payloads = _PAYLOAD_LIST.validate_json(data)
        return [_from_payload(payload) for payload in payloads]
    except (ValidationError, ValueError) as exc:
        raise AdventureDecodeError(str(exc)) from exc


def _to_payload(adventure: Adventure) -> AdventurePayload:
    return AdventurePayload(
        id=adventure.id,
        name=adventure.name,
        timestamp=adventure.timestamp,
        attachments=[
            base64.b64encode(blob).decode("ascii") for blob in adventure.attachments
        ],
        address=adventure.address,
        latitude=adventure.coordinate.latitude,
        longitude=adventure.coordinate.longitude,
    )


def _from_payload(payload: AdventurePayload) -> Adventure:
    timestamp = payload.timestamp
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return Adventure(
        id=payload.id,
        name=normalize_name(payload.name),
        coordinate=Coordinate(payload.latitude, payload.longitude),
        timestamp=timestamp,
        attachments=tuple(
            base64.b64decode(blob, validate=True) for blob in payload.attachments
        ),
        address=payload.address,
    )
