"""Supabase-backed blob store."""

import base64
from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from adventure_tracker.services.blob_store import BlobStore


@dataclass
class SupabaseBlobStore(BlobStore):
    """Stores blobs as base64 text in a single key/value table."""

    client: Client
    table: str = "blob_store"

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes for a key, if present."""
        response = (
            self.client.table(self.table)
            .select("key, value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        if not isinstance(value, str):
            return None
        return base64.b64decode(value)

    def set(self, key: str, data: bytes) -> None:
        """Insert or replace the row for a key."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": base64.b64encode(data).decode("ascii"),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
