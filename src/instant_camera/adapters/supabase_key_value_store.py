"""Supabase-backed key-value persistence medium."""

from dataclasses import dataclass
from datetime import UTC, datetime

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from instant_camera.domain.errors import (
    PersistenceReadMalformedError,
    PersistenceWriteFailedError,
)
from instant_camera.services.photos import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Supabase implementation storing values in a key/value table."""

    client: Client
    table: str = "key_value_store"

    def read(self, key: str) -> bytes | None:
        """Return the stored value for a key."""
        try:
            response = (
                self.client.table(self.table)
                .select("value")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise PersistenceReadMalformedError(f"Failed to read key {key}") from exc
        if not response.data:
            return None
        value = response.data[0].get("value")
        if value is None:
            return None
        return str(value).encode("utf-8")

    def write(self, key: str, value: bytes) -> None:
        """Upsert the value for a key."""
        try:
            self.client.table(self.table).upsert(
                {
                    "key": key,
                    "value": value.decode("utf-8"),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            ).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise PersistenceWriteFailedError(f"Failed to write key {key}") from exc
