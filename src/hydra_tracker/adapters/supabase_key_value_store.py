"""Supabase-backed key-value store."""

from dataclasses import dataclass
from datetime import UTC, datetime

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from hydra_tracker.services.storage import KeyValueStore, StorageError


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Supabase implementation storing one row per key."""

    client: Client
    table: str = "kv_store"

    def get_string(self, key: str) -> str | None:
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
            raise StorageError(f"Failed to read key {key}") from exc
        if not response.data:
            return None
        value = response.data[0].get("value")
        return value if isinstance(value, str) else None

    def set_string(self, key: str, value: str) -> None:
        """Insert or replace the value for a key."""
        try:
            self.client.table(self.table).upsert(
                {
                    "key": key,
                    "value": value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="key",
            ).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise StorageError(f"Failed to write key {key}") from exc
