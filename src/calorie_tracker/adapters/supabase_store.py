"""Supabase implementation of the key-value store."""

import json
from dataclasses import dataclass

from supabase import Client

from calorie_tracker.services.storage import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Stores each key as a ``{key, value}`` row in a Supabase table."""

    client: Client
    table: str = "tracker_state"

    def get_item(self, key: str) -> str | None:
        """Return the stored value for a key."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        if value is None or isinstance(value, str):
            return value
        # json/jsonb columns come back decoded.
        return json.dumps(value)

    def set_item(self, key: str, value: str) -> None:
        """Insert or replace the row for a key."""
        self.client.table(self.table).upsert({"key": key, "value": value}).execute()

    def remove_item(self, key: str) -> None:
        """Delete the row for a key."""
        self.client.table(self.table).delete().eq("key", key).execute()
