"""JSON file implementation of the key-value store."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from calorie_tracker.services.storage import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Keeps every key in a single JSON object on disk.

    The file is read once on first access and rewritten in full on every
    change, through a temporary file that replaces the previous one. The
    cached copy only changes once the new file is in place.
    """

    path: Path
    _items: dict[str, str] | None = field(init=False, default=None)

    @classmethod
    def create(cls, path: str | Path) -> "JsonFileKeyValueStore":
        """Build a store for the given path, expanding ``~``."""
        return cls(Path(path).expanduser())

    def get_item(self, key: str) -> str | None:
        """Return the stored text for a key."""
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store text under a key and flush the file."""
        items = dict(self._load())
        items[key] = value
        self._flush(items)

    def remove_item(self, key: str) -> None:
        """Delete a key and flush the file if it was present."""
        items = dict(self._load())
        if items.pop(key, None) is not None:
            self._flush(items)

    def _load(self) -> dict[str, str]:
        if self._items is None:
            self._items = _read_items(self.path)
        return self._items

    def _flush(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            with tmp_path.open("w", encoding="utf-8") as handle:
                json.dump(items, handle, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
        self._items = items


def _read_items(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read store file %s: %s", path, exc)
        return {}
    if not isinstance(payload, dict):
        logger.warning("Store file %s does not hold a JSON object", path)
        return {}
    return {str(key): _as_text(value) for key, value in payload.items()}


def _as_text(value: object) -> str:
    # Hand-edited files may hold lists or numbers rather than encoded text.
    if isinstance(value, str):
        return value
    return json.dumps(value)
