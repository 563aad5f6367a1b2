from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from catalog_search.models import CatalogEntry

logger = logging.getLogger(__name__)

DATA_KEY = "cybersearch_data"
TIMESTAMP_KEY = "cybersearch_timestamp"


def _atomic_write_text(path: Path, data: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile("w", delete=False, dir=path.parent, encoding="utf-8") as tmp:
        tmp.write(data)
        tmp.flush()
        os.fsync(tmp.fileno())
        tmp_path = Path(tmp.name)
    try:
        os.replace(tmp_path, path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Durable string store keeping every key in one JSON document."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        _atomic_write_text(self.path, json.dumps(data, indent=2, sort_keys=True))

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}


class CatalogCache:
    """Persist the last fresh catalog and the time it was retrieved."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        data_key: str = DATA_KEY,
        timestamp_key: str = TIMESTAMP_KEY,
    ) -> None:
        self.store = store
        self.data_key = data_key
        self.timestamp_key = timestamp_key

    def save(self, entries: Sequence[CatalogEntry], when: Optional[datetime] = None) -> datetime:
        when = when or datetime.now(timezone.utc)
        self.store.set(self.data_key, json.dumps([entry.to_dict() for entry in entries]))
        self.store.set(self.timestamp_key, when.isoformat())
        return when

    def load(self) -> Optional[Tuple[List[CatalogEntry], Optional[datetime]]]:
        """Return cached entries and their timestamp, or ``None`` if nothing is stored.

        Raises ``ValueError`` when stored data cannot be decoded.
        """

        raw = self.store.get(self.data_key)
        if raw is None:
            return None
        payload = json.loads(raw)
        if not isinstance(payload, list):
            raise ValueError("Cached catalog is not a list")
        entries = [
            CatalogEntry.from_dict(item)
            for item in payload
            if isinstance(item, dict) and str(item.get("title") or "").strip()
        ]
        return entries, self._load_timestamp()

    def has_data(self) -> bool:
        return self.store.get(self.data_key) is not None

    def _load_timestamp(self) -> Optional[datetime]:
        raw = self.store.get(self.timestamp_key)
        if not raw:
            return None
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            return None


__all__ = ["CatalogCache", "JsonFileStore", "KeyValueStore", "MemoryStore"]
