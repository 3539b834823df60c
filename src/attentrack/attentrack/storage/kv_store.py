"""Persistent key/value dictionary used by the local fallback backend.

Values are strings (JSON-encoded collections), addressed by fixed keys, the
same shape a browser's localStorage would hold.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """Process-local store; contents vanish with the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """The whole dictionary lives in one UTF-8 JSON file on disk."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError:
            logger.warning("Ignoring undecodable store file %s", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: not a JSON object", self._path)
            return {}
        return data

    def _save(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file and swap it in, so readers never see half a file.
        fd, tmp = tempfile.mkstemp(prefix=self._path.name, suffix=".tmp", dir=str(self._path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._save(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key in data:
                del data[key]
                self._save(data)


def read_collection(store: KeyValueStore, key: str) -> list:
    """Decode the JSON array under key; absent or corrupt values read as []."""
    raw = store.get_item(key)
    if not raw:
        return []
    try:
        items = json.loads(raw)
    except ValueError:
        logger.warning("Ignoring undecodable value under %r", key)
        return []
    if not isinstance(items, list):
        logger.warning("Ignoring non-array value under %r", key)
        return []
    return items


def write_collection(store: KeyValueStore, key: str, items: list) -> None:
    store.set_item(key, json.dumps(items, ensure_ascii=False))
