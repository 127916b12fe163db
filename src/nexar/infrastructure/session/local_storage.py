"""Key-value storage for state that must survive a process restart."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalStorage(ABC):
    """String key-value store, the client-side equivalent of browser storage."""

    @abstractmethod
    def get_item(self, key: str) -> str | None: ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None: ...

    @abstractmethod
    def remove_item(self, key: str) -> None: ...

    @abstractmethod
    def clear(self) -> None: ...


class MemoryStorage(LocalStorage):
    """Process-local storage, lost on exit."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()


class JsonFileStorage(LocalStorage):
    """Storage persisted as a single JSON object on disk.

    The file is rewritten on every change. A corrupt file is treated as
    empty so a damaged cache can never lock the user out.
    """

    def __init__(self, path: Path):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)

    def clear(self) -> None:
        if self._path.exists():
            self._path.unlink()

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable local storage %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(json.dumps(items, indent=2), encoding="utf-8")
        tmp.replace(self._path)
