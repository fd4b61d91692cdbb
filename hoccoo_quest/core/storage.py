"""Key-value persistence port and its JSON file implementation."""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

log = logging.getLogger("hoccoo.storage")


class KeyValueStore(ABC):
    """Opaque key-value store holding JSON-serialisable values."""

    @abstractmethod
    def load(self, key: str, fallback: Any) -> Any:
        """Return the value stored under ``key`` or ``fallback``."""

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """Persist ``value`` under ``key``."""


class JSONFileStore(KeyValueStore):
    """Persist every key in a single JSON document.

    The whole document is rewritten atomically on each :meth:`save`. A file
    that cannot be parsed is treated as empty, and ``null`` values fall back
    to the caller's default, so a corrupted store never stops the bot.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialise the store backed by the JSON file at ``path``."""
        self.path = Path(path)
        self._data: dict[str, Any] = {}
        self._read()

    # ------------------------------------------------------------------
    # Internal helpers
    def _read(self) -> None:
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            log.warning("Could not parse %s; starting from defaults", self.path)
            return
        if not isinstance(data, dict):
            log.warning("Ignoring %s: top-level value is not an object", self.path)
            return
        self._data = data

    def _write(self) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)
        os.replace(tmp, self.path)

    # ------------------------------------------------------------------
    def load(self, key: str, fallback: Any) -> Any:
        value = self._data.get(key)
        return fallback if value is None else value

    def save(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._write()
