"""File backed key/value store for UI preferences."""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)


class JsonPreferenceStore:
    """Persist string preferences in a small JSON document."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def update(self, key: str, transform: Callable[[str | None], str]) -> str:
        """Replace the value under ``key`` with ``transform(current)`` atomically."""

        with self._lock:
            data = self._read()
            current = data.get(key)
            value = transform(current if isinstance(current, str) else None)
            data[key] = value
            self._write(data)
        return value

    def _write(self, data: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}


__all__ = ["JsonPreferenceStore"]
