"""Key-value variable store holding the save document.

The game only needs two calls, mirroring a chat host's variable commands:

    async def get(self, key: str) -> str | None: ...
    async def set(self, key: str, value: str) -> None: ...

Values are strings; the save document is stored as JSON text so a corrupt
or foreign value can be detected on load instead of trusted.

Two implementations are provided:

    FileVariableStore    one JSON object file on disk (variables.json)
    MemoryVariableStore  plain dict, for tests and throwaway sessions

Any backend failure surfaces as StoreUnavailable.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StoreUnavailable(RuntimeError):
    """Raised when the variable store cannot be read or written."""


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

class VariableStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


# ---------------------------------------------------------------------------
# FileVariableStore
# ---------------------------------------------------------------------------

class FileVariableStore:
    """All variables in one JSON object file.

    A missing file reads as an empty store (first run).
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    def _read_all(self) -> dict[str, str]:
        if not self._path.is_file():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StoreUnavailable(f"Cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreUnavailable(f"{self._path} does not hold a JSON object")
        return data

    async def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if value is None or isinstance(value, str) else json.dumps(value)

    async def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as e:
            raise StoreUnavailable(f"Cannot write {self._path}: {e}") from e
        logger.debug("store set key=%s len=%d", key, len(value))


# ---------------------------------------------------------------------------
# MemoryVariableStore
# ---------------------------------------------------------------------------

class MemoryVariableStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self.values.get(key)

    async def set(self, key: str, value: str) -> None:
        self.values[key] = value
