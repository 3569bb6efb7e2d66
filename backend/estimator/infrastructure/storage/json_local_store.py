"""Client-local persisted state stored as one JSON document on disk.

Layout of ``<local_store_file>``::

    {
      "estimateNumbers": {"20240501": 3},
      "suppliers": [...],
      "clients": [...]
    }
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any

from estimator.application.interfaces import LocalStateStore

logger = logging.getLogger(__name__)


class JsonFileLocalStore(LocalStateStore):
    """Infrastructure adapter for the editor's local state.

    A missing, unreadable or corrupt file reads as empty. Writes go to a
    temporary sibling first and then replace the file.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable local store %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring local store %s: top level is not an object", self._path)
            return {}
        return data

    def read(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def write(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(self._path)


class InMemoryLocalStore(LocalStateStore):
    """Process-local state, e.g. for a throwaway editor session."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def read(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def write(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)
