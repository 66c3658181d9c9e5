"""Durable key-value persistence.

Each key is one JSON document under the save directory (``<key>.json``).
Reads never raise: a missing or unreadable file logs and yields the default.
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, List, Optional
from wrestling.core.logging import logger
from wrestling.core.errors import DataLoadError
from wrestling.core.paths import default_save_dir

ROSTER_KEY = "wrestlingRoster"
PLAYER_KEY = "playerWrestler"
DEFEATED_KEY = "defeatedNPCs"

class KeyValueStore:
    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory) if directory is not None else default_save_dir()

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Any:
        """Return the stored value for ``key``; raises DataLoadError on a corrupt file."""
        path = self._path(key)
        if not path.is_file():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise DataLoadError(str(path), str(e)) from e

    def load(self, key: str, default: Any = None) -> Any:
        try:
            data = self.read(key)
        except DataLoadError as e:
            logger.error("SaveLoadFailed", key=key, file=e.path, error=e.detail)
            return default
        return default if data is None else data

    def save(self, key: str, data: Any) -> bool:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.error("SaveFailed", key=key, file=str(path), error=str(e))
            return False
        logger.debug("Saved", key=key, file=str(path))
        return True

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        logger.debug("SaveDeleted", key=key, file=str(path))
        return True

    def keys(self) -> List[str]:
        if not self.directory.is_dir():
            return []
        return sorted(p.stem for p in self.directory.glob("*.json"))

__all__ = ["KeyValueStore", "ROSTER_KEY", "PLAYER_KEY", "DEFEATED_KEY"]
