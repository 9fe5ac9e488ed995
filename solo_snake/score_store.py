"""Key-value stores for the persisted high score."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from .errors import ScoreStoreError

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    def get(self, key: str) -> Optional[int]:
        ...

    def set(self, key: str, value: int) -> None:
        ...


class MemoryScoreStore:
    """Dict-backed store. Keeps every write in ``writes`` for inspection."""

    def __init__(self, initial: Optional[dict] = None):
        self.values: dict[str, int] = dict(initial or {})
        self.writes: list[tuple[str, int]] = []

    def get(self, key: str) -> Optional[int]:
        return self.values.get(key)

    def set(self, key: str, value: int) -> None:
        self.values[key] = value
        self.writes.append((key, value))


class JsonScoreStore:
    """Stores values as a flat JSON object in a single file.

    A missing file reads as an empty store. Writes replace the file atomically.
    """

    def __init__(self, path):
        self.path = Path(path)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ScoreStoreError(f"cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ScoreStoreError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[int]:
        value = self._load().get(key)
        if value is None:
            return None
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ScoreStoreError(f"invalid value for {key!r} in {self.path}: {value!r}")
        return value

    def set(self, key: str, value: int) -> None:
        data = self._load()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".scores-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise ScoreStoreError(f"cannot write {self.path}: {e}") from e
        logger.debug("Stored %s=%d in %s", key, value, self.path)


def open_store(path: Optional[str]):
    if path:
        return JsonScoreStore(path)
    return MemoryScoreStore()
