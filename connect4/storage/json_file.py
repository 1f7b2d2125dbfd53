"""Key-value store persisted as a single JSON object on disk."""

import json
import logging
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

from ..core.errors import StoreUnavailable
from .interface import KeyValueStore


logger = logging.getLogger(__name__)


class JsonFileStore(KeyValueStore):
    """Stores ``{prefix + key: value}`` pairs in a JSON file.

    The file is read once on first access and rewritten atomically on
    every change. Keys without the prefix are preserved but not exposed,
    so several applications can share one file.
    """

    def __init__(self, path: str | Path, prefix: str = "c4."):
        self.path = Path(path).expanduser()
        self.prefix = prefix
        self._data: dict[str, str] | None = None

    def _load(self) -> dict[str, str]:
        if self._data is not None:
            return self._data

        if not self.path.exists():
            self._data = {}
            return self._data

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreUnavailable(f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StoreUnavailable(
                f"Unsupported store schema in {self.path}: {type(data).__name__}"
            )

        self._data = {str(k): str(v) for k, v in data.items()}
        logger.debug("Loaded %d keys from %s", len(self._data), self.path)
        return self._data

    def _flush(self) -> None:
        assert self._data is not None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(self._data, f, indent=2, sort_keys=True)
                os.replace(tmp_path, self.path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StoreUnavailable(f"Cannot write {self.path}: {e}") from e

    def get(self, key: str) -> str | None:
        return self._load().get(self.prefix + key)

    def set(self, key: str, value: str) -> None:
        self._load()[self.prefix + key] = value
        self._flush()

    def remove(self, key: str) -> None:
        data = self._load()
        if data.pop(self.prefix + key, None) is not None:
            self._flush()

    def keys(self) -> Iterator[str]:
        n = len(self.prefix)
        return iter([k[n:] for k in self._load() if k.startswith(self.prefix)])
