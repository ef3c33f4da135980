"""Key-value store backed by a single JSON file."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from hydra_tracker.services.storage import KeyValueStore, StorageError

_logger = logging.getLogger(__name__)


class CorruptStoreError(StorageError):
    """Raised when the store file exists but is not a JSON object."""


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Stores all keys in one JSON object, replaced atomically on each write.

    Reads of a corrupt file fail. The next write moves the corrupt file aside
    to ``<name>.corrupt`` and starts a fresh object so persistence resumes.
    """

    path: Path

    def get_string(self, key: str) -> str | None:
        """Return the stored value for a key."""
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_string(self, key: str, value: str) -> None:
        """Store a value, rewriting the file atomically."""
        try:
            data = self._read()
        except CorruptStoreError:
            self._move_aside()
            data = {}
        data[key] = value
        self._write(data)

    @property
    def corrupt_path(self) -> Path:
        return self.path.with_name(f"{self.path.name}.corrupt")

    def _read(self) -> dict[str, object]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageError(f"Failed to read {self.path}") from exc
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise CorruptStoreError(f"Corrupt store file {self.path}") from exc
        if not isinstance(data, dict):
            raise CorruptStoreError(f"Corrupt store file {self.path}")
        return data

    def _move_aside(self) -> None:
        _logger.error(
            "Corrupt store file moved aside: path=%s backup=%s",
            self.path,
            self.corrupt_path,
        )
        try:
            os.replace(self.path, self.corrupt_path)
        except OSError as exc:
            raise StorageError(f"Failed to move aside {self.path}") from exc

    def _write(self, data: dict[str, object]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Failed to write {self.path}") from exc
