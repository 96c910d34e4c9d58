"""Filesystem-backed key-value persistence medium."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from instant_camera.domain.errors import (
    PersistenceReadMalformedError,
    PersistenceWriteFailedError,
)
from instant_camera.services.photos import KeyValueStore


@dataclass
class FileKeyValueStore(KeyValueStore):
    """Stores each key as one file inside a directory."""

    directory: Path

    def read(self, key: str) -> bytes | None:
        """Return the file contents for a key, if present."""
        try:
            return self._path(key).read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise PersistenceReadMalformedError(f"Failed to read key {key}") from exc

    def write(self, key: str, value: bytes) -> None:
        """Atomically replace the file for a key."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".tmp-")
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(value)
                os.replace(tmp_name, self._path(key))
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceWriteFailedError(f"Failed to write key {key}") from exc

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"
