"""File sink that saves exported frames into a directory."""

import asyncio
from dataclasses import dataclass
from pathlib import Path

from instant_camera.services.exports import FileSink


@dataclass
class DirectoryFileSink(FileSink):
    """Writes delivered files into an export directory."""

    directory: Path

    async def deliver(self, filename: str, data: bytes) -> None:
        """Save the file, replacing an earlier export of the same name."""
        await asyncio.to_thread(self._write, Path(filename).name, data)

    def _write(self, filename: str, data: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / filename).write_bytes(data)
