"""Clipboard sink that pipes image data into a clipboard tool."""

import asyncio
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from instant_camera.domain.errors import ClipboardUnavailableError
from instant_camera.services.exports import ClipboardSink

_CANDIDATES: tuple[tuple[str, ...], ...] = (
    ("wl-copy", "--type", "{mime_type}"),
    ("xclip", "-selection", "clipboard", "-t", "{mime_type}", "-i"),
)


def detect_clipboard_command(
    which: Callable[[str], str | None] = shutil.which,
) -> list[str] | None:
    """Return the first installed image-capable clipboard command."""
    for candidate in _CANDIDATES:
        if which(candidate[0]):
            return list(candidate)
    return None


@dataclass
class CommandClipboardSink(ClipboardSink):
    """Writes clipboard images through an external command."""

    command: list[str] | None = None
    timeout_seconds: float = 5.0

    async def write_image(self, mime_type: str, data: bytes) -> None:
        """Pipe image bytes to the clipboard command."""
        command = self.command or detect_clipboard_command()
        if not command:
            raise ClipboardUnavailableError("No image clipboard tool is installed")
        argv = [part.format(mime_type=mime_type) for part in command]
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as exc:
            raise ClipboardUnavailableError(f"Cannot run {argv[0]}") from exc
        try:
            await asyncio.wait_for(
                process.communicate(data), timeout=self.timeout_seconds
            )
        except TimeoutError as exc:
            process.kill()
            await process.wait()
            raise ClipboardUnavailableError(f"{argv[0]} timed out") from exc
        if process.returncode != 0:
            raise ClipboardUnavailableError(
                f"{argv[0]} exited with {process.returncode}"
            )
