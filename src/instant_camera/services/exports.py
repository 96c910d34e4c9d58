"""Clipboard and file export of composed frames."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from instant_camera.domain.photos import Photo
from instant_camera.services.composer import FrameComposer
from instant_camera.services.images import encode_image

PNG_MIME_TYPE = "image/png"

_logger = logging.getLogger(__name__)


class ClipboardSink(Protocol):
    """Interface for placing image data on the system clipboard."""

    async def write_image(self, mime_type: str, data: bytes) -> None:
        """Store image bytes or raise ClipboardUnavailableError."""


class FileSink(Protocol):
    """Interface for offering a file to the user."""

    async def deliver(self, filename: str, data: bytes) -> None:
        """Hand a named file to the user."""


@dataclass(frozen=True)
class ExportedFile:
    """An encoded frame ready for delivery."""

    filename: str
    content: bytes
    media_type: str = PNG_MIME_TYPE


def export_filename(photo: Photo) -> str:
    """Return the download name for a photo's frame."""
    return f"polaroid-{photo.id}.png"


@dataclass
class ExportService:
    """Delivers composed frames to the clipboard or as files."""

    composer: FrameComposer
    clipboard: ClipboardSink
    file_sink: FileSink

    async def render_png(self, photo: Photo) -> ExportedFile:
        """Compose a photo's frame and encode it losslessly."""
        frame = await self.composer.compose(photo)
        content = await asyncio.to_thread(encode_image, frame, "PNG")
        return ExportedFile(filename=export_filename(photo), content=content)

    async def copy_to_clipboard(self, photo: Photo) -> None:
        """Place the photo's frame on the clipboard as PNG image data."""
        exported = await self.render_png(photo)
        await self.clipboard.write_image(exported.media_type, exported.content)
        _logger.info("Copied frame to clipboard: id=%s", photo.id)

    async def download(self, photo: Photo) -> ExportedFile:
        """Deliver the photo's frame as a PNG file."""
        exported = await self.render_png(photo)
        await self.file_sink.deliver(exported.filename, exported.content)
        _logger.info("Exported frame: filename=%s", exported.filename)
        return exported
