"""Frame normalization for captured video frames."""

from dataclasses import dataclass
from typing import Protocol

import numpy as np
from PIL import Image

from instant_camera.domain.errors import CaptureUnavailableError
from instant_camera.services.images import encode_image, overlay_blend, to_data_url

PHOTO_SIZE = 600
TINT_COLOR = (100, 50, 0)
TINT_ALPHA = 0.1
JPEG_QUALITY = 70


@dataclass(frozen=True)
class VideoFrame:
    """A single RGB frame read from a live video source."""

    pixels: np.ndarray
    native_width: int
    native_height: int

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "VideoFrame":
        """Build a frame whose native size matches the pixel array."""
        height, width = pixels.shape[:2]
        return cls(pixels=pixels, native_width=width, native_height=height)


class VideoSource(Protocol):
    """Interface for a live video frame source."""

    def read_frame(self) -> VideoFrame:
        """Return the current frame or raise CaptureUnavailableError."""


def crop_box(width: int, height: int) -> tuple[float, float, float, float]:
    """Return the centered square crop of a ``width`` x ``height`` frame."""
    min_dim = min(width, height)
    start_x = (width - min_dim) / 2
    start_y = (height - min_dim) / 2
    return (start_x, start_y, start_x + min_dim, start_y + min_dim)


@dataclass
class FrameNormalizer:
    """Turns arbitrary-aspect frames into tinted square JPEG payloads."""

    size: int = PHOTO_SIZE
    quality: int = JPEG_QUALITY

    def normalize(self, frame: VideoFrame) -> str:
        """Crop, scale, tint and encode a frame as a JPEG data URL."""
        square = self.render(frame)
        payload = encode_image(square, "JPEG", quality=self.quality)
        return to_data_url(payload, "image/jpeg")

    def render(self, frame: VideoFrame) -> Image.Image:
        """Return the tinted square image for a frame without encoding it."""
        if frame.native_width <= 0 or frame.native_height <= 0:
            raise CaptureUnavailableError("Video source has zero-area dimensions")
        if frame.pixels is None or frame.pixels.size == 0:
            raise CaptureUnavailableError("Video source returned no pixels")
        try:
            source = Image.fromarray(frame.pixels).convert("RGB")
        except (TypeError, ValueError) as exc:
            raise CaptureUnavailableError("Frame pixels are not drawable") from exc

        square = source.resize(
            (self.size, self.size),
            Image.Resampling.BILINEAR,
            box=crop_box(frame.native_width, frame.native_height),
        )
        tint = Image.new("RGB", square.size, TINT_COLOR)
        return overlay_blend(square, tint, TINT_ALPHA)
