"""Composes decorated instant-film frames for export."""

import asyncio
import logging
import math
from dataclasses import dataclass
from datetime import datetime, tzinfo

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from instant_camera.domain.photos import Photo
from instant_camera.services.frames import PHOTO_SIZE
from instant_camera.services.images import decode_image, overlay_blend

PADDING_X = 40
PADDING_TOP = 40
PADDING_BOTTOM = 120
FRAME_WIDTH = PHOTO_SIZE + PADDING_X * 2
FRAME_HEIGHT = PHOTO_SIZE + PADDING_TOP + PADDING_BOTTOM

BORDER_COLOR = (0, 0, 0, 13)
GRADIENT_ALPHA = 0.1
CAPTION_COLOR = "#4b5563"
CAPTION_FONT_SIZE = 48
# Radians, counter-clockwise.
CAPTION_ROTATION = 0.02
CAPTION_LIFT = 5

_MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_logger = logging.getLogger(__name__)


def format_caption(captured_at_ms: int, tz: tzinfo | None = None) -> str:
    """Format a capture timestamp as ``Mon D, H:MM AM``."""
    moment = datetime.fromtimestamp(captured_at_ms / 1000, tz=tz)
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    month = _MONTHS[moment.month - 1]
    return f"{month} {moment.day}, {hour}:{moment.minute:02d} {meridiem}"


@dataclass
class FrameComposer:
    """Renders a stored photo into a captioned instant-film frame."""

    font_path: str | None = None
    timezone: tzinfo | None = None

    async def compose(self, photo: Photo) -> Image.Image:
        """Decode the photo payload and return the finished frame."""
        image = await asyncio.to_thread(decode_image, photo.image_data)
        return self.render(image, photo.captured_at)

    def render(self, image: Image.Image, captured_at: int) -> Image.Image:
        """Draw the frame around an already decoded photo."""
        canvas = Image.new("RGB", (FRAME_WIDTH, FRAME_HEIGHT), "white")
        if image.size != (PHOTO_SIZE, PHOTO_SIZE):
            image = image.resize((PHOTO_SIZE, PHOTO_SIZE), Image.Resampling.BILINEAR)
        canvas.paste(image, (PADDING_X, PADDING_TOP))
        canvas = _draw_border(canvas)
        canvas = _apply_gradient(canvas)
        self._draw_caption(canvas, format_caption(captured_at, self.timezone))
        return canvas

    def _draw_caption(self, canvas: Image.Image, text: str) -> None:
        font = self._load_font()
        left, top, right, bottom = font.getbbox(text)
        margin = CAPTION_FONT_SIZE // 2
        layer = Image.new(
            "RGBA",
            (int(right - left) + margin * 2, int(bottom - top) + margin * 2),
            (0, 0, 0, 0),
        )
        ImageDraw.Draw(layer).text(
            (margin - left, margin - top), text, font=font, fill=CAPTION_COLOR
        )
        rotated = layer.rotate(
            math.degrees(CAPTION_ROTATION), resample=Image.Resampling.BICUBIC, expand=True
        )
        center_x = FRAME_WIDTH / 2
        center_y = PADDING_TOP + PHOTO_SIZE + PADDING_BOTTOM / 2 - CAPTION_LIFT
        position = (
            round(center_x - rotated.width / 2),
            round(center_y - rotated.height / 2),
        )
        canvas.paste(rotated, position, rotated)

    def _load_font(self) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        if self.font_path:
            try:
                return ImageFont.truetype(self.font_path, CAPTION_FONT_SIZE)
            except OSError:
                _logger.warning("Caption font unavailable: path=%s", self.font_path)
        return ImageFont.load_default(size=CAPTION_FONT_SIZE)


def _photo_box() -> tuple[int, int, int, int]:
    return (PADDING_X, PADDING_TOP, PADDING_X + PHOTO_SIZE, PADDING_TOP + PHOTO_SIZE)


def _draw_border(canvas: Image.Image) -> Image.Image:
    layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    ImageDraw.Draw(layer).rectangle(_photo_box(), outline=BORDER_COLOR, width=1)
    return Image.alpha_composite(canvas.convert("RGBA"), layer).convert("RGB")


def _diagonal_gradient(size: int) -> Image.Image:
    """Light-to-dark gradient from the top-left to the bottom-right corner."""
    ramp = np.linspace(0.0, 1.0, size)
    progress = (ramp[np.newaxis, :] + ramp[:, np.newaxis]) / 2
    values = np.round(255 * (1 - progress)).astype(np.uint8)
    return Image.fromarray(np.dstack([values, values, values]))


def _apply_gradient(canvas: Image.Image) -> Image.Image:
    box = _photo_box()
    region = canvas.crop(box)
    blended = overlay_blend(region, _diagonal_gradient(PHOTO_SIZE), GRADIENT_ALPHA)
    canvas.paste(blended, box[:2])
    return canvas
