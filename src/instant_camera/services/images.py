"""Image payload helpers shared by capture and export."""

import base64
import binascii
import io

from PIL import Image, ImageChops, UnidentifiedImageError

from instant_camera.domain.errors import DecodeError

_DATA_URL_PREFIX = "data:"
_BASE64_MARKER = ";base64,"


def to_data_url(image_bytes: bytes, mime_type: str) -> str:
    """Convert encoded image bytes to a base64 data URL."""
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"{_DATA_URL_PREFIX}{mime_type}{_BASE64_MARKER}{encoded}"


def from_data_url(data_url: str) -> bytes:
    """Return the raw bytes carried by a base64 data URL."""
    if not data_url.startswith(_DATA_URL_PREFIX) or _BASE64_MARKER not in data_url:
        raise DecodeError("Image payload is not a base64 data URL")
    _, _, encoded = data_url.partition(_BASE64_MARKER)
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("Image payload is not valid base64") from exc


def decode_image(data_url: str) -> Image.Image:
    """Decode a data URL into a fully loaded RGB image."""
    raw = from_data_url(data_url)
    try:
        with Image.open(io.BytesIO(raw)) as image:
            image.load()
            return image.convert("RGB")
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise DecodeError("Image payload cannot be decoded") from exc


def encode_image(image: Image.Image, image_format: str, **options: object) -> bytes:
    """Encode an image with Pillow and return the bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format=image_format, **options)
    return buffer.getvalue()


def overlay_blend(base: Image.Image, tint: Image.Image, alpha: float) -> Image.Image:
    """Blend ``tint`` over ``base`` in overlay mode at a constant opacity."""
    overlaid = ImageChops.overlay(base, tint)
    return Image.blend(base, overlaid, alpha)
