"""OpenCV-backed live video source."""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import cv2

from instant_camera.domain.errors import CaptureUnavailableError
from instant_camera.services.frames import VideoFrame, VideoSource

_logger = logging.getLogger(__name__)


@dataclass
class OpenCvVideoSource(VideoSource):
    """Reads RGB frames from an opened ``cv2.VideoCapture``."""

    capture: Any

    def read_frame(self) -> VideoFrame:
        """Grab the current frame and convert it from BGR to RGB."""
        ok, frame = self.capture.read()
        if not ok or frame is None:
            raise CaptureUnavailableError("Video source returned no frame")
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        return VideoFrame.from_array(rgb)


@contextmanager
def open_video_source(
    device: int,
    ideal_size: int | None = None,
    capture_factory: Callable[[int], Any] = cv2.VideoCapture,
) -> Iterator[OpenCvVideoSource]:
    """Open a capture device and release it on every exit path."""
    capture = capture_factory(device)
    try:
        if not capture.isOpened():
            raise CaptureUnavailableError(f"Video device {device} is not available")
        if ideal_size:
            capture.set(cv2.CAP_PROP_FRAME_WIDTH, ideal_size)
            capture.set(cv2.CAP_PROP_FRAME_HEIGHT, ideal_size)
        yield OpenCvVideoSource(capture)
    finally:
        capture.release()
        _logger.debug("Released video device %s", device)
