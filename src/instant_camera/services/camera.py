"""Capture orchestration: shutter, normalize, store, develop."""

import asyncio
import logging
import time
from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass, field

from instant_camera.domain.errors import CaptureBusyError, CaptureUnavailableError
from instant_camera.domain.photos import Photo
from instant_camera.services.develop import DevelopTracker
from instant_camera.services.frames import FrameNormalizer, VideoSource
from instant_camera.services.photos import PhotoStore, new_photo_id

SHUTTER_DELAY_MS = 200
PRINT_COOLDOWN_MS = 800

_logger = logging.getLogger(__name__)

VideoSourceFactory = Callable[[], AbstractContextManager[VideoSource]]


def now_ms() -> int:
    """Return the current time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass
class CameraService:
    """Turns shutter presses into stored, developing photos."""

    video_sources: VideoSourceFactory
    normalizer: FrameNormalizer
    store: PhotoStore
    tracker: DevelopTracker
    clock: Callable[[], int] = now_ms
    shutter_delay_ms: int = SHUTTER_DELAY_MS
    print_cooldown_ms: int = PRINT_COOLDOWN_MS
    _printing: bool = field(default=False, init=False)
    _closed: bool = field(default=False, init=False)
    _cooldown: asyncio.TimerHandle | None = field(default=None, init=False)

    @property
    def is_printing(self) -> bool:
        """Whether a capture is in flight or its print is still ejecting."""
        return self._printing

    async def capture(self) -> Photo | None:
        """Capture one photo; returns None when no frame was available."""
        if self._printing:
            raise CaptureBusyError("Camera is still printing")
        self._printing = True
        photo: Photo | None = None
        try:
            await asyncio.sleep(self.shutter_delay_ms / 1000)
            image_data = await asyncio.to_thread(self._grab)
            captured_at = self.clock()
            photo = Photo(
                id=new_photo_id(captured_at),
                image_data=image_data,
                captured_at=captured_at,
            )
            self.store.add(photo)
            self.tracker.start(photo.id)
            _logger.info("Captured photo: id=%s", photo.id)
            return photo
        except CaptureUnavailableError as exc:
            _logger.warning("Capture skipped: %s", exc)
            return None
        finally:
            if photo is None or self._closed:
                self._printing = False
            else:
                self._cooldown = asyncio.get_running_loop().call_later(
                    self.print_cooldown_ms / 1000, self._finish_printing
                )

    def close(self) -> None:
        """Cancel a pending print cooldown; an in-flight capture ends on its own."""
        self._closed = True
        if self._cooldown is not None:
            self._cooldown.cancel()
            self._cooldown = None
            self._printing = False

    def _grab(self) -> str:
        with self.video_sources() as source:
            frame = source.read_frame()
        return self.normalizer.normalize(frame)

    def _finish_printing(self) -> None:
        self._cooldown = None
        self._printing = False
