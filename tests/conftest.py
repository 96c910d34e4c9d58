"""Shared test fixtures."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from instant_camera.config import Settings
from instant_camera.containers import AppContainer
from instant_camera.domain.errors import (
    CaptureUnavailableError,
    ClipboardUnavailableError,
    PersistenceWriteFailedError,
)
from instant_camera.domain.photos import Photo
from instant_camera.services.camera import CameraService
from instant_camera.services.composer import FrameComposer
from instant_camera.services.develop import DevelopTracker
from instant_camera.services.exports import ClipboardSink, ExportService, FileSink
from instant_camera.services.frames import FrameNormalizer, VideoFrame, VideoSource
from instant_camera.services.images import encode_image, to_data_url
from instant_camera.services.photos import KeyValueStore, PhotoStore


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory persistence medium for tests."""

    values: dict[str, bytes] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def read(self, key: str) -> bytes | None:
        return self.values.get(key)

    def write(self, key: str, value: bytes) -> None:
        self.values[key] = value
        self.writes.append(key)


@dataclass
class FailingKeyValueStore(KeyValueStore):
    """Medium that rejects every write, like a full storage quota."""

    stored: bytes | None = None

    def read(self, key: str) -> bytes | None:
        return self.stored

    def write(self, key: str, value: bytes) -> None:
        raise PersistenceWriteFailedError("quota exceeded")


@dataclass
class FakeVideoSource(VideoSource):
    """Video source returning a fixed frame."""

    frame: VideoFrame | None

    def read_frame(self) -> VideoFrame:
        if self.frame is None:
            raise CaptureUnavailableError("no frame")
        return self.frame


@dataclass
class FakeVideoDevice:
    """Scoped video source factory that records acquire and release."""

    frame: VideoFrame | None = None
    opened: int = 0
    released: int = 0

    @contextmanager
    def __call__(self) -> Iterator[FakeVideoSource]:
        self.opened += 1
        try:
            yield FakeVideoSource(self.frame)
        finally:
            self.released += 1


@dataclass
class FakeClipboardSink(ClipboardSink):
    """Clipboard sink that records writes."""

    available: bool = True
    writes: list[tuple[str, bytes]] = field(default_factory=list)

    async def write_image(self, mime_type: str, data: bytes) -> None:
        if not self.available:
            raise ClipboardUnavailableError("clipboard denied")
        self.writes.append((mime_type, data))


@dataclass
class FakeFileSink(FileSink):
    """File sink that records delivered files."""

    files: list[tuple[str, bytes]] = field(default_factory=list)

    async def deliver(self, filename: str, data: bytes) -> None:
        self.files.append((filename, data))


def make_frame(
    width: int, height: int, color: tuple[int, int, int] = (90, 140, 200)
) -> VideoFrame:
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[:, :] = color
    return VideoFrame.from_array(pixels)


def make_photo(photo_id: str = "photo-1", captured_at: int = 1000) -> Photo:
    return Photo(
        id=photo_id,
        image_data="data:image/jpeg;base64,AAAA",
        captured_at=captured_at,
    )


@pytest.fixture(scope="session")
def jpeg_data_url() -> str:
    image = Image.new("RGB", (600, 600), (120, 80, 40))
    return to_data_url(encode_image(image, "JPEG", quality=70), "image/jpeg")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        storage_dir=str(tmp_path / "store"),
        export_dir=str(tmp_path / "exports"),
        caption_timezone="UTC",
        develop_time_ms=50,
        shutter_delay_ms=0,
        print_cooldown_ms=0,
    )


@pytest.fixture
def medium() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def video_device() -> FakeVideoDevice:
    return FakeVideoDevice(frame=make_frame(1920, 1080))


@pytest.fixture
def clipboard() -> FakeClipboardSink:
    return FakeClipboardSink()


@pytest.fixture
def file_sink() -> FakeFileSink:
    return FakeFileSink()


@pytest.fixture
def container(
    settings: Settings,
    medium: InMemoryKeyValueStore,
    video_device: FakeVideoDevice,
    clipboard: FakeClipboardSink,
    file_sink: FakeFileSink,
) -> AppContainer:
    photo_store = PhotoStore(medium=medium, key=settings.storage_key)
    develop_tracker = DevelopTracker(develop_time_ms=settings.develop_time_ms)
    camera_service = CameraService(
        video_sources=video_device,
        normalizer=FrameNormalizer(),
        store=photo_store,
        tracker=develop_tracker,
        shutter_delay_ms=settings.shutter_delay_ms,
        print_cooldown_ms=settings.print_cooldown_ms,
    )
    composer = FrameComposer(timezone=UTC)
    export_service = ExportService(
        composer=composer, clipboard=clipboard, file_sink=file_sink
    )

    async def close_resources() -> None:
        camera_service.close()
        await develop_tracker.close()

    return AppContainer(
        settings=settings,
        photo_store=photo_store,
        develop_tracker=develop_tracker,
        camera_service=camera_service,
        composer=composer,
        export_service=export_service,
        close_resources=close_resources,
    )
