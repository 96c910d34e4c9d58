"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from zoneinfo import ZoneInfo

from supabase import create_client

from instant_camera.adapters.clipboard_sink import CommandClipboardSink
from instant_camera.adapters.directory_file_sink import DirectoryFileSink
from instant_camera.adapters.file_key_value_store import FileKeyValueStore
from instant_camera.adapters.opencv_video_source import open_video_source
from instant_camera.adapters.supabase_key_value_store import SupabaseKeyValueStore
from instant_camera.config import Settings, parse_command
from instant_camera.services.camera import CameraService
from instant_camera.services.composer import FrameComposer
from instant_camera.services.develop import DevelopTracker
from instant_camera.services.exports import ExportService
from instant_camera.services.frames import FrameNormalizer
from instant_camera.services.photos import KeyValueStore, PhotoStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    photo_store: PhotoStore
    develop_tracker: DevelopTracker
    camera_service: CameraService
    composer: FrameComposer
    export_service: ExportService
    close_resources: Callable[[], Awaitable[None]]


def build_medium(settings: Settings) -> KeyValueStore:
    """Create the configured persistence medium."""
    if settings.storage_backend == "file":
        return FileKeyValueStore(Path(settings.storage_dir))
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires url and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    photo_store = PhotoStore(
        medium=build_medium(resolved_settings),
        key=resolved_settings.storage_key,
        max_photos=resolved_settings.max_stored_photos,
    )
    develop_tracker = DevelopTracker(
        develop_time_ms=resolved_settings.develop_time_ms
    )
    camera_service = CameraService(
        video_sources=partial(
            open_video_source,
            resolved_settings.video_device,
            resolved_settings.video_ideal_size,
        ),
        normalizer=FrameNormalizer(),
        store=photo_store,
        tracker=develop_tracker,
        shutter_delay_ms=resolved_settings.shutter_delay_ms,
        print_cooldown_ms=resolved_settings.print_cooldown_ms,
    )
    composer = FrameComposer(
        font_path=resolved_settings.caption_font_path,
        timezone=(
            ZoneInfo(resolved_settings.caption_timezone)
            if resolved_settings.caption_timezone
            else None
        ),
    )
    export_service = ExportService(
        composer=composer,
        clipboard=CommandClipboardSink(
            command=parse_command(resolved_settings.clipboard_command)
        ),
        file_sink=DirectoryFileSink(Path(resolved_settings.export_dir)),
    )

    async def close_resources() -> None:
        camera_service.close()
        await develop_tracker.close()

    return AppContainer(
        settings=resolved_settings,
        photo_store=photo_store,
        develop_tracker=develop_tracker,
        camera_service=camera_service,
        composer=composer,
        export_service=export_service,
        close_resources=close_resources,
    )
