"""Tests for container wiring."""

import asyncio

import pytest

from instant_camera.adapters.file_key_value_store import FileKeyValueStore
from instant_camera.config import Settings, parse_command
from instant_camera.containers import build_container, build_medium


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert isinstance(container.photo_store.medium, FileKeyValueStore)
    assert container.photo_store.max_photos == 50
    assert container.develop_tracker.develop_time_ms == settings.develop_time_ms
    assert container.composer.timezone is not None
    asyncio.run(container.close_resources())


def test_build_medium_requires_supabase_credentials(settings: Settings) -> None:
    settings.storage_backend = "supabase"

    with pytest.raises(ValueError, match="Supabase"):
        build_medium(settings)


def test_build_medium_rejects_unknown_backend(settings: Settings) -> None:
    settings.storage_backend = "floppy"

    with pytest.raises(ValueError, match="floppy"):
        build_medium(settings)


def test_parse_command() -> None:
    assert parse_command(None) is None
    assert parse_command("  ") is None
    assert parse_command("xclip -selection clipboard -t {mime_type} -i") == [
        "xclip",
        "-selection",
        "clipboard",
        "-t",
        "{mime_type}",
        "-i",
    ]
