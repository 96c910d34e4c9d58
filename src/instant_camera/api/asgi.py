"""ASGI entrypoint for the instant camera API."""

from instant_camera.api.app import create_app
from instant_camera.containers import build_container

app = create_app(build_container())
