"""Photo collection and export endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response, status

from instant_camera.services.composer import format_caption

if TYPE_CHECKING:
    from instant_camera.containers import AppContainer
    from instant_camera.domain.photos import Photo

router = APIRouter(prefix="/photos", tags=["photos"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _summary(photo: Photo, container: AppContainer) -> dict[str, object]:
    return {
        "id": photo.id,
        "capturedAt": photo.captured_at,
        "caption": format_caption(photo.captured_at, container.composer.timezone),
        "developing": container.develop_tracker.is_developing(photo.id),
    }


@router.get("")
async def list_photos(request: Request) -> dict[str, object]:
    """Return stored photos, newest first, without image payloads."""
    container = _container(request)
    return {
        "photos": [
            _summary(photo, container) for photo in container.photo_store.photos
        ]
    }


@router.post("", status_code=status.HTTP_201_CREATED, response_model=None)
async def capture_photo(request: Request) -> dict[str, object] | Response:
    """Capture a new photo from the video source."""
    container = _container(request)
    photo = await container.camera_service.capture()
    if photo is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return _summary(photo, container)


@router.get("/{photo_id}")
async def photo_detail(photo_id: str, request: Request) -> dict[str, object]:
    """Return one stored photo including its image payload."""
    container = _container(request)
    photo = container.photo_store.get(photo_id)
    return {**_summary(photo, container), "imageData": photo.image_data}


@router.delete("/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_photo(photo_id: str, request: Request) -> Response:
    """Delete a stored photo; unknown ids are ignored."""
    _container(request).photo_store.remove(photo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{photo_id}/clipboard", status_code=status.HTTP_204_NO_CONTENT)
async def copy_photo(photo_id: str, request: Request) -> Response:
    """Copy the photo's composed frame to the clipboard."""
    container = _container(request)
    photo = container.photo_store.get(photo_id)
    await container.export_service.copy_to_clipboard(photo)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{photo_id}/download")
async def download_photo(photo_id: str, request: Request) -> Response:
    """Return the photo's composed frame as a PNG attachment."""
    container = _container(request)
    photo = container.photo_store.get(photo_id)
    exported = await container.export_service.render_png(photo)
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{exported.filename}"'
        },
    )


@router.post("/{photo_id}/export")
async def export_photo(photo_id: str, request: Request) -> dict[str, str]:
    """Save the photo's composed frame through the file sink."""
    container = _container(request)
    photo = container.photo_store.get(photo_id)
    exported = await container.export_service.download(photo)
    return {"filename": exported.filename}
