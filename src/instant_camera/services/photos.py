"""Bounded, persisted, newest-first photo store."""

import logging
from dataclasses import dataclass, field
from typing import Protocol
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError

from instant_camera.domain.errors import (
    PersistenceReadMalformedError,
    PersistenceWriteFailedError,
    PhotoNotFoundError,
)
from instant_camera.domain.photos import Photo

MAX_STORED_PHOTOS = 50

_logger = logging.getLogger(__name__)
_PHOTO_LIST = TypeAdapter(list[Photo])


class KeyValueStore(Protocol):
    """Persistence medium holding opaque values under string keys."""

    def read(self, key: str) -> bytes | None:
        """Return the stored value for a key, if present.

        Raises PersistenceReadMalformedError when the medium cannot be read.
        """

    def write(self, key: str, value: bytes) -> None:
        """Store a value, raising PersistenceWriteFailedError on rejection."""


def new_photo_id(captured_at: int) -> str:
    """Return a unique photo id derived from the capture timestamp."""
    return f"{captured_at}-{uuid4().hex}"


def serialize_photos(photos: list[Photo]) -> bytes:
    """Serialize photos to the persisted JSON array layout."""
    return _PHOTO_LIST.dump_json(photos, by_alias=True)


def parse_photos(raw: bytes) -> list[Photo]:
    """Parse the persisted JSON array layout."""
    try:
        return _PHOTO_LIST.validate_json(raw)
    except (ValidationError, ValueError) as exc:
        raise PersistenceReadMalformedError("Stored photos are malformed") from exc


@dataclass
class PhotoStore:
    """Authoritative ordered collection of captured photos."""

    medium: KeyValueStore
    key: str
    max_photos: int = MAX_STORED_PHOTOS
    _photos: list[Photo] = field(default_factory=list, init=False, repr=False)

    @property
    def photos(self) -> tuple[Photo, ...]:
        """Snapshot of stored photos, newest first."""
        return tuple(self._photos)

    def load(self) -> list[Photo]:
        """Restore photos from the medium; bad or missing data means empty."""
        try:
            raw = self.medium.read(self.key)
            loaded = [] if raw is None else parse_photos(raw)
        except PersistenceReadMalformedError:
            _logger.warning("Ignoring malformed stored photos: key=%s", self.key)
            loaded = []
        self._photos = _unique(loaded)[: self.max_photos]
        return list(self._photos)

    def get(self, photo_id: str) -> Photo:
        """Return a stored photo by id."""
        for photo in self._photos:
            if photo.id == photo_id:
                return photo
        raise PhotoNotFoundError(photo_id)

    def add(self, photo: Photo) -> None:
        """Prepend a photo, evict beyond the retention limit, persist."""
        self._photos = [photo, *self._photos][: self.max_photos]
        self._persist()

    def remove(self, photo_id: str) -> None:
        """Remove a photo by id; unknown ids are ignored."""
        remaining = [photo for photo in self._photos if photo.id != photo_id]
        if len(remaining) == len(self._photos):
            return
        self._photos = remaining
        self._persist()

    def _persist(self) -> None:
        try:
            self.medium.write(self.key, serialize_photos(self._photos))
        except PersistenceWriteFailedError:
            _logger.warning(
                "Failed to persist photos: key=%s count=%s",
                self.key,
                len(self._photos),
                exc_info=True,
            )


def _unique(photos: list[Photo]) -> list[Photo]:
    seen: set[str] = set()
    unique: list[Photo] = []
    for photo in photos:
        if photo.id in seen:
            continue
        seen.add(photo.id)
        unique.append(photo)
    return unique
