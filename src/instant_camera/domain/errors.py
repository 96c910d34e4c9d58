"""Error taxonomy for the photo lifecycle."""


class InstantCameraError(Exception):
    """Base class for instant camera errors."""


class CaptureUnavailableError(InstantCameraError):
    """No usable frame or drawing surface; no photo is created."""


class CaptureBusyError(InstantCameraError):
    """A previous capture is still printing."""


class DecodeError(InstantCameraError):
    """A stored image payload cannot be decoded."""


class ClipboardUnavailableError(InstantCameraError):
    """The platform denied or lacks clipboard image support."""


class PersistenceWriteFailedError(InstantCameraError):
    """The persistence medium rejected a write."""


class PersistenceReadMalformedError(InstantCameraError):
    """Persisted data could not be parsed into photos."""


class PhotoNotFoundError(InstantCameraError):
    """No stored photo has the requested id."""

    def __init__(self, photo_id: str) -> None:
        super().__init__(f"Photo not found: {photo_id}")
        self.photo_id = photo_id
