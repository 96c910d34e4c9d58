"""Transient develop state for the most recently captured photo."""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum

DEVELOP_TIME_MS = 1800

_logger = logging.getLogger(__name__)


class DevelopState(str, Enum):
    """Presentation state of a photo."""

    DEVELOPING = "developing"
    DEVELOPED = "developed"


@dataclass
class DevelopTracker:
    """Tracks at most one developing photo; the newest capture wins."""

    develop_time_ms: int = DEVELOP_TIME_MS
    _current: str | None = field(default=None, init=False)
    _timers: dict[str, asyncio.Task[None]] = field(default_factory=dict, init=False)

    @property
    def current(self) -> str | None:
        """Id of the photo currently developing, if any."""
        return self._current

    def start(self, photo_id: str) -> None:
        """Mark a new photo as developing and schedule its expiry."""
        self._cancel_timers()
        self._current = photo_id
        loop = asyncio.get_running_loop()
        self._timers[photo_id] = loop.create_task(
            self._expire(photo_id), name=f"develop:{photo_id}"
        )

    def is_developing(self, photo_id: str) -> bool:
        """Return whether the photo is inside its develop window."""
        return self._current == photo_id

    def state(self, photo_id: str) -> DevelopState:
        """Return the develop state for a photo id."""
        if self.is_developing(photo_id):
            return DevelopState.DEVELOPING
        return DevelopState.DEVELOPED

    async def close(self) -> None:
        """Cancel outstanding expiry tasks."""
        timers = list(self._timers.values())
        self._cancel_timers()
        await asyncio.gather(*timers, return_exceptions=True)
        self._current = None

    async def _expire(self, photo_id: str) -> None:
        try:
            await asyncio.sleep(self.develop_time_ms / 1000)
            if self._current == photo_id:
                self._current = None
                _logger.debug("Photo developed: id=%s", photo_id)
        finally:
            if self._timers.get(photo_id) is asyncio.current_task():
                del self._timers[photo_id]

    def _cancel_timers(self) -> None:
        for task in self._timers.values():
            task.cancel()
        self._timers.clear()
