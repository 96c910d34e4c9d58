"""Tests for the develop state tracker."""

import asyncio

from instant_camera.services.develop import DevelopState, DevelopTracker


def test_photo_develops_after_window() -> None:
    async def scenario() -> tuple[bool, bool]:
        tracker = DevelopTracker(develop_time_ms=20)
        tracker.start("a")
        during = tracker.is_developing("a")
        await asyncio.sleep(0.08)
        return during, tracker.is_developing("a")

    during, after = asyncio.run(scenario())

    assert during is True
    assert after is False


def test_second_capture_supersedes_first() -> None:
    async def scenario() -> DevelopTracker:
        tracker = DevelopTracker(develop_time_ms=200)
        tracker.start("a")
        await asyncio.sleep(0.1)
        tracker.start("b")
        assert not tracker.is_developing("a")
        assert tracker.is_developing("b")
        await asyncio.sleep(0.15)
        # The first window has elapsed; only the superseding photo remains.
        assert tracker.is_developing("b")
        await asyncio.sleep(0.1)
        return tracker

    tracker = asyncio.run(scenario())

    assert tracker.current is None
    assert tracker.state("a") is DevelopState.DEVELOPED
    assert tracker.state("b") is DevelopState.DEVELOPED


def test_state_reports_developing() -> None:
    async def scenario() -> DevelopState:
        tracker = DevelopTracker(develop_time_ms=1000)
        tracker.start("a")
        state = tracker.state("a")
        await tracker.close()
        return state

    assert asyncio.run(scenario()) is DevelopState.DEVELOPING


def test_close_cancels_pending_timer() -> None:
    async def scenario() -> DevelopTracker:
        tracker = DevelopTracker(develop_time_ms=1000)
        tracker.start("a")
        await tracker.close()
        return tracker

    tracker = asyncio.run(scenario())

    assert tracker.current is None
    assert tracker._timers == {}
