"""Tests for PlaybackSession (asyncio driver) and PlaybackManager."""

import asyncio
from decimal import Decimal

import pytest

from config.settings import Settings
from src.dr_common.errors import NoDatasetError, SessionClosedError
from src.dr_playback.application.service import PlaybackManager, build_view
from src.dr_playback.application.session import PlaybackSession
from src.dr_playback.domain.scheduler import PlaybackStatus
from src.dr_store.domain.models import DepthSnapshot, PriceLevel, SampleSeries
from src.dr_store.domain.store import SnapshotStore


def _series(total: int, stride: int) -> SampleSeries:
    count = -(-total // stride)
    samples = tuple(
        DepthSnapshot(
            timestamp=i * stride,
            tick_index=i * stride,
            bids=(PriceLevel(Decimal(100 + i), 1),),
            asks=(PriceLevel(Decimal(101 + i), 1),),
            mid_price=Decimal(100 + i) + Decimal("0.5"),
        )
        for i in range(count)
    )
    return SampleSeries(samples=samples, total_ticks=total, stride=stride)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def config() -> Settings:
    return Settings(PLAYBACK_BASE_INTERVAL_MS=500, PLAYBACK_TICK_MS=1)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


async def _settle() -> None:
    """Give the advance loop a few iterations at the current fake time."""
    await asyncio.sleep(0.02)


class TestSessionCommands:
    async def test_new_session_is_stopped(self, config: Settings, clock: FakeClock) -> None:
        session = PlaybackSession(_series(5_000, 100), config, clock)
        state = session.current_state()
        assert state.tick == 0
        assert state.status is PlaybackStatus.STOPPED
        assert session.loop_running is False

    async def test_seek_and_jump_clamp(self, config: Settings, clock: FakeClock) -> None:
        session = PlaybackSession(_series(5_000, 100), config, clock)
        await session.seek(250)
        state = await session.jump(-1_000)
        assert state.tick == 0

    async def test_current_snapshot_follows_tick(self, config: Settings, clock: FakeClock) -> None:
        session = PlaybackSession(_series(5_000, 100), config, clock)
        await session.seek(1_234)
        assert session.current_snapshot().tick_index == 1_200

    async def test_stop_resets(self, config: Settings, clock: FakeClock) -> None:
        session = PlaybackSession(_series(5_000, 100), config, clock)
        await session.seek(3_000)
        state = await session.stop()
        assert state.tick == 0
        assert state.status is PlaybackStatus.STOPPED


class TestSessionAdvanceLoop:
    async def test_play_advances_with_clock(self, config: Settings, clock: FakeClock) -> None:
        session = PlaybackSession(_series(5_000, 100), config, clock)
        await session.play()
        assert session.loop_running is True
        await _settle()  # loop seeds at t=0
        clock.now = 1.0
        await _settle()
        assert session.current_state().tick == 200
        await session.close()

    async def test_pause_ends_loop(self, config: Settings, clock: FakeClock) -> None:
        session = PlaybackSession(_series(5_000, 100), config, clock)
        await session.play()
        await _settle()
        await session.pause()
        await _settle()
        assert session.loop_running is False
        clock.now = 10.0
        await _settle()
        assert session.current_state().tick == 0

    async def test_end_of_stream_pauses(self, config: Settings, clock: FakeClock) -> None:
        session = PlaybackSession(_series(250, 100), config, clock)
        await session.play()
        await _settle()
        clock.now = 100.0
        await _settle()
        state = session.current_state()
        assert state.tick == 249
        assert state.status is PlaybackStatus.PAUSED
        assert session.loop_running is False

    async def test_single_loop_across_repeated_play(
        self, config: Settings, clock: FakeClock
    ) -> None:
        session = PlaybackSession(_series(5_000, 100), config, clock)
        await session.play()
        first = session._task
        await session.play()
        assert session._task is first
        await session.close()

    async def test_speed_change_applies_to_running_loop(
        self, config: Settings, clock: FakeClock
    ) -> None:
        session = PlaybackSession(_series(5_000, 100), config, clock)
        await session.set_speed(4)
        await session.play()
        await _settle()
        clock.now = 0.5
        await _settle()
        assert session.current_state().tick == 400
        await session.close()


class TestSessionClose:
    async def test_close_cancels_loop(self, config: Settings, clock: FakeClock) -> None:
        session = PlaybackSession(_series(5_000, 100), config, clock)
        await session.play()
        await _settle()
        await session.close()
        assert session.closed is True
        assert session.loop_running is False
        clock.now = 100.0
        await _settle()
        assert session.current_state().tick == 0

    async def test_commands_after_close_raise(self, config: Settings, clock: FakeClock) -> None:
        session = PlaybackSession(_series(5_000, 100), config, clock)
        await session.close()
        with pytest.raises(SessionClosedError):
            await session.play()
        with pytest.raises(SessionClosedError):
            await session.seek(10)

    async def test_close_is_idempotent(self, config: Settings, clock: FakeClock) -> None:
        session = PlaybackSession(_series(10, 1), config, clock)
        await session.close()
        await session.close()


class TestPlaybackManager:
    async def test_no_dataset(self) -> None:
        manager = PlaybackManager(store=SnapshotStore())
        with pytest.raises(NoDatasetError):
            await manager.get_session()

    async def test_session_bound_to_published_series(self) -> None:
        store = SnapshotStore()
        series = _series(1_000, 10)
        store.publish(series)
        manager = PlaybackManager(store=store)
        session = await manager.get_session()
        assert session.series is series
        assert await manager.get_session() is session

    async def test_new_series_replaces_session(self) -> None:
        store = SnapshotStore()
        manager = PlaybackManager(store=store)
        store.publish(_series(1_000, 10))
        old = await manager.get_session()
        await old.seek(500)
        await old.play()

        newer = _series(2_000, 20)
        store.publish(newer)
        fresh = await manager.attach(newer)

        assert old.closed is True
        assert old.loop_running is False
        assert fresh.series is newer
        assert fresh.current_state().tick == 0
        assert fresh.current_state().status is PlaybackStatus.STOPPED
        assert await manager.get_session() is fresh
        await manager.shutdown()

    async def test_get_session_picks_up_publish(self) -> None:
        store = SnapshotStore()
        manager = PlaybackManager(store=store)
        store.publish(_series(100, 1))
        old = await manager.get_session()
        store.publish(_series(200, 2))
        fresh = await manager.get_session()
        assert fresh is not old
        assert old.closed is True

    async def test_shutdown_closes_session(self) -> None:
        store = SnapshotStore()
        store.publish(_series(100, 1))
        manager = PlaybackManager(store=store)
        session = await manager.get_session()
        await manager.shutdown()
        assert session.closed is True


class TestBuildView:
    async def test_view_contains_frame_and_top_of_book(
        self, config: Settings, clock: FakeClock
    ) -> None:
        session = PlaybackSession(_series(5_000, 100), config, clock)
        await session.seek(250)
        view = build_view(session)
        assert view.state.tick == 250
        assert view.state.status == "STOPPED"
        assert view.frame.snapshot.tick_index == 200
        assert view.frame.best_bid is not None
        assert view.frame.best_bid.price == 102.0
        assert view.frame.spread == 1.0
        assert view.total_ticks == 5_000
        assert view.stride == 100
