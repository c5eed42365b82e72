"""PlaybackSession — single owner of one PlaybackScheduler.

Commands and advance steps all run under one asyncio.Lock, so each command is
applied between two steps, never during one. The advance loop task exists only
while playing; close() cancels it and no step runs afterwards.
"""

import asyncio
import contextlib
import logging
import time
from collections.abc import Callable

from config.settings import Settings, settings
from src.dr_common.errors import SessionClosedError
from src.dr_playback.domain.scheduler import PlaybackScheduler, PlaybackState
from src.dr_store.domain.frame_index import snapshot_at
from src.dr_store.domain.models import DepthSnapshot, SampleSeries

logger = logging.getLogger(__name__)


class PlaybackSession:
    def __init__(
        self,
        series: SampleSeries,
        config: Settings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        cfg = config or settings
        self._series = series
        self._scheduler = PlaybackScheduler(
            total_ticks=series.total_ticks,
            stride=series.stride,
            base_interval_s=cfg.PLAYBACK_BASE_INTERVAL_MS / 1000,
        )
        self._tick_s = cfg.PLAYBACK_TICK_MS / 1000
        self._clock = clock
        self._lock = asyncio.Lock()
        self._task: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def series(self) -> SampleSeries:
        return self._series

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def loop_running(self) -> bool:
        return self._task is not None and not self._task.done()

    # -- read side --------------------------------------------------------

    def current_state(self) -> PlaybackState:
        return self._scheduler.state()

    def current_snapshot(self) -> DepthSnapshot:
        return snapshot_at(self._series, self._scheduler.tick)

    # -- commands ---------------------------------------------------------

    async def play(self) -> PlaybackState:
        async with self._lock:
            self._ensure_open()
            self._scheduler.play()
            if not self.loop_running:
                self._task = asyncio.create_task(self._run(), name="playback-advance")
            return self._scheduler.state()

    async def pause(self) -> PlaybackState:
        async with self._lock:
            self._ensure_open()
            self._scheduler.pause()
            return self._scheduler.state()

    async def stop(self) -> PlaybackState:
        async with self._lock:
            self._ensure_open()
            self._scheduler.stop()
            return self._scheduler.state()

    async def seek(self, tick: int) -> PlaybackState:
        async with self._lock:
            self._ensure_open()
            self._scheduler.seek(tick)
            return self._scheduler.state()

    async def jump(self, delta: int) -> PlaybackState:
        async with self._lock:
            self._ensure_open()
            self._scheduler.jump(delta)
            return self._scheduler.state()

    async def set_speed(self, multiplier: float) -> PlaybackState:
        async with self._lock:
            self._ensure_open()
            self._scheduler.set_speed(multiplier)
            return self._scheduler.state()

    async def close(self) -> None:
        async with self._lock:
            self._closed = True
            task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    # -- advance loop -----------------------------------------------------

    async def _run(self) -> None:
        while True:
            async with self._lock:
                if self._closed or not self._scheduler.playing:
                    return
                self._scheduler.step(self._clock())
                if not self._scheduler.playing:
                    logger.info(
                        "Reached end of stream at tick %d, pausing", self._scheduler.tick
                    )
                    return
            await asyncio.sleep(self._tick_s)

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError()
