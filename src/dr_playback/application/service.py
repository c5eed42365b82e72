# src/dr_playback/application/service.py
"""PlaybackManager — keeps exactly one PlaybackSession bound to the active series.

A session lives as long as the SampleSeries it was built for. When the store
publishes a new series the old session is closed and a fresh one (tick 0,
STOPPED) takes its place.
"""

import asyncio
import logging

from src.dr_common.errors import NoDatasetError
from src.dr_playback.application.schemas import FrameOut, PlaybackStateOut, PlaybackView
from src.dr_playback.application.session import PlaybackSession
from src.dr_store.domain.models import SampleSeries
from src.dr_store.domain.store import SnapshotStore, get_snapshot_store

logger = logging.getLogger(__name__)


class PlaybackManager:
    def __init__(self, store: SnapshotStore | None = None) -> None:
        self._store = store
        self._session: PlaybackSession | None = None
        self._lock = asyncio.Lock()

    @property
    def store(self) -> SnapshotStore:
        return self._store or get_snapshot_store()

    async def attach(self, series: SampleSeries) -> PlaybackSession:
        async with self._lock:
            return await self._attach_locked(series)

    async def get_session(self) -> PlaybackSession:
        """Session for the currently published series, created on first use."""
        async with self._lock:
            series = self.store.current()
            if series is None:
                raise NoDatasetError()
            if self._session is None or self._session.series is not series:
                return await self._attach_locked(series)
            return self._session

    async def shutdown(self) -> None:
        async with self._lock:
            if self._session is not None:
                await self._session.close()
                self._session = None

    async def _attach_locked(self, series: SampleSeries) -> PlaybackSession:
        if self._session is not None:
            if self._session.series is series:
                return self._session
            await self._session.close()
        self._session = PlaybackSession(series)
        logger.info(
            "Playback session attached: %d ticks, %d samples, stride %d",
            series.total_ticks, series.sample_count, series.stride,
        )
        return self._session


_manager: PlaybackManager | None = None


def get_playback_manager() -> PlaybackManager:
    global _manager  # noqa: PLW0603
    if _manager is None:
        _manager = PlaybackManager()
    return _manager


def build_view(session: PlaybackSession) -> PlaybackView:
    # Both reads are synchronous, so no advance step can run between them.
    state = session.current_state()
    snapshot = session.current_snapshot()
    return PlaybackView(
        state=PlaybackStateOut.from_domain(state),
        frame=FrameOut.from_domain(snapshot),
        total_ticks=session.series.total_ticks,
        stride=session.series.stride,
    )
