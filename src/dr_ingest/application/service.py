"""IngestionService — runs the downsampler off the event loop and publishes.

Flow per upload:
  1. spool the upload to UPLOAD_DIR (a file can be re-opened for pass 2)
  2. ingest() in a worker thread; reads of the old series keep being served
  3. publish the new series and re-attach playback (tick 0, STOPPED)
  4. delete the spooled file, success or not

Uploads are serialized: a second upload waits for the first to finish.
"""

import asyncio
import logging
from typing import BinaryIO

from starlette.concurrency import run_in_threadpool

from config.settings import settings
from src.dr_common.errors import StreamReadError
from src.dr_ingest.domain.downsampler import ingest
from src.dr_ingest.domain.source import RecordSource
from src.dr_ingest.infrastructure.sources import CsvFileSource
from src.dr_ingest.infrastructure.upload_spool import discard_upload, spool_upload
from src.dr_playback.application.service import PlaybackManager, get_playback_manager
from src.dr_store.application.schemas import SeriesSummary
from src.dr_store.domain.store import SnapshotStore, get_snapshot_store

logger = logging.getLogger(__name__)


class IngestionService:
    def __init__(
        self,
        store: SnapshotStore | None = None,
        playback: PlaybackManager | None = None,
        sample_budget: int | None = None,
    ) -> None:
        self._store = store
        self._playback = playback
        self._sample_budget = sample_budget
        self._lock = asyncio.Lock()

    @property
    def store(self) -> SnapshotStore:
        return self._store or get_snapshot_store()

    @property
    def playback(self) -> PlaybackManager:
        return self._playback or get_playback_manager()

    @property
    def sample_budget(self) -> int:
        return self._sample_budget or settings.SAMPLE_BUDGET

    async def ingest_source(self, source: RecordSource) -> SeriesSummary:
        async with self._lock:
            series = await run_in_threadpool(
                ingest, source, self.sample_budget, settings.INGEST_PROGRESS_EVERY
            )
            self.store.publish(series)
            await self.playback.attach(series)
        return SeriesSummary.from_series(series)

    async def ingest_upload(self, stream: BinaryIO, filename: str | None = None) -> SeriesSummary:
        logger.info("Starting file processing: %s", filename or "<unnamed>")
        try:
            path = await run_in_threadpool(spool_upload, stream, settings.UPLOAD_DIR)
        except OSError as exc:
            raise StreamReadError(f"could not store upload: {exc}") from exc
        try:
            return await self.ingest_source(CsvFileSource(path))
        finally:
            discard_upload(path)
