"""SnapshotQueryService — read-only view over the active SampleSeries."""

from src.dr_common.errors import NoDatasetError
from src.dr_store.application.schemas import OrderbookResponse, SeriesSummary
from src.dr_store.domain.models import SampleSeries
from src.dr_store.domain.store import SnapshotStore, get_snapshot_store


class SnapshotQueryService:
    def __init__(self, store: SnapshotStore | None = None) -> None:
        self._store = store

    @property
    def store(self) -> SnapshotStore:
        # Resolved lazily so tests can reset the process-wide store.
        return self._store or get_snapshot_store()

    def _require_series(self) -> SampleSeries:
        series = self.store.current()
        if series is None:
            raise NoDatasetError()
        return series

    def get_orderbook(self) -> OrderbookResponse:
        return OrderbookResponse.from_series(self._require_series())

    def get_summary(self) -> SeriesSummary:
        return SeriesSummary.from_series(self._require_series())
