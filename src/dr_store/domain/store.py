"""SnapshotStore — holds the single active SampleSeries.

publish() swaps the reference under a lock; readers get either the old or the
new series, never a mix (SampleSeries is frozen).
"""

import threading

from src.dr_store.domain.models import SampleSeries


class SnapshotStore:
    def __init__(self) -> None:
        self._series: SampleSeries | None = None
        self._lock = threading.Lock()

    def publish(self, series: SampleSeries) -> None:
        with self._lock:
            self._series = series

    def current(self) -> SampleSeries | None:
        with self._lock:
            return self._series

    def reset(self) -> None:
        with self._lock:
            self._series = None


_store: SnapshotStore | None = None


def get_snapshot_store() -> SnapshotStore:
    global _store  # noqa: PLW0603
    if _store is None:
        _store = SnapshotStore()
    return _store
