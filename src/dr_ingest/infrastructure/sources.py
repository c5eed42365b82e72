"""RecordSource implementations."""

import csv
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from src.dr_ingest.domain.source import Row


class CsvFileSource:
    """Header-first CSV file; each open() re-reads the file from disk.

    utf-8-sig strips the byte-order mark spreadsheet exports put before the header.
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8-sig") -> None:
        self._path = Path(path)
        self._encoding = encoding

    @contextmanager
    def open(self) -> Iterator[Iterator[Row]]:
        with self._path.open("r", encoding=self._encoding, newline="") as fh:
            yield iter(csv.DictReader(fh))


class IterableSource:
    """Wraps a producer callable; each open() calls it again for a fresh iterable."""

    def __init__(self, factory: Callable[[], Iterable[Row]]) -> None:
        self._factory = factory

    @contextmanager
    def open(self) -> Iterator[Iterator[Row]]:
        yield iter(self._factory())
