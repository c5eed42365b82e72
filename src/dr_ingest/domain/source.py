# src/dr_ingest/domain/source.py
"""RecordSource Protocol — a re-openable producer of raw rows.

Downsampling needs two passes (count, then sample), so a source must hand out
a fresh iterator on every open() instead of relying on a rewindable handle.
Unit tests inject in-memory sources; infrastructure provides the CSV reader.
"""

from collections.abc import Iterator, Mapping
from contextlib import AbstractContextManager
from typing import Protocol

Row = Mapping[str, str | None]


class RecordSource(Protocol):
    def open(self) -> AbstractContextManager[Iterator[Row]]: ...
