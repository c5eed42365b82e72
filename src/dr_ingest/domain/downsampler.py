"""Two-pass streaming downsampler.

Pass 1: count rows (nothing retained).
Pass 2: stride = compute_stride(total, budget); keep row_index % stride == 0.

Retained memory is bounded by the sample budget regardless of input size.
Either pass failing raises StreamReadError and nothing is returned, so the
caller never publishes a partial series.
"""

import csv
import logging

from src.dr_common.errors import EmptyDatasetError, StreamReadError
from src.dr_ingest.domain.parser import MBP10_COLUMNS, missing_columns, parse_row
from src.dr_ingest.domain.source import RecordSource, Row
from src.dr_ingest.domain.stride import compute_stride, expected_sample_count
from src.dr_store.domain.models import DepthSnapshot, SampleSeries

logger = logging.getLogger(__name__)

_READ_ERRORS = (OSError, csv.Error, UnicodeDecodeError)


def count_records(source: RecordSource, progress_every: int = 100_000) -> int:
    """Pass 1: number of rows in the stream."""
    count = 0
    try:
        with source.open() as rows:
            for row in rows:
                if count == 0 and row is not None:
                    _warn_on_missing_columns(row)
                count += 1
                if progress_every and count % progress_every == 0:
                    logger.info("Counting... %d rows", count)
    except _READ_ERRORS as exc:
        raise StreamReadError(f"pass 1 failed after {count} rows: {exc}") from exc
    return count


def _warn_on_missing_columns(row: Row) -> None:
    missing = missing_columns(row.keys())
    if missing:
        logger.warning(
            "Records lack %d of %d MBP-10 columns (first: %s); those levels will be empty",
            len(missing), len(MBP10_COLUMNS), missing[0],
        )


def sample_records(
    source: RecordSource,
    total_records: int,
    stride: int,
    progress_every: int = 100_000,
) -> tuple[DepthSnapshot, ...]:
    """Pass 2: parse every stride-th row; other rows are skipped unparsed."""
    samples: list[DepthSnapshot] = []
    row_index = 0
    try:
        with source.open() as rows:
            for row in rows:
                if row_index % stride == 0:
                    samples.append(parse_row(row, row_index))
                row_index += 1
                if progress_every and row_index % progress_every == 0:
                    logger.info(
                        "Processing... %d/%d rows, %d samples",
                        row_index, total_records, len(samples),
                    )
    except _READ_ERRORS as exc:
        raise StreamReadError(f"pass 2 failed at row {row_index}: {exc}") from exc

    if row_index != total_records:
        raise StreamReadError(
            f"stream changed between passes: counted {total_records} rows, re-read {row_index}"
        )
    return tuple(samples)


def ingest(
    source: RecordSource,
    sample_budget: int,
    progress_every: int = 100_000,
) -> SampleSeries:
    """Downsample a re-openable record stream into a bounded SampleSeries.

    Raises:
        EmptyDatasetError: the stream has zero rows.
        StreamReadError: I/O or structural failure in either pass.
    """
    total_records = count_records(source, progress_every)
    logger.info("Total rows: %d", total_records)
    if total_records == 0:
        raise EmptyDatasetError()

    stride = compute_stride(total_records, sample_budget)
    logger.info(
        "Using stride of %d to get %d samples (budget %d)",
        stride, expected_sample_count(total_records, stride), sample_budget,
    )

    samples = sample_records(source, total_records, stride, progress_every)
    logger.info("Done! Kept %d samples from %d total ticks", len(samples), total_records)
    return SampleSeries(samples=samples, total_ticks=total_records, stride=stride)
