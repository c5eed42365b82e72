"""MBP-10 record parser: one CSV row -> DepthSnapshot.

Column layout (Databento MBP-10 CSV export):
    ts_event, ..., bid_px_00, bid_sz_00, ask_px_00, ask_sz_00, ..., ask_sz_09

A bad price/size field never aborts the row: the field degrades to absent and
the level is dropped. Only a missing row is a fault.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation

from src.dr_common.errors import StreamReadError
from src.dr_store.domain.models import (
    MAX_LEVELS,
    DepthSnapshot,
    PriceLevel,
    compute_mid_price,
)

logger = logging.getLogger(__name__)

TIMESTAMP_COLUMN = "ts_event"

# prices must survive float conversion in API output
_MAX_PRICE_EXPONENT = 300
_MAX_SIZE_DIGITS = 18
_LEADING_INT = re.compile(r"\s*([+-]?)(\d+)")


def level_columns(level: int) -> tuple[str, str, str, str]:
    """(bid_px, bid_sz, ask_px, ask_sz) column names for a 0-based level."""
    return (
        f"bid_px_{level:02d}",
        f"bid_sz_{level:02d}",
        f"ask_px_{level:02d}",
        f"ask_sz_{level:02d}",
    )


_LEVEL_COLUMNS = tuple(level_columns(i) for i in range(MAX_LEVELS))

# ts_event followed by bid_px, bid_sz, ask_px, ask_sz for levels 00..09
MBP10_COLUMNS: tuple[str, ...] = (
    TIMESTAMP_COLUMN,
    *(col for cols in _LEVEL_COLUMNS for col in cols),
)


def missing_columns(columns: Iterable[str]) -> list[str]:
    """MBP-10 columns absent from a header or row."""
    present = set(columns)
    return [col for col in MBP10_COLUMNS if col not in present]


def _parse_price(raw: str | None) -> Decimal | None:
    if raw is None:
        return None
    try:
        value = Decimal(raw)
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not value.is_finite() or value.adjusted() > _MAX_PRICE_EXPONENT:
        return None
    return value


def _parse_size(raw: str | None) -> int:
    """Leading integer digits of the field: "500.7" -> 500, "1e3" -> 1, "lots" -> 0."""
    if raw is None:
        return 0
    match = _LEADING_INT.match(raw)
    if match is None or len(match.group(2)) > _MAX_SIZE_DIGITS:
        return 0
    size = int(match.group(2))
    return -size if match.group(1) == "-" else size


def _parse_level(
    row: Mapping[str, str | None], px_col: str, sz_col: str, tick_index: int
) -> PriceLevel | None:
    raw_px = row.get(px_col)
    raw_sz = row.get(sz_col)
    price = _parse_price(raw_px)
    size = _parse_size(raw_sz)
    if price is None and raw_px not in (None, ""):
        logger.debug("tick %d: unparsable %s=%r, level dropped", tick_index, px_col, raw_px)
    if price is None or price <= 0 or size <= 0:
        return None
    return PriceLevel(price=price, size=size)


def parse_row(row: Mapping[str, str | None] | None, tick_index: int) -> DepthSnapshot:
    """Build a DepthSnapshot from one raw row.

    Levels are kept only when price > 0 and size > 0. Raises StreamReadError
    only when the row itself is missing.
    """
    if row is None:
        raise StreamReadError(f"row {tick_index} is missing")

    bids: list[PriceLevel] = []
    asks: list[PriceLevel] = []
    for bid_px, bid_sz, ask_px, ask_sz in _LEVEL_COLUMNS:
        bid = _parse_level(row, bid_px, bid_sz, tick_index)
        if bid is not None:
            bids.append(bid)
        ask = _parse_level(row, ask_px, ask_sz, tick_index)
        if ask is not None:
            asks.append(ask)

    bid_levels = tuple(bids)
    ask_levels = tuple(asks)
    timestamp = row.get(TIMESTAMP_COLUMN) or tick_index
    return DepthSnapshot(
        timestamp=timestamp,
        tick_index=tick_index,
        bids=bid_levels,
        asks=ask_levels,
        mid_price=compute_mid_price(bid_levels, ask_levels),
    )
