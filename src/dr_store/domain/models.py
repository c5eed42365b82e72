"""Domain models for depth replay — frozen dataclasses, no I/O.

Prices are Decimal (MBP-10 files carry them as decimal strings such as
"61.700000000"); sizes are int.
"""

from dataclasses import dataclass
from decimal import Decimal

MAX_LEVELS = 10


@dataclass(frozen=True)
class PriceLevel:
    """Single resting price level; only price > 0 and size > 0 are ever built."""

    price: Decimal
    size: int


@dataclass(frozen=True)
class DepthSnapshot:
    """Full 10-level book state at one tick of the original record stream."""

    timestamp: str | int  # ts_event column, or the tick index when absent
    tick_index: int
    bids: tuple[PriceLevel, ...]  # best (highest) first
    asks: tuple[PriceLevel, ...]  # best (lowest) first
    mid_price: Decimal

    @property
    def best_bid(self) -> PriceLevel | None:
        return self.bids[0] if self.bids else None

    @property
    def best_ask(self) -> PriceLevel | None:
        return self.asks[0] if self.asks else None

    @property
    def spread(self) -> Decimal | None:
        if not self.bids or not self.asks:
            return None
        return self.asks[0].price - self.bids[0].price


def compute_mid_price(bids: tuple[PriceLevel, ...], asks: tuple[PriceLevel, ...]) -> Decimal:
    """(best bid + best ask) / 2, or 0 when either side is empty."""
    if not bids or not asks:
        return Decimal(0)
    return (bids[0].price + asks[0].price) / 2


@dataclass(frozen=True)
class SampleSeries:
    """Downsampled dataset: samples[i].tick_index == i * stride.

    Replaced wholesale on every ingestion, never mutated.
    """

    samples: tuple[DepthSnapshot, ...]
    total_ticks: int
    stride: int

    @property
    def sample_count(self) -> int:
        return len(self.samples)

    @property
    def derived_stride(self) -> int:
        """ceil(total_ticks / sample_count). Informational only; `stride` is authoritative."""
        if not self.samples:
            return 1
        return -(-self.total_ticks // len(self.samples))
