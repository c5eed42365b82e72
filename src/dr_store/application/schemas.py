"""Pydantic schemas for snapshot query responses.

Prices leave the API as JSON numbers (float) for chart consumers; the domain
keeps them as Decimal.
"""

from pydantic import BaseModel

from src.dr_store.domain.models import DepthSnapshot, PriceLevel, SampleSeries

# ---------------------------------------------------------------------------
# Price level / snapshot
# ---------------------------------------------------------------------------


class PriceLevelOut(BaseModel):
    price: float
    size: int

    @classmethod
    def from_domain(cls, level: PriceLevel) -> "PriceLevelOut":
        return cls(price=float(level.price), size=level.size)


class SnapshotOut(BaseModel):
    timestamp: str | int
    tick_index: int
    bids: list[PriceLevelOut]
    asks: list[PriceLevelOut]
    mid_price: float

    @classmethod
    def from_domain(cls, s: DepthSnapshot) -> "SnapshotOut":
        return cls(
            timestamp=s.timestamp,
            tick_index=s.tick_index,
            bids=[PriceLevelOut.from_domain(lv) for lv in s.bids],
            asks=[PriceLevelOut.from_domain(lv) for lv in s.asks],
            mid_price=float(s.mid_price),
        )


# ---------------------------------------------------------------------------
# Series
# ---------------------------------------------------------------------------


class SeriesSummary(BaseModel):
    total_ticks: int
    sample_count: int
    stride: int

    @classmethod
    def from_series(cls, series: SampleSeries) -> "SeriesSummary":
        return cls(
            total_ticks=series.total_ticks,
            sample_count=series.sample_count,
            stride=series.stride,
        )


class OrderbookResponse(BaseModel):
    snapshots: list[SnapshotOut]
    total_ticks: int
    stride: int  # stride used at ingestion, authoritative
    derived_stride: int  # ceil(total_ticks / len(snapshots)), informational

    @classmethod
    def from_series(cls, series: SampleSeries) -> "OrderbookResponse":
        return cls(
            snapshots=[SnapshotOut.from_domain(s) for s in series.samples],
            total_ticks=series.total_ticks,
            stride=series.stride,
            derived_stride=series.derived_stride,
        )
