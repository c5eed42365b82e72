"""Frame Index Mapper: logical tick -> index into SampleSeries.samples."""

from src.dr_store.domain.models import DepthSnapshot, SampleSeries


def to_sample_index(tick: int, stride: int, sample_count: int) -> int:
    """min(tick // stride, sample_count - 1), floored at 0.

    The final stride interval may be short, hence the upper clamp.
    """
    if stride < 1:
        raise ValueError(f"stride must be >= 1, got {stride}")
    if sample_count < 1:
        raise ValueError("sample_count must be >= 1")
    if tick <= 0:
        return 0
    return min(tick // stride, sample_count - 1)


def snapshot_at(series: SampleSeries, tick: int) -> DepthSnapshot:
    """Sample shown for `tick` (the latest retained sample at or before it)."""
    return series.samples[to_sample_index(tick, series.stride, series.sample_count)]
