"""Stride calculation for fixed-budget downsampling.

Integer arithmetic only: ceil(a / b) is written as -(-a // b) so that very
large record counts never round through float.
"""


def compute_stride(total_records: int, sample_budget: int) -> int:
    """Smallest stride keeping ceil(total_records / stride) <= sample_budget.

    stride = max(1, ceil(total_records / sample_budget))
    """
    if sample_budget < 1:
        raise ValueError(f"sample_budget must be >= 1, got {sample_budget}")
    if total_records <= 0:
        return 1
    return max(1, -(-total_records // sample_budget))


def expected_sample_count(total_records: int, stride: int) -> int:
    """Number of rows with row_index % stride == 0 among total_records rows."""
    if stride < 1:
        raise ValueError(f"stride must be >= 1, got {stride}")
    if total_records <= 0:
        return 0
    return -(-total_records // stride)
