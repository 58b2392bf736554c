from typing import Sequence, Tuple


def percentile(sorted_durations: Sequence[int], p: float) -> int:
    """
    Nearest-rank percentile over an ascending sequence.

    The selected index is ``int((N - 1) * p / 100)`` clamped to ``[0, N - 1]``.
    No interpolation between adjacent ranks.
    """
    n = len(sorted_durations)
    if n == 0:
        return 0

    index = int((n - 1) * p / 100.0)
    if index < 0:
        index = 0
    if index >= n:
        index = n - 1
    return sorted_durations[index]


def percentiles(durations: Sequence[int]) -> Tuple[int, int]:
    """Return (p50, p95). Empty input gives (0, 0)."""
    if len(durations) == 0:
        return 0, 0

    ordered = sorted(durations)
    return percentile(ordered, 50), percentile(ordered, 95)
