"""Candle interval detection.

The interval is the modal delta between consecutive timestamps. Only the
first ``sample_size`` candles are inspected, so a long series whose spacing
changes later on is judged by its opening stretch.
"""

from collections import Counter

from marketdata.models import Candle

#: Candles inspected by default when inferring the interval.
DEFAULT_SAMPLE_SIZE = 10


def infer_timeframe(candles: list[Candle], sample_size: int = DEFAULT_SAMPLE_SIZE) -> int | None:
    """Return the most frequent timestamp delta in milliseconds.

    Deltas are taken in the order given, over at most ``sample_size - 1``
    consecutive pairs. When several deltas share the highest count, the one
    that reached that count first wins.

    Args:
        candles: Candle sequence, normally sorted ascending by timestamp.
        sample_size: Number of leading candles to inspect.

    Returns:
        The modal delta, or None if it cannot be determined (fewer than two
        candles, or a modal delta that is zero or negative).
    """
    if len(candles) < 2:
        return None

    limit = min(len(candles), max(sample_size, 2))
    counts: Counter[int] = Counter()
    best_delta = 0
    best_count = 0
    for i in range(1, limit):
        delta = candles[i].timestamp - candles[i - 1].timestamp
        counts[delta] += 1
        if counts[delta] > best_count:
            best_count = counts[delta]
            best_delta = delta

    if best_delta <= 0:
        return None
    return best_delta
