"""Snap candle timestamps onto interval boundaries."""

from marketdata.models import Candle, format_timestamp
from marketdata.processing.timeframe import infer_timeframe


def align_timestamps(candles: list[Candle], timeframe: int | None = None) -> list[Candle]:
    """Floor every timestamp to a multiple of ``timeframe``.

    Shifted candles get their ``datetime`` recomputed and keep the
    pre-shift value in ``original_timestamp``. Aligning an aligned sequence
    changes nothing.

    Args:
        candles: Candle sequence.
        timeframe: Interval in milliseconds; inferred from the input when None.

    Returns:
        A new list in input order. Unchanged copies if the interval is undetectable.
    """
    if timeframe is None:
        timeframe = infer_timeframe(candles)
    if not timeframe or timeframe <= 0:
        return [c.copy() for c in candles]

    aligned_candles = []
    for candle in candles:
        aligned = (candle.timestamp // timeframe) * timeframe
        if aligned == candle.timestamp:
            aligned_candles.append(candle.copy())
        else:
            aligned_candles.append(
                candle.copy(
                    timestamp=aligned,
                    datetime=format_timestamp(aligned),
                    original_timestamp=candle.timestamp,
                )
            )
    return aligned_candles
