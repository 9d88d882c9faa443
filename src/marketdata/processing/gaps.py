"""Forward-fill reconstruction of missing candles."""

from marketdata.exceptions import DataIntegrityError
from marketdata.logging import get_logger
from marketdata.models import Candle, format_timestamp
from marketdata.processing.timeframe import infer_timeframe

logger = get_logger(__name__)


def expected_timestamps(start_ms: int, end_ms: int, timeframe_ms: int) -> range:
    """Every timestamp from ``start_ms`` to ``end_ms`` inclusive at ``timeframe_ms`` stride."""
    return range(start_ms, end_ms + 1, timeframe_ms)


def fill_missing_values(
    candles: list[Candle],
    timeframe: int | None = None,
    max_candles: int | None = None,
) -> list[Candle]:
    """Rebuild an evenly spaced sequence, forward-filling missing candles.

    The input is sorted ascending first. Every expected timestamp between the
    first and last candle is emitted: present candles are kept, missing ones
    are synthesized from the previous candle's close (``open == high == low
    == close``, ``volume == 0``, ``interpolated=True``). Candles that sit off
    the grid anchored at the first timestamp are dropped; align timestamps
    beforehand to keep them. When two candles share a timestamp the later
    one in sorted order wins.

    Args:
        candles: Candle sequence in any order.
        timeframe: Interval in milliseconds. Inferred from the sorted input
            when not supplied.
        max_candles: Upper bound on the rebuilt sequence length. None means
            unbounded.

    Returns:
        A new list. If the interval cannot be determined the sorted input is
        returned as-is.

    Raises:
        DataIntegrityError: if the grid between the first and last candle
            holds more than ``max_candles`` slots.
    """
    if not candles:
        return []

    ordered = sorted(candles, key=lambda c: c.timestamp)
    if timeframe is None:
        timeframe = infer_timeframe(ordered)
    if not timeframe or timeframe <= 0:
        return [c.copy() for c in ordered]

    grid = expected_timestamps(ordered[0].timestamp, ordered[-1].timestamp, timeframe)
    if max_candles is not None and len(grid) > max_candles:
        logger.warning(
            "gap_fill_rejected",
            timeframe_ms=timeframe,
            slots=len(grid),
            max_candles=max_candles,
        )
        raise DataIntegrityError(
            f"Filling gaps at a {timeframe} ms interval would produce {len(grid)} candles "
            f"(limit {max_candles})"
        )

    by_timestamp = {c.timestamp: c for c in ordered}

    filled: list[Candle] = []
    last_valid: Candle | None = None
    synthesized = 0
    for ts in grid:
        existing = by_timestamp.get(ts)
        if existing is not None:
            candle = existing.copy()
            filled.append(candle)
            last_valid = candle
        elif last_valid is not None:
            price = last_valid.close
            filled.append(
                Candle(
                    timestamp=ts,
                    datetime=format_timestamp(ts),
                    open=price,
                    high=price,
                    low=price,
                    close=price,
                    volume=0.0,
                    interpolated=True,
                )
            )
            synthesized += 1
        # No predecessor yet: nothing to carry forward, skip the slot.

    if synthesized:
        logger.debug(
            "gaps_filled",
            timeframe_ms=timeframe,
            input_count=len(candles),
            synthesized=synthesized,
        )
    return filled
