"""Batching helpers for callers that fetch or store long candle histories.

The pipeline itself never paginates. Exchange fetchers split a date range
into request windows of at most ``max_candles`` candles, and storage writers
split results into fixed-size chunks to stay under document size limits.
"""

from marketdata.config import BatchSettings
from marketdata.exceptions import InvalidTimeframeError
from marketdata.models import Candle

_UNIT_MS = {
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
    "w": 7 * 24 * 60 * 60 * 1000,
}

_TIMEFRAME_HINT = "e.g. 1m, 1h, 1d, 1w"


def timeframe_to_ms(timeframe: str) -> int:
    """Convert an exchange timeframe string ("1m", "4h", "1d", "1w") to milliseconds."""
    if not isinstance(timeframe, str) or len(timeframe) < 2:
        raise InvalidTimeframeError(f"Invalid timeframe: {timeframe!r}", required=_TIMEFRAME_HINT)

    unit = timeframe[-1]
    amount = timeframe[:-1]
    if unit not in _UNIT_MS or not amount.isdigit() or int(amount) <= 0:
        raise InvalidTimeframeError(f"Invalid timeframe: {timeframe!r}", required=_TIMEFRAME_HINT)
    return int(amount) * _UNIT_MS[unit]


def plan_fetch_windows(
    since_ms: int,
    until_ms: int,
    timeframe: str | int,
    max_candles: int | None = None,
) -> list[tuple[int, int]]:
    """Split ``[since_ms, until_ms)`` into contiguous request windows.

    Each window spans at most ``max_candles`` candles of the given
    timeframe; the last one is truncated at ``until_ms``.

    Args:
        since_ms: Range start (inclusive), epoch milliseconds.
        until_ms: Range end (exclusive), epoch milliseconds.
        timeframe: Timeframe string or interval in milliseconds.
        max_candles: Page size accepted by the exchange; defaults to
            ``BATCH_MAX_CANDLES_PER_REQUEST``.
    """
    if max_candles is None:
        max_candles = BatchSettings().max_candles_per_request
    step = timeframe_to_ms(timeframe) if isinstance(timeframe, str) else int(timeframe)
    if step <= 0:
        raise InvalidTimeframeError(f"Invalid timeframe: {timeframe!r}")
    if max_candles <= 0:
        raise ValueError("max_candles must be positive")

    span = step * max_candles
    windows = []
    start = since_ms
    while start < until_ms:
        end = min(start + span, until_ms)
        windows.append((start, end))
        start = end
    return windows


def chunk_candles(candles: list[Candle], size: int | None = None) -> list[list[Candle]]:
    """Split candles into consecutive chunks of at most ``size`` (``BATCH_STORAGE_CHUNK_SIZE``)."""
    if size is None:
        size = BatchSettings().storage_chunk_size
    if size <= 0:
        raise ValueError("size must be positive")
    return [candles[i : i + size] for i in range(0, len(candles), size)]
