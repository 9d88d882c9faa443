"""Min-max scaling of OHLCV fields."""

from collections.abc import Callable

from marketdata.models import Candle


def _scaler(values: list[float]) -> Callable[[float], float]:
    low = min(values)
    span = (max(values) - low) or 1.0
    return lambda v: (v - low) / span


def normalize(candles: list[Candle]) -> list[Candle]:
    """Attach ``normalized_*`` fields scaled to [0, 1] over the batch.

    Each of open/high/low/close/volume is scaled independently. A field
    whose values are all equal scales to 0 everywhere. Original prices are
    left untouched.
    """
    if not candles:
        return []

    scale_open = _scaler([c.open for c in candles])
    scale_high = _scaler([c.high for c in candles])
    scale_low = _scaler([c.low for c in candles])
    scale_close = _scaler([c.close for c in candles])
    scale_volume = _scaler([c.volume for c in candles])

    return [
        c.copy(
            normalized_open=scale_open(c.open),
            normalized_high=scale_high(c.high),
            normalized_low=scale_low(c.low),
            normalized_close=scale_close(c.close),
            normalized_volume=scale_volume(c.volume),
        )
        for c in candles
    ]
