"""Simple and exponential moving averages over closing prices."""

from marketdata.indicators.models import Series
from marketdata.indicators.series import empty_series, left_pad


def sma_values(values: list[float], period: int) -> list[float]:
    """Unpadded rolling mean; one value per complete window."""
    if period <= 0 or len(values) < period:
        return []
    return [sum(values[i - period + 1 : i + 1]) / period for i in range(period - 1, len(values))]


def ema_values(values: list[float], period: int) -> list[float]:
    """Unpadded EMA seeded with the SMA of the first ``period`` values.

    Uses the standard recursive formula:
        k = 2 / (period + 1)
        EMA_t = (value_t - EMA_{t-1}) * k + EMA_{t-1}
    """
    if period <= 0 or len(values) < period:
        return []

    k = 2 / (period + 1)
    result = [sum(values[:period]) / period]
    for v in values[period:]:
        result.append((v - result[-1]) * k + result[-1])
    return result


def sma(values: list[float], period: int = 20) -> Series:
    """Simple moving average, first value at index ``period - 1``."""
    if len(values) < period:
        return empty_series(len(values))
    return left_pad(sma_values(values, period), len(values))


def ema(values: list[float], period: int = 20) -> Series:
    """Exponential moving average, first value at index ``period - 1``."""
    if len(values) < period:
        return empty_series(len(values))
    return left_pad(ema_values(values, period), len(values))
