"""Volatility indicators: Bollinger Bands and Average True Range."""

import math

from marketdata.indicators.models import Series
from marketdata.indicators.series import empty_series, left_pad


def bollinger_bands(closes: list[float], period: int = 20, std_dev: float = 2.0) -> dict[str, Series]:
    """SMA middle band with upper/lower bands ``std_dev`` population deviations away."""
    n = len(closes)
    if n < period:
        return {"upper": empty_series(n), "middle": empty_series(n), "lower": empty_series(n)}

    upper, middle, lower = [], [], []
    for i in range(period - 1, n):
        window = closes[i - period + 1 : i + 1]
        mean = sum(window) / period
        deviation = math.sqrt(sum((v - mean) ** 2 for v in window) / period)
        middle.append(mean)
        upper.append(mean + std_dev * deviation)
        lower.append(mean - std_dev * deviation)

    return {
        "upper": left_pad(upper, n),
        "middle": left_pad(middle, n),
        "lower": left_pad(lower, n),
    }


def true_range(highs: list[float], lows: list[float], closes: list[float]) -> list[float]:
    """True range for every candle after the first (it needs a previous close)."""
    return [
        max(
            highs[i] - lows[i],
            abs(highs[i] - closes[i - 1]),
            abs(lows[i] - closes[i - 1]),
        )
        for i in range(1, len(closes))
    ]


def atr(highs: list[float], lows: list[float], closes: list[float], period: int = 14) -> Series:
    """Average True Range with Wilder smoothing, first value at index ``period``."""
    n = len(closes)
    if n < period + 1:
        return empty_series(n)

    ranges = true_range(highs, lows, closes)
    value = sum(ranges[:period]) / period
    values = [value]
    for tr in ranges[period:]:
        value = (value * (period - 1) + tr) / period
        values.append(value)

    return left_pad(values, n)
