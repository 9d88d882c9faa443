"""Helpers for keeping indicator output aligned with its input candles."""

from marketdata.indicators.models import Series


def left_pad(values: list[float], length: int) -> Series:
    """Prefix ``values`` with ``None`` so the result has exactly ``length`` items."""
    padded: Series = [None] * (length - len(values))
    padded.extend(values)
    return padded


def empty_series(length: int) -> Series:
    """An all-``None`` series, used when the input is shorter than the lookback."""
    return [None] * length


def round_series(series: Series, precision: int) -> Series:
    return [None if v is None else round(v, precision) for v in series]
