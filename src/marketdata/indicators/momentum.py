"""Momentum indicators: RSI, MACD, stochastic oscillator and percent returns."""

from marketdata.indicators.models import Series
from marketdata.indicators.moving_average import ema_values, sma_values
from marketdata.indicators.series import empty_series, left_pad

#: %K reported when the high/low window has zero width.
STOCHASTIC_FLAT_VALUE = 50.0


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100 - 100 / (1 + rs)


def rsi(closes: list[float], period: int = 14) -> Series:
    """Relative Strength Index with Wilder smoothing.

    The first value sits at index ``period`` (it needs ``period`` price
    changes). A window without losses reads 100.
    """
    if len(closes) < period + 1:
        return empty_series(len(closes))

    changes = [closes[i] - closes[i - 1] for i in range(1, len(closes))]
    gains = [max(c, 0.0) for c in changes]
    losses = [max(-c, 0.0) for c in changes]

    avg_gain = sum(gains[:period]) / period
    avg_loss = sum(losses[:period]) / period
    values = [_rsi_from_averages(avg_gain, avg_loss)]

    for gain, loss in zip(gains[period:], losses[period:]):
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period
        values.append(_rsi_from_averages(avg_gain, avg_loss))

    return left_pad(values, len(closes))


def macd(
    closes: list[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> dict[str, Series]:
    """Moving Average Convergence Divergence.

    ``macd`` is EMA(fast) - EMA(slow) and starts once the slower EMA exists;
    ``signal`` is an EMA of the MACD line and ``histogram`` is
    ``macd - signal``, both starting ``signal_period - 1`` values later.
    Inputs too short to produce a single signal value yield all-None series.
    """
    n = len(closes)
    long_period = max(fast_period, slow_period)
    if n < long_period + signal_period - 1:
        return {"macd": empty_series(n), "signal": empty_series(n), "histogram": empty_series(n)}

    fast = left_pad(ema_values(closes, fast_period), n)
    slow = left_pad(ema_values(closes, slow_period), n)
    line = [f - s for f, s in zip(fast[long_period - 1 :], slow[long_period - 1 :])]

    signal = ema_values(line, signal_period)
    histogram = [m - s for m, s in zip(line[signal_period - 1 :], signal)]

    return {
        "macd": left_pad(line, n),
        "signal": left_pad(signal, n),
        "histogram": left_pad(histogram, n),
    }


def stochastic(
    highs: list[float],
    lows: list[float],
    closes: list[float],
    period: int = 14,
    signal_period: int = 3,
) -> dict[str, Series]:
    """Stochastic oscillator.

    %K = (close - lowest low) / (highest high - lowest low) * 100 over the
    trailing ``period`` candles; %D is the SMA of %K over ``signal_period``.
    """
    n = len(closes)
    if n < period:
        return {"k": empty_series(n), "d": empty_series(n)}

    k_values = []
    for i in range(period - 1, n):
        highest = max(highs[i - period + 1 : i + 1])
        lowest = min(lows[i - period + 1 : i + 1])
        if highest == lowest:
            k_values.append(STOCHASTIC_FLAT_VALUE)
        else:
            k_values.append((closes[i] - lowest) / (highest - lowest) * 100)

    return {
        "k": left_pad(k_values, n),
        "d": left_pad(sma_values(k_values, signal_period), n),
    }


def returns(closes: list[float]) -> Series:
    """Percent change from the previous close; the first candle has no return."""
    if not closes:
        return []

    result: Series = [None]
    for prev, cur in zip(closes, closes[1:]):
        result.append(None if prev == 0 else (cur - prev) / prev * 100)
    return result
