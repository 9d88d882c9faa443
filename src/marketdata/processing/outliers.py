"""Z-score clamping of anomalous highs and lows."""

import math

from marketdata.logging import get_logger
from marketdata.models import Candle

logger = get_logger(__name__)

#: Below this many candles the batch is too small for meaningful statistics.
MIN_SAMPLES = 10


def _mean_std(values: list[float]) -> tuple[float, float]:
    """Population mean and standard deviation."""
    n = len(values)
    mean = sum(values) / n
    variance = sum((v - mean) ** 2 for v in values) / n
    return mean, math.sqrt(variance)


def remove_outliers(
    candles: list[Candle],
    threshold: float = 3.0,
    min_samples: int = MIN_SAMPLES,
) -> list[Candle]:
    """Clamp highs and lows whose z-score exceeds ``threshold``.

    Statistics are computed once over the whole batch, separately for
    ``high`` and ``low``. An inflated high is lowered to ``mean + threshold *
    std``; otherwise a deflated low is raised to ``mean - threshold * std``.
    A candle is corrected on at most one side per pass (high checked first)
    and is marked ``outlier_corrected``. A dimension with zero standard
    deviation never flags anything.

    Returns:
        A new list of candles. Batches smaller than ``min_samples`` are
        returned unchanged (as copies).
    """
    if len(candles) < min_samples:
        return [c.copy() for c in candles]

    mean_high, std_high = _mean_std([c.high for c in candles])
    mean_low, std_low = _mean_std([c.low for c in candles])
    high_cap = mean_high + threshold * std_high
    low_floor = mean_low - threshold * std_low

    corrected: list[Candle] = []
    count = 0
    for candle in candles:
        if std_high > 0 and abs(candle.high - mean_high) / std_high > threshold:
            corrected.append(
                candle.copy(high=min(candle.high, high_cap), outlier_corrected=True)
            )
            count += 1
        elif std_low > 0 and abs(candle.low - mean_low) / std_low > threshold:
            corrected.append(
                candle.copy(low=max(candle.low, low_floor), outlier_corrected=True)
            )
            count += 1
        else:
            corrected.append(candle.copy())

    if count:
        logger.debug(
            "outliers_corrected",
            corrected=count,
            threshold=threshold,
            high_cap=high_cap,
            low_floor=low_floor,
        )
    return corrected
