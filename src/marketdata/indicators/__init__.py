"""Technical indicators computed over clean candle sequences.

Formula modules (moving_average, momentum, volatility, volume) work on
plain float lists and return series left-padded with None to the input
length. The engine resolves request names and dispatches to them.
"""

from marketdata.indicators.engine import calculate_indicators, combine_with_data, resolve_indicators
from marketdata.indicators.models import (
    IndicatorName,
    IndicatorOutput,
    IndicatorParameters,
    IndicatorResult,
    Series,
)

__all__ = [
    "IndicatorName",
    "IndicatorOutput",
    "IndicatorParameters",
    "IndicatorResult",
    "Series",
    "calculate_indicators",
    "combine_with_data",
    "resolve_indicators",
]
