"""Market-data processing pipeline.

Cleans raw exchange OHLCV candles (timestamp alignment, gap filling,
outlier correction, normalization) and computes technical indicators over
the result. ``marketdata.service`` holds the two request-level operations;
``marketdata.api`` exposes them over HTTP.
"""

from marketdata.exceptions import DataIntegrityError, MarketDataError, ValidationError
from marketdata.models import Candle, ProcessingOptions, ProcessResult
from marketdata.service import calculate_indicators, process

__all__ = [
    "Candle",
    "DataIntegrityError",
    "MarketDataError",
    "ProcessResult",
    "ProcessingOptions",
    "ValidationError",
    "calculate_indicators",
    "process",
]
