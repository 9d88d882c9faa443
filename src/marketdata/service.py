"""Request-level operations: validate raw payloads, then run the pipeline.

These are the two contracts the HTTP layer (or any other caller) invokes.
Both accept the JSON-decoded request values as-is and raise
``ValidationError`` before doing any work if ``data`` is not a list of
candle objects.
"""

from typing import Any

from marketdata.config import AppSettings
from marketdata.indicators.engine import calculate_indicators as _calculate
from marketdata.indicators.models import IndicatorParameters, IndicatorResult
from marketdata.exceptions import ValidationError
from marketdata.models import ProcessingOptions, ProcessResult, parse_candles, parse_flag
from marketdata.processing.pipeline import run_pipeline


def process(
    data: Any,
    options: dict[str, Any] | None = None,
    settings: AppSettings | None = None,
) -> ProcessResult:
    """Clean a raw candle payload.

    Args:
        data: List of candle objects as received from the caller.
        options: camelCase processing options; missing keys use configured defaults.
        settings: Application settings (defaults loaded from the environment).
    """
    settings = settings or AppSettings()
    candles = parse_candles(data)
    parsed = ProcessingOptions.from_dict(options, defaults=settings.processing)
    return run_pipeline(candles, parsed, settings.processing)


def calculate_indicators(
    data: Any,
    indicators: list[str] | None = None,
    parameters: dict[str, Any] | None = None,
    combine_with_data: bool | None = None,
    settings: AppSettings | None = None,
) -> IndicatorResult:
    """Compute technical indicators over a raw candle payload.

    ``combine_with_data`` may also be supplied as ``parameters.combineWithData``;
    an explicit argument takes precedence. Either must be a boolean.
    """
    settings = settings or AppSettings()
    candles = parse_candles(data)
    parsed = IndicatorParameters.from_dict(parameters)

    if combine_with_data is None:
        combine_with_data = parse_flag(parameters or {}, "combineWithData", False, "parameters.")
    elif not isinstance(combine_with_data, bool):
        raise ValidationError("combineWithData must be a boolean")
    if indicators is None:
        indicators = settings.indicators.default_indicators

    return _calculate(
        candles,
        indicators,
        parsed,
        combine=combine_with_data,
        precision=settings.indicators.precision,
    )
