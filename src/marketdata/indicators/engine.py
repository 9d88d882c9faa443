"""Indicator engine: computes requested indicators over a clean candle batch.

Requested names are resolved to ``IndicatorName`` members up front; every
member has exactly one calculator in ``_CALCULATORS``. Each calculator
returns series aligned to the input length, so results can be merged back
onto the candles position by position.
"""

from collections.abc import Callable, Iterable
from typing import Any

from marketdata.indicators import momentum, moving_average, volatility, volume
from marketdata.indicators.models import (
    IndicatorName,
    IndicatorOutput,
    IndicatorParameters,
    IndicatorResult,
)
from marketdata.indicators.series import round_series
from marketdata.logging import get_logger
from marketdata.models import Candle

logger = get_logger(__name__)

DEFAULT_INDICATORS = (IndicatorName.SMA, IndicatorName.EMA, IndicatorName.RSI)
DEFAULT_PRECISION = 8

_Calculator = Callable[[list[Candle], IndicatorParameters], IndicatorOutput]


def _closes(candles: list[Candle]) -> list[float]:
    return [c.close for c in candles]


def _hlc(candles: list[Candle]) -> tuple[list[float], list[float], list[float]]:
    return [c.high for c in candles], [c.low for c in candles], [c.close for c in candles]


def _sma(candles: list[Candle], params: IndicatorParameters) -> IndicatorOutput:
    return moving_average.sma(_closes(candles), params.sma_period)


def _ema(candles: list[Candle], params: IndicatorParameters) -> IndicatorOutput:
    return moving_average.ema(_closes(candles), params.ema_period)


def _rsi(candles: list[Candle], params: IndicatorParameters) -> IndicatorOutput:
    return momentum.rsi(_closes(candles), params.rsi_period)


def _macd(candles: list[Candle], params: IndicatorParameters) -> IndicatorOutput:
    return momentum.macd(
        _closes(candles),
        params.macd_fast_period,
        params.macd_slow_period,
        params.macd_signal_period,
    )


def _bollinger(candles: list[Candle], params: IndicatorParameters) -> IndicatorOutput:
    return volatility.bollinger_bands(
        _closes(candles), params.bollinger_period, params.bollinger_std_dev
    )


def _atr(candles: list[Candle], params: IndicatorParameters) -> IndicatorOutput:
    return volatility.atr(*_hlc(candles), params.atr_period)


def _stochastic(candles: list[Candle], params: IndicatorParameters) -> IndicatorOutput:
    return momentum.stochastic(
        *_hlc(candles), params.stochastic_period, params.stochastic_signal_period
    )


def _obv(candles: list[Candle], params: IndicatorParameters) -> IndicatorOutput:
    return volume.obv(_closes(candles), [c.volume for c in candles])


def _returns(candles: list[Candle], params: IndicatorParameters) -> IndicatorOutput:
    return momentum.returns(_closes(candles))


_CALCULATORS: dict[IndicatorName, _Calculator] = {
    IndicatorName.SMA: _sma,
    IndicatorName.EMA: _ema,
    IndicatorName.RSI: _rsi,
    IndicatorName.MACD: _macd,
    IndicatorName.BOLLINGER: _bollinger,
    IndicatorName.ATR: _atr,
    IndicatorName.STOCHASTIC: _stochastic,
    IndicatorName.OBV: _obv,
    IndicatorName.RETURNS: _returns,
}


def resolve_indicators(names: Iterable[str]) -> list[IndicatorName]:
    """Map request names to indicators, dropping unknown names and duplicates.

    Unknown names are logged and skipped rather than rejected.
    """
    resolved: list[IndicatorName] = []
    for name in names:
        indicator = IndicatorName.parse(name)
        if indicator is None:
            logger.warning("unknown_indicator", indicator=name)
            continue
        if indicator not in resolved:
            resolved.append(indicator)
    return resolved


def _round_output(output: IndicatorOutput, precision: int) -> IndicatorOutput:
    if isinstance(output, dict):
        return {key: round_series(series, precision) for key, series in output.items()}
    return round_series(output, precision)


def combine_with_data(
    candles: list[Candle], indicators: dict[str, IndicatorOutput]
) -> list[dict[str, Any]]:
    """Merge indicator values onto each candle record.

    Single series are added under the indicator name; sub-series under
    ``{indicator}_{sub}`` (e.g. ``macd_signal``, ``bollinger_upper``).
    """
    combined = []
    for i, candle in enumerate(candles):
        record = candle.to_dict()
        for name, output in indicators.items():
            if isinstance(output, dict):
                for sub_name, series in output.items():
                    record[f"{name}_{sub_name}"] = series[i] if i < len(series) else None
            else:
                record[name] = output[i] if i < len(output) else None
        combined.append(record)
    return combined


def calculate_indicators(
    candles: list[Candle],
    indicators: Iterable[str] | None = None,
    parameters: IndicatorParameters | None = None,
    combine: bool = False,
    precision: int = DEFAULT_PRECISION,
) -> IndicatorResult:
    """Compute the requested indicators over ``candles``.

    Args:
        candles: Clean candle sequence, ascending by timestamp.
        indicators: Indicator names; defaults to sma, ema and rsi.
        parameters: Periods and multipliers; defaults per IndicatorParameters.
        combine: Also return per-candle records with indicator values merged in.
        precision: Decimal places kept on every value.

    Returns:
        IndicatorResult keyed by indicator name, in request order.
    """
    parameters = parameters or IndicatorParameters()
    if indicators is None:
        requested = list(DEFAULT_INDICATORS)
    else:
        requested = resolve_indicators(indicators)

    outputs: dict[str, IndicatorOutput] = {}
    for indicator in requested:
        output = _CALCULATORS[indicator](candles, parameters)
        outputs[indicator.value] = _round_output(output, precision)

    logger.debug(
        "indicators_calculated",
        candles=len(candles),
        indicators=list(outputs),
    )

    return IndicatorResult(
        original_data=candles,
        indicators=outputs,
        combined_data=combine_with_data(candles, outputs) if combine else None,
    )
