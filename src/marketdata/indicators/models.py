"""Indicator request and result models."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Union

from marketdata.exceptions import ValidationError
from marketdata.models import Candle

#: A series aligned to the input candles; ``None`` before the lookback is met.
Series = list[Union[float, None]]

#: Single series, or named sub-series (e.g. MACD -> macd/signal/histogram).
IndicatorOutput = Union[Series, dict[str, Series]]


class IndicatorName(str, Enum):
    """Supported technical indicators, keyed by their request name."""

    SMA = "sma"
    EMA = "ema"
    RSI = "rsi"
    MACD = "macd"
    BOLLINGER = "bollinger"
    ATR = "atr"
    STOCHASTIC = "stochastic"
    OBV = "obv"
    RETURNS = "returns"

    @classmethod
    def parse(cls, name: str) -> IndicatorName | None:
        """Case-insensitive lookup. Returns None for names we don't support."""
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            return None


# Request key for each parameter field.
_PARAMETER_KEYS = {
    "sma_period": "smaPeriod",
    "ema_period": "emaPeriod",
    "rsi_period": "rsiPeriod",
    "macd_fast_period": "macdFastPeriod",
    "macd_slow_period": "macdSlowPeriod",
    "macd_signal_period": "macdSignalPeriod",
    "bollinger_period": "bollingerPeriod",
    "bollinger_std_dev": "bollingerStdDev",
    "atr_period": "atrPeriod",
    "stochastic_period": "stochasticPeriod",
    "stochastic_signal_period": "stochasticSignalPeriod",
}


@dataclass
class IndicatorParameters:
    """Per-indicator periods and multipliers."""

    sma_period: int = 20
    ema_period: int = 20
    rsi_period: int = 14
    macd_fast_period: int = 12
    macd_slow_period: int = 26
    macd_signal_period: int = 9
    bollinger_period: int = 20
    bollinger_std_dev: float = 2.0
    atr_period: int = 14
    stochastic_period: int = 14
    stochastic_signal_period: int = 3

    @classmethod
    def from_dict(cls, parameters: dict[str, Any] | None) -> IndicatorParameters:
        """Parse camelCase request parameters; absent keys keep their defaults.

        Periods must be positive integers and ``bollingerStdDev`` a positive
        number. Unrecognised keys (including ``combineWithData``) are ignored.
        """
        if parameters is None:
            return cls()
        if not isinstance(parameters, dict):
            raise ValidationError("parameters must be an object")

        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            key = _PARAMETER_KEYS[f.name]
            value = parameters.get(key)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ValidationError(f"parameters.{key} must be a positive number")
            if f.name == "bollinger_std_dev":
                kwargs[f.name] = float(value)
            else:
                if int(value) != value:
                    raise ValidationError(f"parameters.{key} must be a whole number")
                kwargs[f.name] = int(value)
        return cls(**kwargs)


@dataclass
class IndicatorResult:
    """Indicator series computed over a candle batch."""

    original_data: list[Candle]
    indicators: dict[str, IndicatorOutput]
    combined_data: list[dict[str, Any]] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "originalData": [c.to_dict() for c in self.original_data],
            "indicators": self.indicators,
        }
        if self.combined_data is not None:
            result["combinedData"] = self.combined_data
        return result
