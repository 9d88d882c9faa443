"""Tests for the request-level process and calculate_indicators operations."""

import pytest

from marketdata import service
from marketdata.config import AppSettings, IndicatorSettings, ProcessingSettings
from marketdata.exceptions import DataIntegrityError, ValidationError
from marketdata.models import REQUIRED_DATA_SHAPE

HOUR_MS = 3_600_000

TWO_CANDLES = [
    {"timestamp": 0, "open": 100, "high": 105, "low": 98, "close": 102, "volume": 10},
    {"timestamp": HOUR_MS, "open": 102, "high": 108, "low": 101, "close": 106, "volume": 12},
]


def _payload(count: int) -> list[dict]:
    return [
        {
            "timestamp": i * HOUR_MS,
            "open": 100 + i,
            "high": 101 + i,
            "low": 99 + i,
            "close": 100.5 + i,
            "volume": 10 + i,
        }
        for i in range(count)
    ]


class TestProcess:
    """Tests for service.process."""

    def test_two_candle_scenario(self, app_settings: AppSettings) -> None:
        result = service.process(TWO_CANDLES, {}, settings=app_settings).to_dict()

        assert result["originalCount"] == 2
        assert result["processedCount"] == 2
        assert result["processingSteps"] == ["alignTimestamps", "handleMissingValues", "removeOutliers"]
        for original, processed in zip(TWO_CANDLES, result["data"]):
            for key, value in original.items():
                assert processed[key] == value
            assert "interpolated" not in processed
            assert "outlierCorrected" not in processed

    def test_missing_data_rejected(self, app_settings: AppSettings) -> None:
        with pytest.raises(ValidationError) as exc_info:
            service.process(None, settings=app_settings)

        assert exc_info.value.status_code == 400
        assert exc_info.value.required == REQUIRED_DATA_SHAPE

    def test_non_finite_value_rejected(self, app_settings: AppSettings) -> None:
        data = _payload(3)
        data[1]["close"] = float("inf")

        with pytest.raises(DataIntegrityError):
            service.process(data, settings=app_settings)

    def test_settings_defaults_apply(self) -> None:
        settings = AppSettings(processing=ProcessingSettings(normalize=True))
        result = service.process(_payload(3), None, settings=settings)

        assert result.processing_steps[-1] == "normalize"

    def test_request_options_override_settings(self) -> None:
        settings = AppSettings(processing=ProcessingSettings(normalize=True))
        result = service.process(_payload(3), {"normalize": False}, settings=settings)

        assert "normalize" not in result.processing_steps


class TestCalculateIndicators:
    """Tests for service.calculate_indicators."""

    def test_defaults_from_settings(self, app_settings: AppSettings) -> None:
        result = service.calculate_indicators(_payload(25), settings=app_settings)
        assert list(result.indicators) == ["sma", "ema", "rsi"]

    def test_configured_default_indicators(self) -> None:
        settings = AppSettings(indicators=IndicatorSettings(default_indicators=["obv"]))
        result = service.calculate_indicators(_payload(5), settings=settings)

        assert list(result.indicators) == ["obv"]

    def test_combine_flag_inside_parameters(self, app_settings: AppSettings) -> None:
        result = service.calculate_indicators(
            _payload(5), ["returns"], {"combineWithData": True}, settings=app_settings
        )
        assert result.combined_data is not None

    def test_explicit_combine_flag_wins(self, app_settings: AppSettings) -> None:
        result = service.calculate_indicators(
            _payload(5),
            ["returns"],
            {"combineWithData": True},
            combine_with_data=False,
            settings=app_settings,
        )
        assert result.combined_data is None

    def test_sma_scenario(self, app_settings: AppSettings) -> None:
        data = [dict(row, close=100) for row in _payload(20)]
        result = service.calculate_indicators(data, ["sma"], {"smaPeriod": 20}, settings=app_settings)

        assert result.indicators["sma"] == [None] * 19 + [100.0]

    def test_invalid_data_rejected(self, app_settings: AppSettings) -> None:
        with pytest.raises(ValidationError):
            service.calculate_indicators({"not": "a list"}, settings=app_settings)

    def test_missing_required_field_rejected(self, app_settings: AppSettings) -> None:
        data = _payload(2)
        del data[0]["close"]

        with pytest.raises(ValidationError, match="close"):
            service.calculate_indicators(data, settings=app_settings)

    @pytest.mark.parametrize("flag", ["false", 1])
    def test_non_bool_combine_flag_rejected(self, app_settings: AppSettings, flag) -> None:
        with pytest.raises(ValidationError, match="combineWithData"):
            service.calculate_indicators(
                _payload(5), ["returns"], combine_with_data=flag, settings=app_settings
            )

    def test_non_bool_combine_flag_in_parameters_rejected(self, app_settings: AppSettings) -> None:
        with pytest.raises(ValidationError, match="parameters.combineWithData"):
            service.calculate_indicators(
                _payload(5), ["returns"], {"combineWithData": "false"}, settings=app_settings
            )
