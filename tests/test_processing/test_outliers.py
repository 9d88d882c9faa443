"""Tests for z-score outlier clamping."""

import statistics

import pytest

from marketdata.models import Candle
from marketdata.processing.outliers import remove_outliers


def _make_candles(count: int = 20, high: float = 100.0, low: float = 90.0) -> list[Candle]:
    return [
        Candle(timestamp=i * 60_000, open=95.0, high=high, low=low, close=95.0, volume=1.0)
        for i in range(count)
    ]


def _spiky() -> list[Candle]:
    """Twenty candles; index 5 has an inflated high, index 12 a deflated low."""
    candles = _make_candles()
    candles[5] = candles[5].copy(high=1000.0)
    candles[12] = candles[12].copy(low=1.0)
    return candles


class TestRemoveOutliers:
    """Tests for remove_outliers."""

    def test_small_batch_unchanged(self) -> None:
        candles = _make_candles(count=9)
        candles[0] = candles[0].copy(high=10_000.0)

        result = remove_outliers(candles)

        assert result == candles
        assert not any(c.outlier_corrected for c in result)

    def test_inflated_high_clamped_to_cap(self) -> None:
        candles = _spiky()
        highs = [c.high for c in candles]
        cap = statistics.fmean(highs) + 3 * statistics.pstdev(highs)

        result = remove_outliers(candles)

        assert result[5].high == pytest.approx(cap)
        assert result[5].high < 1000.0
        assert result[5].outlier_corrected is True

    def test_deflated_low_raised_to_floor(self) -> None:
        candles = _spiky()
        lows = [c.low for c in candles]
        floor = statistics.fmean(lows) - 3 * statistics.pstdev(lows)

        result = remove_outliers(candles)

        assert result[12].low == pytest.approx(floor)
        assert result[12].low > 1.0
        assert result[12].outlier_corrected is True

    def test_regular_candles_untouched(self) -> None:
        result = remove_outliers(_spiky())

        flagged = [i for i, c in enumerate(result) if c.outlier_corrected]
        assert flagged == [5, 12]
        assert result[0].high == 100.0
        assert result[0].low == 90.0

    def test_high_checked_before_low(self) -> None:
        candles = _make_candles()
        candles[7] = candles[7].copy(high=1000.0, low=1.0)

        result = remove_outliers(candles)

        assert result[7].high < 1000.0
        assert result[7].low == 1.0
        assert result[7].outlier_corrected is True

    def test_zero_std_dimension_never_flags(self) -> None:
        candles = _make_candles()  # all highs and lows equal
        result = remove_outliers(candles)
        assert not any(c.outlier_corrected for c in result)

    def test_zero_std_high_still_checks_low(self) -> None:
        candles = _make_candles()
        candles[3] = candles[3].copy(low=1.0)

        result = remove_outliers(candles)

        assert result[3].outlier_corrected is True
        assert result[3].high == 100.0

    def test_higher_threshold_tolerates_spike(self) -> None:
        # z-score of the spike is about 4.36
        result = remove_outliers(_spiky(), threshold=5.0)
        assert not any(c.outlier_corrected for c in result)

    def test_clamp_bounds_hold(self) -> None:
        candles = _spiky()
        candles[15] = candles[15].copy(high=800.0)
        highs = [c.high for c in candles]
        lows = [c.low for c in candles]
        cap = statistics.fmean(highs) + 2 * statistics.pstdev(highs)
        floor = statistics.fmean(lows) - 2 * statistics.pstdev(lows)

        result = remove_outliers(candles, threshold=2.0)

        assert all(c.high <= cap + 1e-9 for c in result)
        assert all(c.low >= floor - 1e-9 for c in result)

    def test_input_not_mutated(self) -> None:
        candles = _spiky()
        remove_outliers(candles)

        assert candles[5].high == 1000.0
        assert candles[5].outlier_corrected is False
