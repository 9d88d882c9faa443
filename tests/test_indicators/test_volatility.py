"""Tests for Bollinger Bands and ATR."""

import math

import pytest

from marketdata.indicators.volatility import atr, bollinger_bands, true_range


class TestBollingerBands:
    """Tests for Bollinger Bands."""

    def test_known_window(self) -> None:
        result = bollinger_bands([1.0, 2.0, 3.0], period=3, std_dev=2.0)
        width = 2 * math.sqrt(2 / 3)

        assert result["middle"] == [None, None, pytest.approx(2.0)]
        assert result["upper"][2] == pytest.approx(2.0 + width)
        assert result["lower"][2] == pytest.approx(2.0 - width)

    def test_constant_closes_collapse_bands(self) -> None:
        result = bollinger_bands([10.0] * 25, period=20)

        assert result["upper"][19:] == result["middle"][19:] == result["lower"][19:]
        assert result["middle"][18] is None

    def test_upper_above_lower(self) -> None:
        closes = [100 + (i % 9) - (i % 4) * 0.5 for i in range(40)]
        result = bollinger_bands(closes)

        for up, mid, low in zip(result["upper"], result["middle"], result["lower"]):
            if mid is not None:
                assert low <= mid <= up

    def test_short_input_all_none(self) -> None:
        result = bollinger_bands([1.0] * 5, period=20)
        assert all(series == [None] * 5 for series in result.values())


class TestAtr:
    """Tests for Average True Range."""

    def test_true_range(self) -> None:
        highs = [10.0, 12.0, 11.0, 13.0]
        lows = [8.0, 9.0, 9.0, 10.0]
        closes = [9.0, 11.0, 10.0, 12.0]

        assert true_range(highs, lows, closes) == [3.0, 2.0, 3.0]

    def test_wilder_smoothing(self) -> None:
        """TR = [3, 2, 3]; first ATR = (3 + 2) / 2 = 2.5; next = (2.5 + 3) / 2 = 2.75."""
        highs = [10.0, 12.0, 11.0, 13.0]
        lows = [8.0, 9.0, 9.0, 10.0]
        closes = [9.0, 11.0, 10.0, 12.0]

        assert atr(highs, lows, closes, period=2) == [None, None, 2.5, 2.75]

    def test_short_input_all_none(self) -> None:
        assert atr([2.0] * 14, [1.0] * 14, [1.5] * 14, period=14) == [None] * 14

    def test_non_negative(self) -> None:
        closes = [100 + (i % 5) * 1.3 for i in range(30)]
        highs = [c + 1 for c in closes]
        lows = [c - 1 for c in closes]

        values = [v for v in atr(highs, lows, closes) if v is not None]
        assert len(values) == 16
        assert all(v >= 0 for v in values)
