"""Tests for On-Balance Volume."""

from marketdata.indicators.volume import obv


class TestObv:
    """Tests for obv."""

    def test_starts_at_zero(self) -> None:
        assert obv([5.0], [100.0]) == [0.0]

    def test_empty(self) -> None:
        assert obv([], []) == []

    def test_known_values(self) -> None:
        closes = [10.0, 11.0, 10.5, 10.5, 12.0]
        volumes = [100.0, 20.0, 30.0, 40.0, 50.0]

        assert obv(closes, volumes) == [0.0, 20.0, -10.0, -10.0, 40.0]

    def test_step_decomposition(self) -> None:
        closes = [100 + ((i * 7) % 5) - 2 for i in range(30)]
        volumes = [float(10 + i) for i in range(30)]
        result = obv(closes, volumes)

        for i in range(1, len(closes)):
            step = result[i] - result[i - 1]
            if closes[i] > closes[i - 1]:
                assert step == volumes[i]
            elif closes[i] < closes[i - 1]:
                assert step == -volumes[i]
            else:
                assert step == 0
