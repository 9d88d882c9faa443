"""Volume-based indicators."""

from marketdata.indicators.models import Series


def obv(closes: list[float], volumes: list[float]) -> Series:
    """On-Balance Volume.

    Starts at 0 and adds the candle's volume when the close rises, subtracts
    it when the close falls, and carries the previous value when unchanged.
    """
    if not closes:
        return []

    result: Series = [0.0]
    running = 0.0
    for i in range(1, len(closes)):
        if closes[i] > closes[i - 1]:
            running += volumes[i]
        elif closes[i] < closes[i - 1]:
            running -= volumes[i]
        result.append(running)
    return result
