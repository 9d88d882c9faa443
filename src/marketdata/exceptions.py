"""Exception types raised by the market-data pipeline.

Each error carries the HTTP-equivalent status the API layer responds with,
so library callers and the transport agree on how a failure is classified.
"""


class MarketDataError(Exception):
    """Base exception for all pipeline errors."""

    status_code: int = 500


class ValidationError(MarketDataError):
    """Raised when a request payload is missing or has the wrong shape.

    ``required`` describes the expected shape and is echoed back to the
    caller alongside the message.
    """

    status_code = 400

    def __init__(self, message: str, required: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.required = required


class InvalidTimeframeError(ValidationError):
    """Raised when a timeframe string such as "1h" cannot be parsed."""


class DataIntegrityError(MarketDataError):
    """Raised when a candle field is not a finite number.

    Non-finite values would otherwise propagate NaN through every
    statistic and indicator computed over the batch.
    """

    status_code = 422
