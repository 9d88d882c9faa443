"""Core data models for OHLCV candles and pipeline requests/results.

Candles travel over the wire as camelCase JSON objects (the shape produced by
the exchange-fetch collaborator); inside the pipeline they are plain
dataclasses with snake_case fields. Prices and volumes are floats: exchange
payloads arrive as JSON numbers and every statistic computed over them
(standard deviation, z-score, indicator smoothing) is float arithmetic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Any

from marketdata.config import ProcessingSettings
from marketdata.exceptions import DataIntegrityError, ValidationError

#: Human-readable description of the expected ``data`` payload.
REQUIRED_DATA_SHAPE = "Array of OHLCV data objects"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Last millisecond representable as a datetime (9999-12-31T23:59:59.999Z).
_MAX_TIMESTAMP_MS = 253_402_300_799_999

_PRICE_FIELDS = ("open", "high", "low", "close", "volume")
_REQUIRED_FIELDS = ("timestamp", *_PRICE_FIELDS)

# Keys the pipeline owns; anything else on an input record is carried in extras.
_KNOWN_KEYS = frozenset(
    {
        *_REQUIRED_FIELDS,
        "datetime",
        "interpolated",
        "outlierCorrected",
        "originalTimestamp",
        "normalizedOpen",
        "normalizedHigh",
        "normalizedLow",
        "normalizedClose",
        "normalizedVolume",
    }
)


def format_timestamp(timestamp_ms: int) -> str:
    """Render epoch milliseconds as ISO-8601 UTC, e.g. ``2024-01-01T00:00:00.000Z``."""
    dt = _EPOCH + timedelta(milliseconds=timestamp_ms)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def _to_float(value: Any, name: str, index: int) -> float:
    if isinstance(value, bool):
        raise DataIntegrityError(f"Candle at index {index}: {name} must be a number, got bool")
    try:
        result = float(value)
    except (TypeError, ValueError) as e:
        raise DataIntegrityError(
            f"Candle at index {index}: {name} must be a number, got {value!r}"
        ) from e
    if not math.isfinite(result):
        raise DataIntegrityError(f"Candle at index {index}: {name} is not finite ({value!r})")
    return result


def _to_timestamp(value: Any, name: str, index: int) -> int:
    result = int(_to_float(value, name, index))
    if not 0 <= result <= _MAX_TIMESTAMP_MS:
        raise DataIntegrityError(
            f"Candle at index {index}: {name} is out of range ({value!r} ms since epoch)"
        )
    return result


def parse_flag(values: dict[str, Any], key: str, default: bool, prefix: str = "") -> bool:
    """Read an optional boolean. Absent or null gives ``default``; anything else must be a bool.

    ``prefix`` locates the key in the error message (e.g. ``"options."``).
    """
    value = values.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValidationError(f"{prefix}{key} must be a boolean")
    return value


@dataclass
class Candle:
    """A single OHLCV candle.

    ``low <= min(open, close) <= max(open, close) <= high`` is expected but
    not enforced; exchange data violates it occasionally, which is what the
    outlier corrector mitigates.
    """

    timestamp: int  # epoch milliseconds
    open: float
    high: float
    low: float
    close: float
    volume: float
    datetime: str = ""  # derived from timestamp when empty
    interpolated: bool = False
    outlier_corrected: bool = False
    original_timestamp: int | None = None
    normalized_open: float | None = None
    normalized_high: float | None = None
    normalized_low: float | None = None
    normalized_close: float | None = None
    normalized_volume: float | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.datetime:
            self.datetime = format_timestamp(self.timestamp)

    def copy(self, **changes: Any) -> Candle:
        """Return an independent copy with ``changes`` applied."""
        changes.setdefault("extras", dict(self.extras))
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, record: dict[str, Any], index: int = 0) -> Candle:
        """Build a candle from its wire representation.

        Raises:
            ValidationError: if a required field is missing or a flag is not a bool.
            DataIntegrityError: if a numeric field is not a finite number, or a
                timestamp falls outside the representable date range.
        """
        missing = [name for name in _REQUIRED_FIELDS if record.get(name) is None]
        if missing:
            raise ValidationError(
                f"Candle at index {index} is missing required field(s): {', '.join(missing)}",
                required=REQUIRED_DATA_SHAPE,
            )

        timestamp = _to_timestamp(record["timestamp"], "timestamp", index)
        original = record.get("originalTimestamp")
        prefix = f"Candle at index {index}: "

        return cls(
            timestamp=timestamp,
            open=_to_float(record["open"], "open", index),
            high=_to_float(record["high"], "high", index),
            low=_to_float(record["low"], "low", index),
            close=_to_float(record["close"], "close", index),
            volume=_to_float(record["volume"], "volume", index),
            # A client-supplied datetime could disagree with timestamp; always derive it.
            datetime=format_timestamp(timestamp),
            interpolated=parse_flag(record, "interpolated", False, prefix),
            outlier_corrected=parse_flag(record, "outlierCorrected", False, prefix),
            original_timestamp=(
                _to_timestamp(original, "originalTimestamp", index)
                if original is not None
                else None
            ),
            extras={k: v for k, v in record.items() if k not in _KNOWN_KEYS},
        )

    @classmethod
    def from_ohlcv_row(cls, row: list[Any] | tuple[Any, ...]) -> Candle:
        """Build a candle from an exchange row ``[timestamp, open, high, low, close, volume]``."""
        if len(row) < 6:
            raise ValidationError(
                f"OHLCV row must have 6 elements, got {len(row)}",
                required="[timestamp, open, high, low, close, volume]",
            )
        return cls.from_dict(dict(zip(_REQUIRED_FIELDS, row)))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire representation. Optional flags appear only when set."""
        result: dict[str, Any] = {
            "timestamp": self.timestamp,
            "datetime": self.datetime,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }
        result.update(self.extras)
        if self.interpolated:
            result["interpolated"] = True
        if self.outlier_corrected:
            result["outlierCorrected"] = True
        if self.original_timestamp is not None:
            result["originalTimestamp"] = self.original_timestamp
        if self.normalized_open is not None:
            result["normalizedOpen"] = self.normalized_open
            result["normalizedHigh"] = self.normalized_high
            result["normalizedLow"] = self.normalized_low
            result["normalizedClose"] = self.normalized_close
            result["normalizedVolume"] = self.normalized_volume
        return result


def parse_candles(data: Any) -> list[Candle]:
    """Validate a request ``data`` payload and convert it to candles.

    Raises:
        ValidationError: if ``data`` is missing, not a list, or holds non-objects.
        DataIntegrityError: if any numeric field is not a finite number.
    """
    if data is None or not isinstance(data, list):
        raise ValidationError("Missing or invalid data parameter", required=REQUIRED_DATA_SHAPE)

    candles = []
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise ValidationError(
                f"Candle at index {i} must be an object, got {type(record).__name__}",
                required=REQUIRED_DATA_SHAPE,
            )
        candles.append(Candle.from_dict(record, index=i))
    return candles


@dataclass
class ProcessingOptions:
    """Which cleaning stages to run, plus the outlier z-score cutoff."""

    align_timestamps: bool = True
    handle_missing_values: bool = True
    remove_outliers: bool = True
    outlier_threshold: float = 3.0
    normalize: bool = False

    @classmethod
    def from_dict(
        cls,
        options: dict[str, Any] | None,
        defaults: ProcessingSettings | None = None,
    ) -> ProcessingOptions:
        """Parse request options (camelCase keys) over configured defaults."""
        defaults = defaults or ProcessingSettings()
        if options is None:
            options = {}
        if not isinstance(options, dict):
            raise ValidationError("options must be an object")

        threshold = options.get("outlierThreshold")
        if threshold is None:
            threshold = defaults.outlier_threshold
        elif isinstance(threshold, bool) or not isinstance(threshold, (int, float)) or threshold <= 0:
            raise ValidationError("options.outlierThreshold must be a positive number")

        return cls(
            align_timestamps=parse_flag(
                options, "alignTimestamps", defaults.align_timestamps, "options."
            ),
            handle_missing_values=parse_flag(
                options, "handleMissingValues", defaults.handle_missing_values, "options."
            ),
            remove_outliers=parse_flag(
                options, "removeOutliers", defaults.remove_outliers, "options."
            ),
            outlier_threshold=float(threshold),
            normalize=parse_flag(options, "normalize", defaults.normalize, "options."),
        )


@dataclass
class ProcessResult:
    """Outcome of a cleaning pipeline run."""

    original_count: int
    processed_count: int
    processing_steps: list[str]
    data: list[Candle]

    def to_dict(self) -> dict[str, Any]:
        return {
            "originalCount": self.original_count,
            "processedCount": self.processed_count,
            "processingSteps": list(self.processing_steps),
            "data": [c.to_dict() for c in self.data],
        }
