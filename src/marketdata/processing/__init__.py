"""Candle cleaning stages and the pipeline that chains them.

Each stage is a pure function from a candle list to a new candle list:
timestamp alignment, forward-fill gap reconstruction, z-score outlier
clamping and min-max normalization. ``infer_timeframe`` supplies the
interval the alignment and gap-filling stages work on.
"""

from marketdata.processing.alignment import align_timestamps
from marketdata.processing.gaps import expected_timestamps, fill_missing_values
from marketdata.processing.normalize import normalize
from marketdata.processing.outliers import remove_outliers
from marketdata.processing.pipeline import run_pipeline
from marketdata.processing.timeframe import infer_timeframe

__all__ = [
    "align_timestamps",
    "expected_timestamps",
    "fill_missing_values",
    "infer_timeframe",
    "normalize",
    "remove_outliers",
    "run_pipeline",
]
