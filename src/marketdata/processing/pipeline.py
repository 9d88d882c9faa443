"""Fixed-order cleaning pipeline: align -> fill -> de-outlier -> normalize.

The candle interval is inferred once, from the time-sorted input, and the
same value is handed to both the aligner and the gap filler so the two
stages can never disagree about the grid.
"""

from marketdata.config import ProcessingSettings
from marketdata.logging import get_logger
from marketdata.models import Candle, ProcessingOptions, ProcessResult
from marketdata.processing.alignment import align_timestamps
from marketdata.processing.gaps import fill_missing_values
from marketdata.processing.normalize import normalize
from marketdata.processing.outliers import remove_outliers
from marketdata.processing.timeframe import infer_timeframe

logger = get_logger(__name__)

STEP_ALIGN = "alignTimestamps"
STEP_FILL = "handleMissingValues"
STEP_OUTLIERS = "removeOutliers"
STEP_NORMALIZE = "normalize"


def run_pipeline(
    candles: list[Candle],
    options: ProcessingOptions | None = None,
    settings: ProcessingSettings | None = None,
) -> ProcessResult:
    """Run the enabled cleaning stages over ``candles``.

    Every stage returns a fresh list; ``candles`` itself is never modified.
    ``processing_steps`` names the stages that ran, in execution order. A
    stage that ran but found nothing to do (e.g. outlier removal on a small
    batch) is still listed.
    """
    options = options or ProcessingOptions()
    settings = settings or ProcessingSettings()

    timeframe = infer_timeframe(
        sorted(candles, key=lambda c: c.timestamp),
        sample_size=settings.timeframe_sample_size,
    )

    working = [c.copy() for c in candles]
    steps: list[str] = []

    if options.align_timestamps:
        working = align_timestamps(working, timeframe)
        steps.append(STEP_ALIGN)

    if options.handle_missing_values:
        working = fill_missing_values(
            working, timeframe, max_candles=settings.max_gap_fill_candles
        )
        steps.append(STEP_FILL)

    if options.remove_outliers:
        working = remove_outliers(
            working,
            threshold=options.outlier_threshold,
            min_samples=settings.outlier_min_samples,
        )
        steps.append(STEP_OUTLIERS)

    if options.normalize:
        working = normalize(working)
        steps.append(STEP_NORMALIZE)

    logger.debug(
        "market_data_processed",
        original_count=len(candles),
        processed_count=len(working),
        timeframe_ms=timeframe,
        steps=steps,
    )
    return ProcessResult(
        original_count=len(candles),
        processed_count=len(working),
        processing_steps=steps,
        data=working,
    )
