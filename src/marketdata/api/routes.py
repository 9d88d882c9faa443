"""JSON endpoints for candle cleaning and indicator calculation."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from marketdata import service
from marketdata.exceptions import DataIntegrityError, ValidationError
from marketdata.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


async def _read_body(request: Request) -> dict | JSONResponse:
    """Decode the JSON body, or return the 400 response to send instead."""
    try:
        body = await request.json()
    except Exception:
        return JSONResponse(content={"error": "Invalid JSON body"}, status_code=400)
    if not isinstance(body, dict):
        return JSONResponse(content={"error": "Request body must be a JSON object"}, status_code=400)
    return body


def _error_response(exc: Exception) -> JSONResponse:
    """Map a pipeline exception to its HTTP response."""
    if isinstance(exc, ValidationError):
        content = {"error": exc.message}
        if exc.required:
            content["required"] = exc.required
        return JSONResponse(content=content, status_code=exc.status_code)
    if isinstance(exc, DataIntegrityError):
        return JSONResponse(content={"error": str(exc)}, status_code=exc.status_code)

    logger.exception("request_failed", error=str(exc))
    return JSONResponse(
        content={"error": "Internal server error", "message": str(exc)},
        status_code=500,
    )


@router.get("/health")
async def health() -> JSONResponse:
    return JSONResponse(content={"status": "ok"})


@router.post("/process-market-data")
async def process_market_data(request: Request) -> JSONResponse:
    """Clean a batch of candles.

    Expects JSON body with ``data`` (array of candles) and optional
    ``options`` (alignTimestamps, handleMissingValues, removeOutliers,
    outlierThreshold, normalize).

    Returns:
        JSON with originalCount, processedCount, processingSteps and data.
    """
    with structlog.contextvars.bound_contextvars(endpoint="process-market-data"):
        body = await _read_body(request)
        if isinstance(body, JSONResponse):
            return body

        try:
            result = service.process(
                body.get("data"),
                body.get("options"),
                settings=request.app.state.settings,
            )
        except Exception as e:
            return _error_response(e)

        logger.info(
            "market_data_processed",
            original_count=result.original_count,
            processed_count=result.processed_count,
            steps=result.processing_steps,
        )
        return JSONResponse(content=result.to_dict())


@router.post("/calculate-indicators")
async def calculate_indicators(request: Request) -> JSONResponse:
    """Compute technical indicators for a batch of candles.

    Expects JSON body with ``data``, optional ``indicators`` (names, default
    sma/ema/rsi), ``parameters`` (periods) and ``combineWithData``.

    Returns:
        JSON with originalData, indicators and, when requested, combinedData.
    """
    with structlog.contextvars.bound_contextvars(endpoint="calculate-indicators"):
        body = await _read_body(request)
        if isinstance(body, JSONResponse):
            return body

        indicators = body.get("indicators")
        if indicators is not None and not isinstance(indicators, list):
            return JSONResponse(
                content={"error": "indicators must be an array of indicator names"},
                status_code=400,
            )

        try:
            result = service.calculate_indicators(
                body.get("data"),
                indicators,
                body.get("parameters"),
                combine_with_data=body.get("combineWithData"),
                settings=request.app.state.settings,
            )
        except Exception as e:
            return _error_response(e)

        logger.info(
            "indicators_calculated",
            candles=len(result.original_data),
            indicators=list(result.indicators),
            combined=result.combined_data is not None,
        )
        return JSONResponse(content=result.to_dict())
