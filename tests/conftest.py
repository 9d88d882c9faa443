"""Shared test fixtures for the market-data pipeline."""

import pytest

from marketdata.config import AppSettings, IndicatorSettings, ProcessingSettings


@pytest.fixture
def app_settings() -> AppSettings:
    """Return AppSettings with debug logging and default processing/indicator options."""
    return AppSettings(
        log_level="DEBUG",
        processing=ProcessingSettings(),
        indicators=IndicatorSettings(),
    )
