"""Configuration system using pydantic-settings with environment variable loading."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class ProcessingSettings(BaseSettings):
    """Default cleaning options applied when a request omits them.

    All fields configurable via PROCESSING_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="PROCESSING_")

    align_timestamps: bool = True
    handle_missing_values: bool = True
    remove_outliers: bool = True
    outlier_threshold: float = 3.0  # z-score cutoff
    normalize: bool = False

    outlier_min_samples: int = 10  # below this the corrector is a no-op
    timeframe_sample_size: int = 10  # candles inspected when inferring the interval
    max_gap_fill_candles: int = 100_000  # longest sequence the gap filler may rebuild


class IndicatorSettings(BaseSettings):
    """Technical indicator defaults."""

    model_config = SettingsConfigDict(env_prefix="INDICATOR_")

    default_indicators: list[str] = ["sma", "ema", "rsi"]
    precision: int = 8  # decimal places kept on every indicator value


class BatchSettings(BaseSettings):
    """Batch sizes used by callers that fetch or store long histories."""

    model_config = SettingsConfigDict(env_prefix="BATCH_")

    max_candles_per_request: int = 1000  # most exchanges cap OHLCV pages at 1000
    storage_chunk_size: int = 500  # candles per stored document chunk


class ApiSettings(BaseSettings):
    """HTTP server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: list[str] = ["*"]


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    log_format: str = "console"  # LOG_FORMAT=json for one JSON object per event
    processing: ProcessingSettings = ProcessingSettings()
    indicators: IndicatorSettings = IndicatorSettings()
    batch: BatchSettings = BatchSettings()
    api: ApiSettings = ApiSettings()
