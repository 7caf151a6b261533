"""Application configuration using Pydantic Settings.

Centralized configuration management following Clean Architecture principles.
All environment variables should be accessed through this module.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cycle_breaker.domain.entities.break_plan import BreakStrategy

_STRATEGY_VALUES = {strategy.value for strategy in BreakStrategy}


class AnalysisSettings(BaseSettings):
    """Cycle analysis engine settings."""

    model_config = SettingsConfigDict(env_prefix="ANALYSIS_", case_sensitive=False)

    max_cycles: int | None = Field(
        default=None,
        ge=1,
        description="Maximum elementary cycles enumerated per SCC (unset = no limit)",
    )
    parallel: bool = Field(
        default=True,
        description="Enumerate and select per SCC as independent worker tasks",
    )
    max_concurrent_sccs: int = Field(
        default=8,
        ge=1,
        description="Maximum SCCs processed concurrently",
    )
    forced_strategy: str | None = Field(
        default=None,
        description=(
            "Operator override applied to every cycle: lazy_injection, "
            "interface_extraction, method_extraction or manual"
        ),
    )

    @field_validator("forced_strategy")
    @classmethod
    def _validate_forced_strategy(cls, value: str | None) -> str | None:
        if value is None or value == "":
            return None
        normalized = value.lower()
        if normalized not in _STRATEGY_VALUES:
            raise ValueError(
                f"forced_strategy must be one of {sorted(_STRATEGY_VALUES)}, "
                f"got: {value}"
            )
        return normalized


class APISettings(BaseSettings):
    """API server configuration settings."""

    model_config = SettingsConfigDict(env_prefix="API_", case_sensitive=False)

    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server",
    )
    port: int = Field(
        default=8000,
        description="Port to bind the API server",
    )
    workers: int = Field(
        default=1,
        description="Number of Uvicorn worker processes",
    )


class ObservabilitySettings(BaseSettings):
    """Observability configuration settings (OpenTelemetry, logging, metrics)."""

    model_config = SettingsConfigDict(env_prefix="OTEL_", case_sensitive=False)

    # OpenTelemetry Tracing
    tracing_enabled: bool = Field(
        default=False,
        description="Export spans to the OTLP endpoint",
    )
    exporter_otlp_endpoint: str = Field(
        default="http://localhost:4317",
        description="OTLP exporter endpoint (gRPC)",
    )
    service_name: str = Field(
        default="cycle-breaker",
        description="Service name for traces and metrics",
    )
    trace_sample_rate: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Trace sampling rate (0.0 to 1.0)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_json_format: bool = Field(
        default=True,
        description="Enable JSON structured logging",
    )


class Settings(BaseSettings):
    """Main application settings.

    Aggregates all configuration modules and provides a single settings object.
    Load from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Application environment (development, staging, production)",
    )

    # Sub-settings
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)
    api: APISettings = Field(default_factory=APISettings)
    observability: ObservabilitySettings = Field(
        default_factory=ObservabilitySettings
    )


# Global settings instance (singleton)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get global settings instance (singleton pattern).

    Returns:
        Settings instance loaded from environment
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
