from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_catalog_path() -> str:
    """Get the packaged exercise catalog path.

    The catalog ships inside the package so that installed copies work
    without any environment configuration.
    """
    catalog_path = Path(__file__).parent.parent / "programs" / "data" / "exercise_catalog.yaml"
    return str(catalog_path.resolve())


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(
        default=None,
        validation_alias="HYGIE_LOG_FILE",
        description="Optional log file path (console only when unset)",
    )
    catalog_path: str = Field(
        default_factory=get_default_catalog_path,
        validation_alias="HYGIE_CATALOG_PATH",
        description="YAML exercise catalog loaded once at process start",
    )
    gate_lookback_sessions: int = Field(
        default=3,
        validation_alias="HYGIE_GATE_LOOKBACK",
        description="Number of recent untagged session records inspected at the gate week",
    )
    max_program_weeks: int = Field(
        default=52,
        validation_alias="HYGIE_MAX_PROGRAM_WEEKS",
        description="Upper bound on program duration",
    )
    max_sessions_per_week: int = Field(
        default=7,
        validation_alias="HYGIE_MAX_SESSIONS_PER_WEEK",
        description="Upper bound on sessions per week",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="HYGIE_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("gate_lookback_sessions", "max_program_weeks", "max_sessions_per_week")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"Value must be >= 1, got {value}")
        return value

    @field_validator("catalog_path")
    @classmethod
    def validate_catalog_path(cls, value: str) -> str:
        """Warn early when the configured catalog file is missing."""
        if not Path(value).exists():
            logger.warning(f"HYGIE_CATALOG_PATH points to a missing file: {value}. Catalog loading will fail.")
        return value


settings = Settings()
