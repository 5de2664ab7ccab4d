from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from coachplan.core.logger import setup_logger

_VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="COACHPLAN_LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="COACHPLAN_LOG_FILE")

    # Language detection
    language_cache_size: int = Field(default=256, gt=0, validation_alias="COACHPLAN_LANGUAGE_CACHE_SIZE")
    language_sample_chars: int = Field(default=2000, gt=0, validation_alias="COACHPLAN_LANGUAGE_SAMPLE_CHARS")
    language_cache_key_chars: int = Field(default=500, gt=0, validation_alias="COACHPLAN_LANGUAGE_CACHE_KEY_CHARS")

    # Field extraction defaults
    default_session_time: str = Field(default="08:00", validation_alias="COACHPLAN_DEFAULT_SESSION_TIME")
    default_session_duration: int = Field(default=90, gt=0, validation_alias="COACHPLAN_DEFAULT_SESSION_DURATION")
    overview_session_duration: int = Field(default=120, gt=0, validation_alias="COACHPLAN_OVERVIEW_SESSION_DURATION")
    min_day_content_chars: int = Field(default=20, ge=0, validation_alias="COACHPLAN_MIN_DAY_CONTENT_CHARS")

    # Completeness score (0-25) below which the alternative pass is attempted
    alternative_completeness_threshold: int = Field(
        default=20,
        ge=0,
        le=25,
        validation_alias="COACHPLAN_ALTERNATIVE_COMPLETENESS_THRESHOLD",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="COACHPLAN_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize log level, falling back to INFO for unknown values."""
        level = value.upper()
        if level not in _VALID_LOG_LEVELS:
            logger.warning(f"Invalid COACHPLAN_LOG_LEVEL '{value}', falling back to INFO")
            return "INFO"
        return level

    @field_validator("default_session_time")
    @classmethod
    def validate_session_time(cls, value: str) -> str:
        """Ensure the default session time is HH:MM."""
        parts = value.split(":")
        if len(parts) != 2 or not all(part.isdigit() for part in parts):
            raise ValueError(f"default_session_time must be HH:MM, got {value!r}")
        hour, minute = int(parts[0]), int(parts[1])
        if hour > 23 or minute > 59:
            raise ValueError(f"default_session_time out of range: {value!r}")
        return f"{hour:02d}:{minute:02d}"


settings = Settings()

setup_logger(level=settings.log_level, log_file=settings.log_file)
