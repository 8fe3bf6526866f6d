from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="GUIDE_LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="GUIDE_LOG_FILE")
    default_minutes_per_day: int = Field(
        default=60,
        validation_alias="GUIDE_DEFAULT_MINUTES_PER_DAY",
        description="Minutes used for a selected day that was left empty or at zero",
    )
    max_minutes_per_day: int = Field(
        default=24 * 60,
        validation_alias="GUIDE_MAX_MINUTES_PER_DAY",
        description="Upper bound accepted for a single day's time entry",
    )
    tasks_source: str = Field(
        default="tasks.json",
        validation_alias="GUIDE_TASKS_SOURCE",
        description="Task catalog location (file path or http(s) URL)",
    )
    state_file: str = Field(
        default=".completion-guide-state.json",
        validation_alias="GUIDE_STATE_FILE",
    )
    xapi_endpoint: str = Field(
        default="",
        validation_alias="GUIDE_XAPI_ENDPOINT",
        description="LRS statements endpoint; empty disables analytics",
    )
    xapi_version: str = Field(default="1.0.3", validation_alias="GUIDE_XAPI_VERSION")
    xapi_base_url: str = Field(
        default="https://academyproduct.github.io/dynamic_completion_guide",
        validation_alias="GUIDE_XAPI_BASE_URL",
    )
    actor_id: str = Field(default="", validation_alias="GUIDE_ACTOR_ID")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid GUIDE_LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("default_minutes_per_day", "max_minutes_per_day")
    @classmethod
    def validate_minutes(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Minute settings must be positive")
        return value

    @field_validator("xapi_endpoint")
    @classmethod
    def validate_xapi_endpoint(cls, value: str) -> str:
        if value and not value.startswith(("http://", "https://")):
            logger.warning(f"GUIDE_XAPI_ENDPOINT '{value}' is not an http(s) URL. Analytics disabled.")
            return ""
        return value.rstrip("?")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
