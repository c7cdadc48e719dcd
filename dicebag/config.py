from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DICEBAG_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Level handed to logging.basicConfig by the CLI. The library itself only logs at DEBUG.
    log_level: str = "WARNING"

    # What the CLI rolls when no notation is given, and how many times.
    default_notation: str = "1d20"
    default_repeat: int = 1

    # Fixed seed for reproducible CLI runs. Unset means OS entropy.
    seed: int | None = None

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError("DICEBAG_LOG_LEVEL must be a standard logging level name.")
        return normalized

    @field_validator("default_repeat")
    @classmethod
    def _positive_repeat(cls, value: int) -> int:
        if value < 1:
            raise ValueError("DICEBAG_DEFAULT_REPEAT must be at least 1.")
        return value


settings = Settings()
