"""Configuration management"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Engine settings"""

    # Application
    log_level: str = "INFO"

    # Expense form limits
    title_limit: int = 50
    note_limit: int = 250
    default_emoji: str = "\U0001F4B8"

    # Amounts, in minor currency units
    min_expense_amount: int = 1
    max_amount: int = 99_999_999_999

    model_config = SettingsConfigDict(
        env_prefix="SPLITT_", env_file=".env", case_sensitive=False, extra="ignore"
    )

    @field_validator("title_limit", "note_limit", "min_expense_amount", "max_amount")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate limits are positive integers"""
        if v <= 0:
            raise ValueError("Limits and amount bounds must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name"""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(LOG_LEVELS)}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
