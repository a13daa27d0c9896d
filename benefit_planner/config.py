"""Application configuration management using Pydantic Settings."""

from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application Environment
    app_env: str = Field(default="development", alias="APP_ENV")

    # Flask Configuration
    secret_key: str = Field(..., alias="SECRET_KEY")

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Default assumptions (percent)
    default_cola_rate: float = Field(
        default=2.5, ge=-5, le=20, alias="DEFAULT_COLA_RATE"
    )
    default_inflation_rate: float = Field(
        default=3.0, ge=-5, le=20, alias="DEFAULT_INFLATION_RATE"
    )
    default_investment_growth_rate: float = Field(
        default=5.0, ge=-5, le=20, alias="DEFAULT_INVESTMENT_GROWTH_RATE"
    )
    default_lifetime_age: int = Field(default=90, alias="DEFAULT_LIFETIME_AGE")

    # Life-expectancy horizons for scenario comparisons
    short_term_age: int = Field(default=75, ge=62, le=100, alias="SHORT_TERM_AGE")
    medium_term_age: int = Field(default=85, ge=62, le=100, alias="MEDIUM_TERM_AGE")
    long_term_age: int = Field(default=95, ge=62, le=100, alias="LONG_TERM_AGE")

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v):
        """Ensure SECRET_KEY is provided and not a placeholder."""
        if not v or v == "your-secret-key-here-change-in-production":
            raise ValueError("SECRET_KEY must be set to a secure value")
        return v

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v):
        """Validate application environment."""
        allowed_envs = {"development", "testing", "production"}
        if v not in allowed_envs:
            raise ValueError(f"APP_ENV must be one of {allowed_envs}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v.upper()

    @field_validator("default_lifetime_age")
    @classmethod
    def validate_lifetime_age(cls, v):
        """Validate the default projection end age."""
        allowed_ages = {85, 90, 95, 100}
        if v not in allowed_ages:
            raise ValueError(f"DEFAULT_LIFETIME_AGE must be one of {allowed_ages}")
        return v

    @model_validator(mode="after")
    def validate_horizons(self):
        if not self.short_term_age < self.medium_term_age < self.long_term_age:
            raise ValueError(
                "Comparison horizons must satisfy "
                "SHORT_TERM_AGE < MEDIUM_TERM_AGE < LONG_TERM_AGE"
            )
        return self


def get_settings(env_file: Optional[str] = None) -> Settings:
    """Get application settings instance."""
    if env_file is not None:
        return Settings(_env_file=env_file)
    return Settings()


# Global settings instance - created on first use
_settings: Optional[Settings] = None


def get_global_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = get_settings()
    return _settings


def reset_global_settings() -> None:
    """Reset global settings instance (useful for testing)."""
    global _settings
    _settings = None
