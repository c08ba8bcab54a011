"""Application configuration management using Pydantic Settings."""

from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEVELOPMENT_SECRET_KEY = "lifeplan-development-secret"
PLACEHOLDER_SECRET_KEYS = {"", "your-secret-key-here-change-in-production", "changeme"}

APP_ENVIRONMENTS = ("development", "testing", "production")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Settings for the projection API, read from the environment or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Flask
    secret_key: str = Field(default=DEVELOPMENT_SECRET_KEY, alias="SECRET_KEY")
    flask_app: str = Field(default="wsgi.py", alias="FLASK_APP")
    flask_env: str = Field(default="development", alias="FLASK_ENV")

    # Projection horizon
    default_simulation_end_age: int = Field(
        default=85,
        ge=0,
        alias="DEFAULT_SIMULATION_END_AGE",
        description="End age used when a snapshot does not set one",
    )
    max_simulation_end_age: int = Field(
        default=120,
        ge=0,
        alias="MAX_SIMULATION_END_AGE",
        description="Largest end age a snapshot may request",
    )

    @field_validator("secret_key")
    @classmethod
    def reject_placeholder_secret(cls, v: str) -> str:
        if v.strip() in PLACEHOLDER_SECRET_KEYS:
            raise ValueError("SECRET_KEY must be set to a secure value")
        return v

    @field_validator("app_env")
    @classmethod
    def check_app_env(cls, v: str) -> str:
        if v not in APP_ENVIRONMENTS:
            raise ValueError(f"APP_ENV must be one of {APP_ENVIRONMENTS}")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {LOG_LEVELS}")
        return level

    @model_validator(mode="after")
    def check_consistency(self) -> "Settings":
        """Production needs a real secret; the default end age must fit the maximum."""
        if self.app_env == "production" and self.secret_key == DEVELOPMENT_SECRET_KEY:
            raise ValueError("SECRET_KEY must be set to a secure value in production")
        if self.default_simulation_end_age > self.max_simulation_end_age:
            raise ValueError(
                "DEFAULT_SIMULATION_END_AGE must not exceed MAX_SIMULATION_END_AGE"
            )
        return self


def get_settings(env_file: Optional[str] = None) -> Settings:
    """Load settings, optionally from an explicit .env file."""
    if env_file is None:
        return Settings()
    return Settings(_env_file=env_file)


_settings: Optional[Settings] = None


def get_global_settings() -> Settings:
    """Get the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = get_settings()
    return _settings


def reset_global_settings() -> None:
    """Drop the cached settings so the next call reloads them (used by tests)."""
    global _settings
    _settings = None
