"""Tests for application configuration management."""

import os
import tempfile
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from lifeplan import create_app
from lifeplan.config import (
    DEVELOPMENT_SECRET_KEY,
    Settings,
    get_global_settings,
    get_settings,
    reset_global_settings,
)


class TestSettings:
    """Test cases for Settings class."""

    def test_settings_loads_from_env_file(self):
        """Test that settings can load from a .env file."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".env", delete=False) as f:
            f.write("APP_ENV=development\n")
            f.write("SECRET_KEY=test-secret-key-123\n")
            f.write("LOG_LEVEL=DEBUG\n")
            f.write("DEFAULT_SIMULATION_END_AGE=95\n")
            temp_env_file = f.name

        try:
            with patch.dict(os.environ, {}, clear=True):
                settings = Settings(_env_file=temp_env_file)

                assert settings.app_env == "development"
                assert settings.secret_key == "test-secret-key-123"
                assert settings.log_level == "DEBUG"
                assert settings.default_simulation_end_age == 95
        finally:
            os.unlink(temp_env_file)

    def test_default_values(self):
        """Test default values when environment variables are not set."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

            assert settings.app_env == "development"
            assert settings.secret_key == DEVELOPMENT_SECRET_KEY
            assert settings.flask_app == "wsgi.py"
            assert settings.flask_env == "development"
            assert settings.log_level == "INFO"
            assert settings.default_simulation_end_age == 85
            assert settings.max_simulation_end_age == 120

    def test_placeholder_secret_key_raises_exception(self):
        """Test that placeholder SECRET_KEY raises ValidationError."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "your-secret-key-here-change-in-production"},
            clear=True,
        ):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "SECRET_KEY must be set to a secure value" in str(exc_info.value)

    def test_empty_secret_key_raises_exception(self):
        """Test that an empty SECRET_KEY raises ValidationError."""
        with patch.dict(os.environ, {"SECRET_KEY": ""}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    def test_development_secret_rejected_in_production(self):
        """Test that production refuses the built-in development secret."""
        with patch.dict(os.environ, {"APP_ENV": "production"}, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "in production" in str(exc_info.value)

    def test_production_with_real_secret(self):
        """Test that production accepts a real secret."""
        with patch.dict(
            os.environ,
            {"APP_ENV": "production", "SECRET_KEY": "prod-secret-456"},
            clear=True,
        ):
            settings = Settings(_env_file=None)
            assert settings.app_env == "production"

    def test_app_env_validation(self):
        """Test APP_ENV validation."""
        with patch.dict(os.environ, {"APP_ENV": "invalid-env"}, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "APP_ENV must be one of" in str(exc_info.value)

    def test_log_level_validation(self):
        """Test LOG_LEVEL validation."""
        with patch.dict(os.environ, {"LOG_LEVEL": "INVALID_LEVEL"}, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "LOG_LEVEL must be one of" in str(exc_info.value)

    def test_log_level_case_insensitive(self):
        """Test that LOG_LEVEL is case insensitive."""
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}, clear=True):
            settings = Settings(_env_file=None)
            assert settings.log_level == "DEBUG"

    def test_default_end_age_cannot_exceed_maximum(self):
        """Test that the default end age must fit under the maximum."""
        with patch.dict(
            os.environ,
            {"DEFAULT_SIMULATION_END_AGE": "110", "MAX_SIMULATION_END_AGE": "100"},
            clear=True,
        ):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "DEFAULT_SIMULATION_END_AGE" in str(exc_info.value)

    def test_get_settings_function(self):
        """Test the get_settings function."""
        with patch.dict(os.environ, {"SECRET_KEY": "valid-secret-key-123"}, clear=True):
            settings = get_settings()
            assert isinstance(settings, Settings)
            assert settings.secret_key == "valid-secret-key-123"


class TestGlobalSettings:
    """Test cases for the cached global settings."""

    def test_global_settings_are_cached(self):
        """Test that the global settings instance is reused until reset."""
        reset_global_settings()
        with patch.dict(os.environ, {"SECRET_KEY": "first-secret"}, clear=True):
            first = get_global_settings()
        with patch.dict(os.environ, {"SECRET_KEY": "second-secret"}, clear=True):
            assert get_global_settings() is first
            reset_global_settings()
            assert get_global_settings().secret_key == "second-secret"
        reset_global_settings()


class TestAppStartup:
    """Test cases for Flask application startup."""

    def test_app_creation_with_valid_config(self):
        """Test that app picks up settings from the environment."""
        reset_global_settings()
        with patch.dict(
            os.environ,
            {
                "SECRET_KEY": "valid-secret-key-123",
                "DEFAULT_SIMULATION_END_AGE": "90",
            },
            clear=True,
        ):
            app = create_app()

            assert app.config["SECRET_KEY"] == "valid-secret-key-123"
            assert app.config["DEBUG"] is True
            assert app.config["DEFAULT_SIMULATION_END_AGE"] == 90
        reset_global_settings()

    def test_app_creation_fails_with_placeholder_secret_key(self):
        """Test that app creation fails with placeholder SECRET_KEY."""
        reset_global_settings()
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "your-secret-key-here-change-in-production"},
            clear=True,
        ):
            with pytest.raises(ValidationError) as exc_info:
                create_app()

            assert "SECRET_KEY must be set to a secure value" in str(exc_info.value)
        reset_global_settings()

    def test_testing_config_name(self):
        """Test that an explicit config name switches off debug."""
        reset_global_settings()
        with patch.dict(os.environ, {}, clear=True):
            app = create_app("testing")

            assert app.config["TESTING"] is True
            assert app.config["DEBUG"] is False
        reset_global_settings()
