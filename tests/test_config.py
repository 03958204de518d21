"""Tests for application configuration."""

import pytest
from pydantic import ValidationError

from ridecast.config import Settings, get_settings


class TestSettings:
    """Tests for Settings loading."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("RIDECAST_WEATHER_BASE_URL", raising=False)
        monkeypatch.delenv("RIDECAST_LOG_LEVEL", raising=False)
        settings = Settings(_env_file=None)

        assert settings.weather_base_url == "https://api.open-meteo.com/v1/forecast"
        assert settings.weather_api_key is None
        assert settings.request_timeout_seconds is None
        assert settings.forecast_days == 7
        assert settings.history_limit == 30
        assert settings.log_level == "WARNING"
        assert settings.api_key_configured is False

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("RIDECAST_WEATHER_API_KEY", "abc123")
        monkeypatch.setenv("RIDECAST_REQUEST_TIMEOUT_SECONDS", "7.5")
        monkeypatch.setenv("RIDECAST_LOG_LEVEL", "info")
        settings = Settings(_env_file=None)

        assert settings.weather_api_key == "abc123"
        assert settings.api_key_configured is True
        assert settings.request_timeout_seconds == 7.5
        assert settings.log_level == "INFO"

    def test_empty_api_key_is_unset(self, monkeypatch):
        monkeypatch.setenv("RIDECAST_WEATHER_API_KEY", "")
        assert Settings(_env_file=None).weather_api_key is None

    @pytest.mark.parametrize("days", [0, 8])
    def test_forecast_days_bounds(self, days: int):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, forecast_days=days)

    @pytest.mark.parametrize("limit", [0, 31])
    def test_history_limit_bounds(self, limit: int):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, history_limit=limit)

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()
