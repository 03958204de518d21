"""Tests for the consumer-facing fetch functions."""

import asyncio

import httpx
import pytest

from ridecast import forecast
from ridecast.config import Settings
from ridecast.forecast import (
    RequestGuard,
    create_provider,
    fetch_current_weather,
    fetch_seven_day_forecast,
)
from ridecast.models.weather import Condition
from ridecast.providers.base import NetworkError


class TestCreateProvider:
    """Tests for building a provider from settings."""

    def test_settings_passed_at_construction(self):
        settings = Settings(
            weather_base_url="https://customer-api.example/v1/forecast",
            weather_api_key="k3y",
            request_timeout_seconds=12.5,
            forecast_days=5,
        )
        provider = create_provider(settings)

        assert provider.base_url == "https://customer-api.example/v1/forecast"
        assert provider.api_key == "k3y"
        assert provider.timeout == 12.5
        assert provider.forecast_days == 5

    def test_defaults_from_environment(self):
        provider = create_provider()
        assert provider.base_url == "https://weather.test/v1/forecast"
        assert provider.api_key is None
        assert provider.timeout is None


class TestFetchFunctions:
    """Tests for fetch_current_weather / fetch_seven_day_forecast."""

    @pytest.fixture
    def patched_provider(self, monkeypatch, make_provider):
        """Route create_provider to a provider served by a handler."""

        def _patch(handler):
            provider, transport = make_provider(handler)
            monkeypatch.setattr(forecast, "create_provider", lambda settings=None: provider)
            return transport

        return _patch

    @pytest.mark.asyncio
    async def test_fetch_current_weather(
        self, patched_provider, json_handler, current_payload
    ):
        transport = patched_provider(json_handler(current_payload))
        weather = await fetch_current_weather(50.45, 30.52)

        assert weather.condition == Condition.CLOUDY
        assert transport.requests[0].url.params["latitude"] == "50.45"

    @pytest.mark.asyncio
    async def test_fetch_seven_day_forecast(
        self, patched_provider, json_handler, daily_payload_factory
    ):
        patched_provider(json_handler(daily_payload_factory(9)))
        days = await fetch_seven_day_forecast(50.45, 30.52)

        assert len(days) == 7

    @pytest.mark.asyncio
    async def test_errors_propagate(self, patched_provider, json_handler):
        patched_provider(json_handler({}, status_code=503))

        with pytest.raises(NetworkError):
            await fetch_seven_day_forecast(50.45, 30.52)

    @pytest.mark.asyncio
    async def test_invalid_coordinates(self):
        with pytest.raises(ValueError):
            await fetch_current_weather(120.0, 30.52)


class TestRequestGuard:
    """Tests for stale result handling."""

    def test_tokens(self):
        guard = RequestGuard()
        first = guard.begin()
        assert guard.is_current(first)

        second = guard.begin()
        assert not guard.is_current(first)
        assert guard.is_current(second)

        guard.cancel()
        assert not guard.is_current(second)

    @pytest.mark.asyncio
    async def test_run_returns_result(self):
        guard = RequestGuard()

        async def work():
            return 42

        assert await guard.run(work()) == 42

    @pytest.mark.asyncio
    async def test_superseded_result_dropped(self):
        guard = RequestGuard()
        release = asyncio.Event()

        async def slow():
            await release.wait()
            return "old"

        async def fast():
            return "new"

        stale_task = asyncio.create_task(guard.run(slow()))
        await asyncio.sleep(0)
        assert await guard.run(fast()) == "new"

        release.set()
        assert await stale_task is None

    @pytest.mark.asyncio
    async def test_cancelled_result_dropped(self):
        guard = RequestGuard()
        release = asyncio.Event()

        async def slow():
            await release.wait()
            return "late"

        task = asyncio.create_task(guard.run(slow()))
        await asyncio.sleep(0)
        guard.cancel()
        release.set()

        assert await task is None

    @pytest.mark.asyncio
    async def test_current_error_propagates(self):
        guard = RequestGuard()

        async def failing():
            raise NetworkError("offline", provider="openmeteo")

        with pytest.raises(NetworkError):
            await guard.run(failing())

    @pytest.mark.asyncio
    async def test_stale_error_dropped(self):
        guard = RequestGuard()
        release = asyncio.Event()

        async def failing():
            await release.wait()
            raise httpx.ConnectError("gone")

        task = asyncio.create_task(guard.run(failing()))
        await asyncio.sleep(0)
        guard.cancel()
        release.set()

        assert await task is None
