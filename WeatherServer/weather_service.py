"""Weather service - answers get_current_weather requests, falling back to mock data."""
import asyncio
import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from config import ServerConfig
from logging_setup import log_event
from mock_weather import lookup
from openweather_provider import OpenWeatherProvider
from report_formatter import format_report
from tool_errors import InvalidParamsError
from weather_data import Source, WeatherReport
from weather_provider import FetchSuccess, WeatherProviderBase


def validate_city(arguments: Optional[Mapping[str, Any]]) -> str:
    """
    Extract the city from tool arguments.

    Returns:
        str: The city name exactly as given; whitespace only matters for the blank check

    Raises:
        InvalidParamsError: If city is missing, not a string, or blank
    """
    city = arguments.get("city") if isinstance(arguments, Mapping) else None
    if not isinstance(city, str) or not city.strip():
        raise InvalidParamsError("City parameter must be a non-empty string")
    return city


class WeatherService:
    """
    Handles weather requests for the tool server.

    Live lookups go through the provider; when mock mode is on, no API key is
    configured, or the live lookup fails, the static table answers instead.
    The service keeps no per-request state, so concurrent calls are safe.
    """

    def __init__(
        self,
        config: ServerConfig,
        provider: Optional[WeatherProviderBase] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize weather service.

        Args:
            config: Startup configuration (API key, mock mode)
            provider: Provider for live lookups; built from config when omitted
            clock: Source of "now" for mock reports
        """
        self.config = config
        if provider is None and config.has_api_key:
            provider = OpenWeatherProvider(api_key=config.api_key, timeout=config.timeout)
        self.provider = provider
        self.clock = clock

    async def get_current_weather(self, arguments: Optional[Mapping[str, Any]]) -> WeatherReport:
        """
        Produce a weather report for ``arguments["city"]``.

        Returns:
            WeatherReport: Live or mock report, tagged with its source

        Raises:
            InvalidParamsError: If the city argument is invalid. No other
                failure reaches the caller.
        """
        request_id = uuid.uuid4().hex[:12]
        log_event(logging.INFO, "request.received", "Weather request received", request_id=request_id)

        try:
            city = validate_city(arguments)
        except InvalidParamsError as e:
            log_event(logging.WARNING, "request.invalid", f"Rejected weather request: {e}",
                      request_id=request_id, error=str(e))
            raise

        source = self.config.mock_source
        if source is None and self.provider is None:
            source = Source.MOCK_NO_KEY
        log_event(logging.INFO, "mode.selected", f"Mode: {'mock' if source else 'live'}",
                  request_id=request_id, city=city)

        if source is not None:
            return self._mock_report(city, source, request_id)

        result = await asyncio.to_thread(self.provider.fetch, city)
        if isinstance(result, FetchSuccess):
            log_event(logging.INFO, "request.succeeded", f"Live weather retrieved for {city}",
                      request_id=request_id, city=city)
            return format_report(result.observation.record, Source.LIVE, result.observation.observed_at)

        log_event(logging.ERROR, "request.fallback",
                  f"Error fetching weather data from API, using mock data instead: {result.error}",
                  request_id=request_id, city=city, error=str(result.error))
        return self._mock_report(city, Source.MOCK_AFTER_FAILURE, request_id, log=False)

    def _mock_report(self, city: str, source: Source, request_id: str, log: bool = True) -> WeatherReport:
        if log:
            log_event(logging.INFO, "request.fallback", f"Using mock data: {source.value}",
                      request_id=request_id, city=city)
        return format_report(lookup(city), source, self.clock())
