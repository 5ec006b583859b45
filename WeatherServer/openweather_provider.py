"""OpenWeather Current Weather API provider implementation."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import requests

from report_formatter import format_time
from weather_data import Observation, WeatherRecord
from weather_provider import RemoteFetchError, WeatherProviderBase


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using OpenWeather Current Weather API.

    Uses the free Current Weather API: https://openweathermap.org/current
    Cities are looked up by name (the ``q`` parameter).
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(
        self,
        api_key: str,
        units: str = "metric",
        timeout: float = 10
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            units: Temperature units; reports assume "metric"
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key
        self.units = units
        self.timeout = timeout

    def get_current(self, city: str) -> Observation:
        """
        Fetch current weather for a city from OpenWeather Current Weather API.

        Makes exactly one request; there are no retries.

        Returns:
            Observation: Current weather and the provider's observation time

        Raises:
            RemoteFetchError: If the request fails or the response can't be parsed
        """
        params = {
            "q": city,
            "appid": self.api_key,
            "units": self.units,
        }

        try:
            logging.info(f"Making OpenWeather API request: {self.BASE_URL}")
            logging.debug(f"Request parameters: q={city}, units={self.units}")

            response = requests.get(self.BASE_URL, params=params, timeout=self.timeout)

            logging.info(f"API response status: {response.status_code}")

            if not response.ok:
                logging.error(f"API request failed with status {response.status_code}")
                self._handle_error_response(response)

            data = response.json()
            logging.debug(f"API response (truncated): {str(data)[:500]}...")
            observation = self._parse(data)

            logging.info(
                f"Successfully parsed weather data: {observation.record.temp}°C, {observation.record.weather}"
            )
            return observation

        except (KeyError, ValueError, TypeError, IndexError) as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise RemoteFetchError(f"Failed to parse response: {e}") from e
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise RemoteFetchError(f"Network error: {e}") from e

    def _parse(self, data: Dict[str, Any]) -> Observation:
        """Map a Current Weather API payload onto an Observation."""
        if not isinstance(data, dict):
            raise RemoteFetchError("Response is not a JSON object")

        weather_array = data.get("weather") or []
        if not weather_array:
            raise RemoteFetchError("Response missing 'weather' array")
        weather = weather_array[0]

        main_data = data.get("main")
        if not main_data:
            raise RemoteFetchError("Response missing 'main' block")

        sys_data = data.get("sys") or {}
        wind_data = data.get("wind") or {}
        clouds_data = data.get("clouds") or {}
        tz = _offset_zone(data.get("timezone"))

        record = WeatherRecord(
            name=data["name"],
            country=sys_data["country"],
            temp=_number(main_data, "temp"),
            feels_like=_number(main_data, "feels_like"),
            humidity=_number(main_data, "humidity"),
            pressure=_number(main_data, "pressure"),
            weather=weather["main"],
            description=weather["description"],
            icon=weather["icon"],
            wind_speed=_number(wind_data, "speed"),
            wind_deg=_number(wind_data, "deg"),
            cloudiness=_number(clouds_data, "all"),
            sunrise=format_time(_from_epoch(_number(sys_data, "sunrise"), tz)),
            sunset=format_time(_from_epoch(_number(sys_data, "sunset"), tz)),
        )
        return Observation(record=record, observed_at=_from_epoch(_number(data, "dt"), tz))

    def _handle_error_response(self, response: requests.Response) -> None:
        """Parse and raise error from OpenWeather error response."""
        try:
            error_data = response.json()
        except ValueError:
            # Not JSON, use HTTP status
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise RemoteFetchError(
                f"HTTP {response.status_code}: {response.text[:200]}",
                status=response.status_code,
            )

        logging.error(f"OpenWeather API error response: {error_data}")
        message = "Unknown error"
        if isinstance(error_data, dict):
            message = error_data.get("message", message)
        raise RemoteFetchError(f"OpenWeather API error: {message}", status=response.status_code)


def _offset_zone(offset_seconds: Optional[int]) -> Optional[timezone]:
    """City's UTC offset from the payload; None means the host's local zone."""
    if offset_seconds is None:
        return None
    return timezone(timedelta(seconds=offset_seconds))


def _from_epoch(seconds: float, tz: Optional[timezone]) -> datetime:
    try:
        return datetime.fromtimestamp(seconds, tz)
    except (OverflowError, OSError) as e:
        raise ValueError(f"Timestamp out of range: {seconds!r}") from e


def _number(block: Dict[str, Any], key: str) -> float:
    """Numeric field of a payload block; anything else is a malformed response."""
    value = block[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Field '{key}' is not a number: {value!r}")
    return value
