"""Weather domain model - pure data structures independent of any API."""
from dataclasses import asdict, dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict


class Source(str, Enum):
    """Provenance of a report: the live provider or one of the mock paths."""
    LIVE = "OpenWeather API"
    MOCK_NO_KEY = "Mock Data (No API key provided)"
    MOCK_EXPLICIT = "Mock Data (Mock mode enabled)"
    MOCK_AFTER_FAILURE = "Mock Data (API request failed)"


@dataclass(frozen=True)
class WeatherRecord:
    """Current conditions for one city, in metric units."""
    name: str
    country: str
    temp: float  # °C
    feels_like: float  # °C
    humidity: int  # percentage
    pressure: float  # hPa
    weather: str  # e.g., "Clouds", "Rain", "Clear"
    description: str  # e.g., "broken clouds", "light rain"
    icon: str  # provider icon code, e.g. "04d"
    wind_speed: float  # m/s
    wind_deg: int  # degrees, 0-359
    cloudiness: int  # percentage
    sunrise: str  # display time
    sunset: str  # display time

    def with_name(self, name: str) -> "WeatherRecord":
        """Return a copy of this record with only the city name replaced."""
        return replace(self, name=name)


@dataclass(frozen=True)
class Observation:
    """A record fetched from a provider, plus the provider's observation time."""
    record: WeatherRecord
    observed_at: datetime


@dataclass(frozen=True)
class Temperature:
    current: str
    feels_like: str


@dataclass(frozen=True)
class Conditions:
    main: str
    description: str
    icon: str


@dataclass(frozen=True)
class Details:
    humidity: str
    pressure: str
    wind_speed: str
    wind_direction: str
    cloudiness: str
    sunrise: str
    sunset: str


@dataclass(frozen=True)
class WeatherReport:
    """Formatted report returned to tool callers. Every value is a display string."""
    location: str
    date: str
    time: str
    temperature: Temperature
    weather: Conditions
    details: Details
    source: str

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation, using the camelCase keys callers expect."""
        return {
            "location": self.location,
            "date": self.date,
            "time": self.time,
            "temperature": {
                "current": self.temperature.current,
                "feelsLike": self.temperature.feels_like,
            },
            "weather": asdict(self.weather),
            "details": {
                "humidity": self.details.humidity,
                "pressure": self.details.pressure,
                "windSpeed": self.details.wind_speed,
                "windDirection": self.details.wind_direction,
                "cloudiness": self.details.cloudiness,
                "sunrise": self.details.sunrise,
                "sunset": self.details.sunset,
            },
            "source": self.source,
        }
