"""Static weather table used when the live provider is disabled or unavailable."""
from types import MappingProxyType
from typing import Mapping

from weather_data import WeatherRecord


MOCK_WEATHER: Mapping[str, WeatherRecord] = MappingProxyType({
    "london": WeatherRecord(
        name="London",
        country="GB",
        temp=12,
        feels_like=10,
        humidity=75,
        pressure=1012,
        weather="Cloudy",
        description="Overcast clouds",
        icon="04d",
        wind_speed=4.5,
        wind_deg=230,
        cloudiness=90,
        sunrise="6:45 AM",
        sunset="7:30 PM",
    ),
    "new york": WeatherRecord(
        name="New York",
        country="US",
        temp=18,
        feels_like=17,
        humidity=65,
        pressure=1015,
        weather="Clear",
        description="Clear sky",
        icon="01d",
        wind_speed=3.2,
        wind_deg=180,
        cloudiness=5,
        sunrise="6:30 AM",
        sunset="7:15 PM",
    ),
    "tokyo": WeatherRecord(
        name="Tokyo",
        country="JP",
        temp=22,
        feels_like=23,
        humidity=70,
        pressure=1010,
        weather="Rain",
        description="Light rain",
        icon="10d",
        wind_speed=2.8,
        wind_deg=90,
        cloudiness=75,
        sunrise="5:30 AM",
        sunset="6:45 PM",
    ),
    "paris": WeatherRecord(
        name="Paris",
        country="FR",
        temp=15,
        feels_like=14,
        humidity=68,
        pressure=1013,
        weather="Partly Cloudy",
        description="Few clouds",
        icon="02d",
        wind_speed=3.0,
        wind_deg=210,
        cloudiness=30,
        sunrise="7:00 AM",
        sunset="8:00 PM",
    ),
    "sydney": WeatherRecord(
        name="Sydney",
        country="AU",
        temp=25,
        feels_like=26,
        humidity=60,
        pressure=1008,
        weather="Sunny",
        description="Clear sky",
        icon="01d",
        wind_speed=5.0,
        wind_deg=150,
        cloudiness=0,
        sunrise="6:15 AM",
        sunset="7:45 PM",
    ),
})

# Template for cities not in the table; only the name is replaced.
DEFAULT_WEATHER = WeatherRecord(
    name="Unknown City",
    country="World",
    temp=20,
    feels_like=20,
    humidity=70,
    pressure=1013,
    weather="Clear",
    description="Clear sky",
    icon="01d",
    wind_speed=3.0,
    wind_deg=180,
    cloudiness=20,
    sunrise="6:30 AM",
    sunset="7:30 PM",
)


def lookup(city: str) -> WeatherRecord:
    """
    Return the static record for a city.

    Matching is an exact, case-insensitive comparison on the whole name.
    Unknown cities get the default record carrying the caller's spelling.
    """
    record = MOCK_WEATHER.get(city.lower())
    if record is not None:
        return record
    return DEFAULT_WEATHER.with_name(city)
