"""Report formatting - pure functions turning weather records into display strings."""
import json
import math
from datetime import datetime
from decimal import Decimal
from typing import Union

from weather_data import Conditions, Details, Source, Temperature, WeatherRecord, WeatherReport

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@2x.png"

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def format_date(timestamp: datetime) -> str:
    """Long en-US date, e.g. "Sunday, October 18, 2026"."""
    weekday = _WEEKDAYS[timestamp.weekday()]
    month = _MONTHS[timestamp.month - 1]
    return f"{weekday}, {month} {timestamp.day}, {timestamp.year}"


def format_time(timestamp: datetime) -> str:
    """en-US time of day, e.g. "3:04:05 PM"."""
    hour = timestamp.hour % 12 or 12
    meridiem = "AM" if timestamp.hour < 12 else "PM"
    return f"{hour}:{timestamp.minute:02d}:{timestamp.second:02d} {meridiem}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (12.5 -> 13, -0.5 -> 0)."""
    return int(math.floor(value + 0.5))


def format_number(value: float) -> str:
    """Render a number the way the JSON payload always has: 3.0 -> "3", 4.5 -> "4.5", 1e-05 -> "0.00001"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = str(value)
    if "e" in text or "E" in text:
        # Positional form with the shortest digits that round-trip.
        text = format(Decimal(text), "f")
    return text


def format_temperature(value: float) -> str:
    return f"{round_half_up(value)}°C"


def icon_url(icon: str) -> str:
    return ICON_URL_TEMPLATE.format(icon=icon)


def format_report(
    record: WeatherRecord,
    source: Union[Source, str],
    timestamp: datetime,
) -> WeatherReport:
    """
    Build the caller-facing report for a record.

    Deterministic: the same record, source and timestamp always produce an
    equal report.

    Args:
        record: Weather data from the provider or the static table
        source: Provenance of the record
        timestamp: Moment rendered into the report's date and time

    Returns:
        WeatherReport: Report with every numeric value rendered with its unit
    """
    if isinstance(source, Source):
        source = source.value

    return WeatherReport(
        location=f"{record.name}, {record.country}",
        date=format_date(timestamp),
        time=format_time(timestamp),
        temperature=Temperature(
            current=format_temperature(record.temp),
            feels_like=format_temperature(record.feels_like),
        ),
        weather=Conditions(
            main=record.weather,
            description=record.description,
            icon=icon_url(record.icon),
        ),
        details=Details(
            humidity=f"{format_number(record.humidity)}%",
            pressure=f"{format_number(record.pressure)} hPa",
            wind_speed=f"{format_number(record.wind_speed)} m/s",
            wind_direction=f"{format_number(record.wind_deg)}°",
            cloudiness=f"{format_number(record.cloudiness)}%",
            sunrise=record.sunrise,
            sunset=record.sunset,
        ),
        source=source,
    )


def render_report(report: WeatherReport) -> str:
    """Serialize a report to the pretty-printed JSON text returned by the tool."""
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
