from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Literal, Optional, Tuple, get_args

UnitSystem = Literal["us", "si", "ca", "uk"]
UNIT_SYSTEMS: Tuple[str, ...] = get_args(UnitSystem)
DEFAULT_UNITS: UnitSystem = "us"


def format_coordinate(value: float) -> str:
    """Plain decimal text for a coordinate: `10` not `10.0`, `0.00001` not `1e-05`."""
    if value == 0:
        return "0"
    return format(Decimal(repr(value)).normalize(), "f")


@dataclass(frozen=True, slots=True)
class LocationRequest:
    api_key: str
    units: str
    name: str
    lat: float
    lon: float

    @property
    def coordinates(self) -> str:
        return f"{format_coordinate(self.lat)}, {format_coordinate(self.lon)}"


@dataclass(frozen=True, slots=True)
class CurrentConditions:
    time: Optional[int] = None
    summary: Optional[str] = None
    icon: Optional[str] = None
    temperature: Optional[float] = None
    apparent_temperature: Optional[float] = None
    humidity: Optional[float] = None
    wind_speed: Optional[float] = None
    wind_gust: Optional[float] = None
    precip_probability: Optional[float] = None
    cloud_cover: Optional[float] = None
    uv_index: Optional[float] = None
    visibility: Optional[float] = None
    pressure: Optional[float] = None


@dataclass(frozen=True, slots=True)
class HourForecast:
    time: Optional[int] = None
    temperature: Optional[float] = None
    icon: Optional[str] = None
    summary: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DayForecast:
    time: Optional[int] = None
    summary: Optional[str] = None
    icon: Optional[str] = None
    temperature_high: Optional[float] = None
    temperature_high_time: Optional[int] = None
    temperature_low: Optional[float] = None
    temperature_low_time: Optional[int] = None
    precip_probability: Optional[float] = None


@dataclass(frozen=True, slots=True)
class Forecast:
    currently: CurrentConditions = field(default_factory=CurrentConditions)
    hourly: Tuple[HourForecast, ...] = ()
    daily: Tuple[DayForecast, ...] = ()
    timezone: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    missing: Tuple[str, ...] = ()

    @property
    def today(self) -> DayForecast:
        return self.daily[0] if self.daily else DayForecast()


@dataclass(frozen=True, slots=True)
class FormattedReport:
    location: str
    coordinates: str
    weather_info: str
    html_body: str
    html_section: str
    temperature: Optional[float]
    conditions: Optional[str]
    timestamp: str
    raw_data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "location": self.location,
            "coordinates": self.coordinates,
            "weatherInfo": self.weather_info,
            "htmlBody": self.html_body,
            "temperature": self.temperature,
            "conditions": self.conditions,
            "timestamp": self.timestamp,
            "rawData": self.raw_data,
        }


@dataclass(frozen=True, slots=True)
class CombinedReport:
    weather_info: str
    html_body: str
    subject: str
    location_count: int
    locations: Tuple[str, ...]
    timestamp: str

    def __post_init__(self) -> None:
        if self.location_count != len(self.locations):
            raise ValueError(
                f"location_count={self.location_count} does not match {len(self.locations)} location names"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "weatherInfo": self.weather_info,
            "htmlBody": self.html_body,
            "subject": self.subject,
            "locationCount": self.location_count,
            "locations": list(self.locations),
            "timestamp": self.timestamp,
        }


@dataclass(slots=True)
class RunSummary:
    generated_at: datetime
    subject: str
    location_count: int
    html_report: str
    text_report: str
    csv_path: str
    email_sent: bool
