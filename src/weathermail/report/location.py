"""Per-location formatting: one raw forecast in, one ``FormattedReport`` out.

Both renderings are built from the same ``LocationView`` so the plain-text
body and the HTML document always carry identical values.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any, List, Optional, Tuple

from ..ingest.forecast import parse_forecast
from ..models import Forecast, FormattedReport, LocationRequest, format_coordinate
from ..util.time import NY_TZ, format_clock, format_weekday, from_epoch, now_utc, resolve_tz
from .html import format_generated, render_location_document, render_location_section
from .units import (
    describe_icon,
    format_percent,
    format_pressure,
    format_temperature,
    format_uv_index,
    format_visibility,
    format_wind_speed,
)

LOGGER = logging.getLogger(__name__)

HOURLY_HORIZON = 6
DAILY_HORIZON = 7
NO_SUMMARY = "No summary available"


@dataclass(frozen=True)
class DetailRow:
    emoji: str
    label: str
    value: str


@dataclass(frozen=True)
class TodayView:
    high: str
    high_time: Optional[str]
    low: str
    low_time: Optional[str]
    summary: str


@dataclass(frozen=True)
class HourRow:
    time: str
    temperature: str
    condition: str


@dataclass(frozen=True)
class DayRow:
    name: str
    high: str
    low: str
    condition: str
    precip: str


@dataclass(frozen=True)
class LocationView:
    name: str
    latitude: str
    longitude: str
    condition: str
    temperature: str
    feels_like: str
    details: Tuple[DetailRow, ...]
    today: TodayView
    hours: Tuple[HourRow, ...]
    days: Tuple[DayRow, ...]
    generated: str
    data_updated: str


def _clock_or_none(ts: Optional[int], tz: tzinfo) -> Optional[str]:
    dt = from_epoch(ts, tz)
    return format_clock(dt) if dt is not None else None


def build_view(
    forecast: Forecast,
    location: LocationRequest,
    tz: tzinfo,
    generated_at: datetime,
) -> LocationView:
    units = location.units
    current = forecast.currently
    today = forecast.today
    latitude = forecast.latitude if forecast.latitude is not None else location.lat
    longitude = forecast.longitude if forecast.longitude is not None else location.lon

    details = (
        DetailRow("💧", "Humidity", format_percent(current.humidity, default=None)),
        DetailRow("💨", "Wind Speed", format_wind_speed(current.wind_speed, units)),
        DetailRow("🌬️", "Wind Gust", format_wind_speed(current.wind_gust, units)),
        DetailRow("🌧️", "Precipitation", format_percent(current.precip_probability)),
        DetailRow("☁️", "Cloud Cover", format_percent(current.cloud_cover)),
        DetailRow("☀️", "UV Index", format_uv_index(current.uv_index)),
        DetailRow("👁️", "Visibility", format_visibility(current.visibility)),
        DetailRow("🧭", "Pressure", format_pressure(current.pressure)),
    )

    hours = tuple(
        HourRow(
            time=format_clock(from_epoch(hour.time, tz)),
            temperature=format_temperature(hour.temperature, units),
            condition=describe_icon(hour.icon),
        )
        for hour in forecast.hourly[:HOURLY_HORIZON]
    )
    days = tuple(
        DayRow(
            name=format_weekday(from_epoch(day.time, tz)),
            high=format_temperature(day.temperature_high, units),
            low=format_temperature(day.temperature_low, units),
            condition=describe_icon(day.icon),
            precip=format_percent(day.precip_probability),
        )
        for day in forecast.daily[:DAILY_HORIZON]
    )

    updated = from_epoch(current.time, tz)
    return LocationView(
        name=location.name,
        latitude=format_coordinate(latitude),
        longitude=format_coordinate(longitude),
        condition=describe_icon(current.icon),
        temperature=format_temperature(current.temperature, units),
        feels_like=format_temperature(current.apparent_temperature, units),
        details=details,
        today=TodayView(
            high=format_temperature(today.temperature_high, units),
            high_time=_clock_or_none(today.temperature_high_time, tz),
            low=format_temperature(today.temperature_low, units),
            low_time=_clock_or_none(today.temperature_low_time, tz),
            summary=today.summary or current.summary or NO_SUMMARY,
        ),
        hours=hours,
        days=days,
        generated=format_generated(generated_at.astimezone(tz)),
        data_updated=format_clock(updated),
    )


def _with_time(value: str, clock: Optional[str]) -> str:
    return f"{value} at {clock}" if clock else value


def render_text(view: LocationView) -> str:
    details = {row.label: row.value for row in view.details}
    lines: List[str] = [
        f"Current Conditions: {view.condition}",
        f"Temperature: {view.temperature}",
        f"Feels Like: {view.feels_like}",
        f"Humidity: {details['Humidity']}",
        f"Wind Speed: {details['Wind Speed']}",
        f"Wind Gust: {details['Wind Gust']}",
        f"Precipitation Probability: {details['Precipitation']}",
        f"Cloud Cover: {details['Cloud Cover']}",
        f"UV Index: {details['UV Index']}",
        f"Visibility: {details['Visibility']}",
        f"Pressure: {details['Pressure']}",
        "",
        "Today's Forecast:",
        f"High: {_with_time(view.today.high, view.today.high_time)}",
        f"Low: {_with_time(view.today.low, view.today.low_time)}",
        f"Summary: {view.today.summary}",
        "",
        "6-Hour Forecast:",
    ]
    lines.extend(f"{hour.time}: {hour.temperature}, {hour.condition}" for hour in view.hours)
    lines.extend(["", "7-Day Forecast:"])
    lines.extend(
        f"{day.name}: High {day.high}, Low {day.low}, {day.condition}, {day.precip} precip" for day in view.days
    )
    return "\n".join(lines)


def format_forecast(
    forecast: Forecast,
    location: LocationRequest,
    raw_data: Any = None,
    tz: Optional[tzinfo] = None,
    now: Optional[datetime] = None,
) -> FormattedReport:
    local_tz = resolve_tz(forecast.timezone, tz or NY_TZ)
    generated_at = now or now_utc()

    view = build_view(forecast, location, local_tz, generated_at)
    section = render_location_section(view)
    LOGGER.debug("Formatted %s: %s, %s", location.name, view.temperature, view.condition)

    return FormattedReport(
        location=location.name,
        coordinates=f"{view.latitude}, {view.longitude}",
        weather_info=render_text(view),
        html_body=render_location_document(view, section),
        html_section=section,
        temperature=forecast.currently.temperature,
        conditions=forecast.currently.icon,
        timestamp=generated_at.isoformat(),
        raw_data=raw_data if isinstance(raw_data, dict) else {},
    )


def format_location_report(
    payload: Any,
    location: LocationRequest,
    tz: Optional[tzinfo] = None,
    now: Optional[datetime] = None,
) -> FormattedReport:
    """Format one location's raw forecast.

    Clock times use the forecast's own ``timezone`` when it names a known zone,
    otherwise ``tz``. A partial or malformed payload still yields a report,
    with missing values shown as ``N/A``.
    """
    forecast = parse_forecast(payload, location.name)
    return format_forecast(forecast, location, payload, tz=tz, now=now)
