from __future__ import annotations

import logging
import math
from typing import Any, List, Mapping, Optional

from ..models import CurrentConditions, DayForecast, Forecast, HourForecast

LOGGER = logging.getLogger(__name__)


def _number(block: Mapping[str, Any], key: str, where: str) -> Optional[float]:
    value = block.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        LOGGER.warning("%s: ignoring boolean %s=%r", where, key, value)
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        LOGGER.warning("%s: ignoring non-numeric %s=%r", where, key, value)
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _epoch(block: Mapping[str, Any], key: str, where: str) -> Optional[int]:
    value = _number(block, key, where)
    return int(value) if value is not None else None


def _text(block: Mapping[str, Any], key: str) -> Optional[str]:
    value = block.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _mapping(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = payload.get(key)
    return value if isinstance(value, Mapping) else {}


def _series(payload: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    data = _mapping(payload, key).get("data")
    if not isinstance(data, list):
        return []
    return [entry for entry in data if isinstance(entry, Mapping)]


def parse_currently(block: Mapping[str, Any], where: str = "currently") -> CurrentConditions:
    return CurrentConditions(
        time=_epoch(block, "time", where),
        summary=_text(block, "summary"),
        icon=_text(block, "icon"),
        temperature=_number(block, "temperature", where),
        apparent_temperature=_number(block, "apparentTemperature", where),
        humidity=_number(block, "humidity", where),
        wind_speed=_number(block, "windSpeed", where),
        wind_gust=_number(block, "windGust", where),
        precip_probability=_number(block, "precipProbability", where),
        cloud_cover=_number(block, "cloudCover", where),
        uv_index=_number(block, "uvIndex", where),
        visibility=_number(block, "visibility", where),
        pressure=_number(block, "pressure", where),
    )


def parse_hour(block: Mapping[str, Any], where: str = "hourly") -> HourForecast:
    return HourForecast(
        time=_epoch(block, "time", where),
        temperature=_number(block, "temperature", where),
        icon=_text(block, "icon"),
        summary=_text(block, "summary"),
    )


def parse_day(block: Mapping[str, Any], where: str = "daily") -> DayForecast:
    return DayForecast(
        time=_epoch(block, "time", where),
        summary=_text(block, "summary"),
        icon=_text(block, "icon"),
        temperature_high=_number(block, "temperatureHigh", where),
        temperature_high_time=_epoch(block, "temperatureHighTime", where),
        temperature_low=_number(block, "temperatureLow", where),
        temperature_low_time=_epoch(block, "temperatureLowTime", where),
        precip_probability=_number(block, "precipProbability", where),
    )


def parse_forecast(payload: Any, location: str = "forecast") -> Forecast:
    """Convert a raw PirateWeather response into typed snapshots.

    Never raises for partial data: absent sections come back empty and are
    listed in ``Forecast.missing`` so callers can report them.
    """
    if not isinstance(payload, Mapping):
        LOGGER.warning("%s: payload is %s, not an object", location, type(payload).__name__)
        payload = {}

    missing = tuple(
        section
        for section in ("currently", "hourly", "daily")
        if not isinstance(payload.get(section), Mapping)
    )
    if missing:
        LOGGER.warning("%s: forecast is missing %s", location, ", ".join(missing))

    timezone = payload.get("timezone")
    return Forecast(
        currently=parse_currently(_mapping(payload, "currently"), f"{location} currently"),
        hourly=tuple(parse_hour(entry, f"{location} hourly") for entry in _series(payload, "hourly")),
        daily=tuple(parse_day(entry, f"{location} daily") for entry in _series(payload, "daily")),
        timezone=timezone if isinstance(timezone, str) else None,
        latitude=_number(payload, "latitude", location),
        longitude=_number(payload, "longitude", location),
        missing=missing,
    )
