from __future__ import annotations

import math
from types import MappingProxyType
from typing import Mapping, Optional

MISSING = "N/A"
FALLBACK_ICON = "🌤️"

ICON_DESCRIPTIONS: Mapping[str, str] = MappingProxyType(
    {
        "clear-day": "☀️ Clear",
        "clear-night": "🌙 Clear",
        "rain": "🌧️ Rain",
        "snow": "❄️ Snow",
        "sleet": "🌨️ Sleet",
        "wind": "💨 Windy",
        "fog": "🌫️ Foggy",
        "cloudy": "☁️ Cloudy",
        "partly-cloudy-day": "⛅ Partly Cloudy",
        "partly-cloudy-night": "☁️ Partly Cloudy",
    }
)

METRIC_TEMPERATURE = frozenset({"si", "ca"})
WIND_UNITS: Mapping[str, str] = MappingProxyType({"si": "m/s", "ca": "km/h"})


def round_half_up(value: float) -> int:
    """Round .5 towards +infinity rather than to the nearest even integer."""
    return int(math.floor(value + 0.5))


def _plain(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def temperature_unit(units: str) -> str:
    return "°C" if units in METRIC_TEMPERATURE else "°F"


def wind_unit(units: str) -> str:
    return WIND_UNITS.get(units, "mph")


def format_temperature(value: Optional[float], units: str = "us") -> str:
    if value is None:
        return MISSING
    return f"{round_half_up(value)}{temperature_unit(units)}"


def format_wind_speed(value: Optional[float], units: str = "us") -> str:
    if value is None:
        return MISSING
    return f"{round_half_up(value)} {wind_unit(units)}"


def format_percent(fraction: Optional[float], default: Optional[float] = 0.0) -> str:
    if fraction is None:
        if default is None:
            return MISSING
        fraction = default
    return f"{round_half_up(fraction * 100)}%"


def format_uv_index(value: Optional[float]) -> str:
    return MISSING if value is None else _plain(value)


def format_visibility(value: Optional[float]) -> str:
    return MISSING if value is None else f"{_plain(value)} miles"


def format_pressure(value: Optional[float]) -> str:
    return MISSING if value is None else f"{round_half_up(value)} mb"


def describe_icon(code: Optional[str]) -> str:
    if not code:
        return f"{FALLBACK_ICON} Unknown"
    description = ICON_DESCRIPTIONS.get(code)
    if description is None:
        return f"{FALLBACK_ICON} {code}"
    return description
