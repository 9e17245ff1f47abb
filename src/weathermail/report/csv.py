from __future__ import annotations

from datetime import tzinfo
from pathlib import Path
from typing import List, Sequence, Tuple

import pandas as pd

from ..models import Forecast, LocationRequest
from ..util.time import format_weekday, from_epoch, resolve_tz
from .location import DAILY_HORIZON
from .units import round_half_up

COLUMNS = [
    "location",
    "lat",
    "lon",
    "units",
    "date",
    "weekday",
    "icon",
    "summary",
    "temperature_high",
    "temperature_low",
    "precip_pct",
]


def _rows(location: LocationRequest, forecast: Forecast, fallback_tz: tzinfo) -> List[dict]:
    tz = resolve_tz(forecast.timezone, fallback_tz)
    rows = []
    for day in forecast.daily[:DAILY_HORIZON]:
        dt = from_epoch(day.time, tz)
        rows.append(
            {
                "location": location.name,
                "lat": location.lat,
                "lon": location.lon,
                "units": location.units,
                "date": dt.date().isoformat() if dt else "",
                "weekday": format_weekday(dt) if dt else "",
                "icon": day.icon or "",
                "summary": day.summary or "",
                "temperature_high": day.temperature_high,
                "temperature_low": day.temperature_low,
                "precip_pct": round_half_up(day.precip_probability * 100) if day.precip_probability is not None else None,
            }
        )
    return rows


def write_daily_csv(
    forecasts: Sequence[Tuple[LocationRequest, Forecast]],
    path: Path,
    fallback_tz: tzinfo,
) -> Path:
    """Write every location's daily outlook into one CSV, in location order."""
    path.parent.mkdir(parents=True, exist_ok=True)
    records: List[dict] = []
    for location, forecast in forecasts:
        records.extend(_rows(location, forecast, fallback_tz))
    df = pd.DataFrame(records, columns=COLUMNS)
    df.to_csv(path, index=False)
    return path
