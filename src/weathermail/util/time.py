from __future__ import annotations

from datetime import UTC, datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

NY_TZ = ZoneInfo("America/New_York")


def now_utc() -> datetime:
    return datetime.now(UTC)


def resolve_tz(name: Optional[str], fallback: tzinfo = NY_TZ) -> tzinfo:
    if not name:
        return fallback
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return fallback


def from_epoch(ts: Optional[float], tz: tzinfo = NY_TZ) -> Optional[datetime]:
    if ts is None:
        return None
    try:
        return datetime.fromtimestamp(ts, tz)
    except (OverflowError, OSError, ValueError):
        return None


def format_clock(dt: Optional[datetime]) -> str:
    return dt.strftime("%I:%M %p") if dt is not None else "N/A"


def format_weekday(dt: Optional[datetime]) -> str:
    return dt.strftime("%A") if dt is not None else "Unknown"
