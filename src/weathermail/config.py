from __future__ import annotations

import os
from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import ConfigurationError
from .locations import Location, parse_locations
from .models import DEFAULT_UNITS, UnitSystem

DEFAULT_API_URL = "https://api.pirateweather.net/forecast"
DEFAULT_TZ = "America/New_York"


class EmailSettings(BaseModel):
    sender: Optional[str] = Field(default=None, alias="MAIL_FROM")
    recipient: Optional[str] = Field(default=None, alias="MAIL_TO")
    host: Optional[str] = Field(default=None, alias="SMTP_HOST")
    port: int = Field(default=587, alias="SMTP_PORT")
    username: Optional[str] = Field(default=None, alias="SMTP_USER")
    password: Optional[str] = Field(default=None, alias="SMTP_PASS")

    model_config = {
        "populate_by_name": True,
    }

    @property
    def enabled(self) -> bool:
        return all([self.sender, self.recipient, self.host, self.username, self.password])


class AppSettings(BaseModel):
    api_key: str = Field(min_length=1)
    units: UnitSystem = Field(default=DEFAULT_UNITS)
    locations: List[Location] = Field(min_length=1)
    api_url: str = Field(default=DEFAULT_API_URL)
    tz: str = Field(default=DEFAULT_TZ)
    out_dir: Path = Field(default=Path("out"))
    logs_dir: Path = Field(default=Path("logs"))
    log_level: str = Field(default="INFO")
    cache_ttl_minutes: int = Field(default=0, ge=0)
    http_timeout: float = Field(default=30.0, gt=0)
    html_only: bool = Field(default=False)
    email: EmailSettings = Field(default_factory=EmailSettings)

    @field_validator("units", mode="before")
    @classmethod
    def _normalize_units(cls, value: Any) -> Any:
        if value is None or value == "":
            return DEFAULT_UNITS
        return value.lower() if isinstance(value, str) else value

    @field_validator("tz")
    @classmethod
    def _known_tz(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown time zone {value!r}") from exc
        return value

    @property
    def tzinfo(self):  # pragma: no cover - thin helper
        return ZoneInfo(self.tz)


def _env_bool(key: str, default: bool = False) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _pick(cli_args: dict[str, Any], cli_key: str, env_key: str, default: Any = None) -> Any:
    value = cli_args.get(cli_key)
    if value is not None:
        return value
    return os.getenv(env_key, default)


def load_settings(cli_args: dict[str, Any] | None = None) -> AppSettings:
    load_dotenv()
    cli_args = cli_args or {}

    raw_locations = _pick(cli_args, "locations", "LOCATIONS")
    if not raw_locations:
        raise ConfigurationError("LOCATIONS is required (a JSON array of {name, lat, lon})")
    locations = parse_locations(raw_locations)

    data: dict[str, Any] = {
        "api_key": _pick(cli_args, "api_key", "PIRATEWEATHER_API_KEY", ""),
        "units": _pick(cli_args, "units", "UNITS", DEFAULT_UNITS),
        "locations": locations,
        "api_url": _pick(cli_args, "api_url", "PIRATEWEATHER_URL", DEFAULT_API_URL),
        "tz": _pick(cli_args, "tz", "TZ", DEFAULT_TZ),
        "out_dir": Path(_pick(cli_args, "out_dir", "OUT_DIR", "out")).expanduser(),
        "logs_dir": Path(_pick(cli_args, "logs_dir", "LOGS_DIR", "logs")).expanduser(),
        "log_level": str(_pick(cli_args, "log_level", "LOG_LEVEL", "INFO")).upper(),
        "cache_ttl_minutes": _pick(cli_args, "cache_ttl_minutes", "CACHE_TTL_MINUTES", 0),
        "http_timeout": _pick(cli_args, "http_timeout", "HTTP_TIMEOUT", 30.0),
        "html_only": bool(cli_args.get("html_only")) or _env_bool("HTML_ONLY"),
    }

    try:
        data["email"] = EmailSettings(
            MAIL_FROM=os.getenv("MAIL_FROM"),
            MAIL_TO=os.getenv("MAIL_TO"),
            SMTP_HOST=os.getenv("SMTP_HOST"),
            SMTP_PORT=os.getenv("SMTP_PORT", 587),
            SMTP_USER=os.getenv("SMTP_USER"),
            SMTP_PASS=os.getenv("SMTP_PASS"),
        )
        settings = AppSettings(**data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc

    settings.out_dir.mkdir(parents=True, exist_ok=True)
    settings.logs_dir.mkdir(parents=True, exist_ok=True)
    return settings
