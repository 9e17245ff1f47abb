from __future__ import annotations

import json
import logging
from typing import List, Optional, Sequence, Union

from pydantic import BaseModel, Field, ValidationError

from .errors import LocationError
from .models import DEFAULT_UNITS, LocationRequest

LOGGER = logging.getLogger(__name__)


class Location(BaseModel):
    name: str = Field(min_length=1, pattern=r"^[^\x00-\x1f\x7f]+$")
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)

    model_config = {
        "frozen": True,
    }


def parse_locations(raw: str) -> List[Location]:
    """Parse the JSON-encoded ``[{name, lat, lon}, ...]`` array.

    A malformed string raises ``json.JSONDecodeError`` unchanged. Entries are
    validated here so bad coordinates fail before any request is made.
    """
    payload = json.loads(raw)
    if not isinstance(payload, list):
        raise LocationError(f"locations must be a JSON array, got {type(payload).__name__}")

    locations: List[Location] = []
    for index, entry in enumerate(payload):
        try:
            locations.append(Location.model_validate(entry))
        except ValidationError as exc:
            raise LocationError(f"location #{index} is invalid: {exc}") from exc
    return locations


def split_locations(
    api_key: str,
    units: Optional[str],
    locations: Union[str, Sequence[Location]],
) -> List[LocationRequest]:
    if isinstance(locations, str):
        locations = parse_locations(locations)
    units = units or DEFAULT_UNITS

    requests = [
        LocationRequest(api_key=api_key, units=units, name=loc.name, lat=loc.lat, lon=loc.lon)
        for loc in locations
    ]
    if not requests:
        LOGGER.warning("No locations configured; nothing to fetch")
    return requests
