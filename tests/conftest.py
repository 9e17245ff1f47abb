from __future__ import annotations

import copy
import json
from datetime import UTC, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from weathermail.models import LocationRequest

FIXTURES = Path(__file__).parent / "fixtures"
NY_TZ = ZoneInfo("America/New_York")
# 2024-05-01 08:00 EDT, the fixture's currently.time
FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def load_payload() -> dict:
    return json.loads((FIXTURES / "pirateweather_nyc.json").read_text(encoding="utf-8"))


def make_request(name: str = "NYC", lat: float = 40.7128, lon: float = -74.006, units: str = "us") -> LocationRequest:
    return LocationRequest(api_key="test-api-key-12345", units=units, name=name, lat=lat, lon=lon)


@pytest.fixture
def payload() -> dict:
    return load_payload()


@pytest.fixture
def nyc() -> LocationRequest:
    return make_request()


class FakeResponse:
    def __init__(self, payload=None, status_code: int = 200, reason: str = "OK", text: str | None = None) -> None:
        self._payload = payload
        self.status_code = status_code
        self.reason = reason
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return copy.deepcopy(self._payload)


class FakeSession:
    """Records GET calls and answers them from a queue of responses."""

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, dict]] = []
        self.closed = False

    def get(self, url, params=None, **kwargs):
        self.calls.append((url, dict(params or {})))
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True
