from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..errors import ForecastFetchError
from ..models import LocationRequest
from .cache import ForecastCache

LOGGER = logging.getLogger(__name__)
FORECAST_URL = "https://api.pirateweather.net/forecast"


def _slug(request: LocationRequest) -> str:
    coords = f"{request.lat:.4f}_{request.lon:.4f}".replace("-", "m").replace(".", "d")
    return f"{request.units}_{coords}"


class PirateWeatherClient:
    source_name = "pirateweather"

    def __init__(self, session: requests.Session, base_url: str = FORECAST_URL, cache: Optional[ForecastCache] = None) -> None:
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.cache = cache

    def _url(self, request: LocationRequest) -> str:
        return f"{self.base_url}/{request.api_key}/{request.lat},{request.lon}"

    def _download(self, request: LocationRequest) -> Any:
        try:
            resp = self.session.get(self._url(request), params={"units": request.units})
        except requests.RequestException as exc:
            # The URL embeds the API key, so only the exception type is reported.
            raise ForecastFetchError("fetch_forecast", request.name, type(exc).__name__) from exc

        if resp.status_code >= 400:
            raise ForecastFetchError("fetch_forecast", request.name, resp.reason or "HTTP error", resp.status_code)
        try:
            return resp.json()
        except ValueError as exc:
            raise ForecastFetchError("fetch_forecast", request.name, "response is not JSON", resp.status_code) from exc

    def fetch(self, request: LocationRequest) -> Any:
        LOGGER.info("Fetching %s forecast for %s (%s)", request.units, request.name, request.coordinates)
        if self.cache is None:
            return self._download(request)
        return self.cache.fetch(_slug(request), lambda: self._download(request))
