from __future__ import annotations

from typing import Optional


class WeatherMailError(Exception):
    """Base exception for weathermail failures."""


class ConfigurationError(WeatherMailError, RuntimeError):
    """Settings could not be loaded or validated."""


class LocationError(ConfigurationError):
    """A location entry is missing fields or has out-of-range coordinates."""


class ForecastFetchError(WeatherMailError):
    """The weather API call for one location failed."""

    def __init__(self, operation: str, location: str, message: str, status: Optional[int] = None) -> None:
        self.operation = operation
        self.location = location
        self.status = status
        detail = f"{operation} failed for {location}: {message}"
        if status is not None:
            detail = f"{detail} (HTTP {status})"
        super().__init__(detail)


class EmptyReportError(WeatherMailError, ValueError):
    """Nothing to combine: the run produced no location reports."""


class ReportValidationError(WeatherMailError):
    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("Report failed validation: " + "; ".join(self.errors))
