"""Structural checks for formatted and combined reports.

The pipeline runs ``validate_combined_report`` before anything is emailed;
the rest are shared with the test suite.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Union

from .models import CombinedReport, FormattedReport

REQUIRED_HTML_TAGS = ("<html>", "</html>", "<head>", "</head>", "<body>", "</body>")
MORE_PATTERN = re.compile(r"\+\d+ more")
TEMPERATURE_PATTERN = re.compile(r"(-?\d+)°[FC]")

FORMATTED_FIELDS = ("location", "coordinates", "weatherInfo", "htmlBody", "temperature", "conditions", "timestamp")
COMBINED_FIELDS = ("weatherInfo", "htmlBody", "subject", "locationCount", "locations", "timestamp")


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.valid


def _as_mapping(report: Union[Mapping[str, Any], FormattedReport, CombinedReport]) -> Mapping[str, Any]:
    if isinstance(report, (FormattedReport, CombinedReport)):
        return report.to_dict()
    return report


def is_valid_html(html: str) -> bool:
    return all(tag in html for tag in REQUIRED_HTML_TAGS)


def extract_temperatures(text: str) -> List[int]:
    return [int(match) for match in TEMPERATURE_PATTERN.findall(text)]


def validate_formatted_report(report: Union[Mapping[str, Any], FormattedReport]) -> ValidationResult:
    data = _as_mapping(report)
    result = ValidationResult()
    for name in FORMATTED_FIELDS:
        if name not in data:
            result.errors.append(f"Missing required field: {name}")

    temperature = data.get("temperature")
    if temperature is not None and (isinstance(temperature, bool) or not isinstance(temperature, (int, float))):
        result.errors.append("temperature should be a number")
    if not isinstance(data.get("weatherInfo"), str):
        result.errors.append("weatherInfo should be a string")
    html = data.get("htmlBody")
    if not isinstance(html, str):
        result.errors.append("htmlBody should be a string")
    elif not is_valid_html(html):
        result.errors.append("htmlBody should contain valid HTML structure")
    return result


def validate_subject_format(subject: Any, location_count: int) -> ValidationResult:
    result = ValidationResult()
    if not isinstance(subject, str):
        result.errors.append("subject should be a string")
        return result
    if "Weather Report" not in subject:
        result.errors.append('subject should contain "Weather Report"')
    if location_count >= 4 and not MORE_PATTERN.search(subject):
        result.errors.append('subject for 4+ locations should include "+N more" format')
    if location_count < 4 and MORE_PATTERN.search(subject):
        result.errors.append('subject for fewer than 4 locations should not include "+N more"')
    return result


def validate_combined_report(report: Union[Mapping[str, Any], CombinedReport]) -> ValidationResult:
    data = _as_mapping(report)
    result = ValidationResult()
    for name in COMBINED_FIELDS:
        if name not in data:
            result.errors.append(f"Missing required field: {name}")

    locations = data.get("locations")
    count = data.get("locationCount")
    if not isinstance(locations, list):
        result.errors.append("locations should be an array")
    if not isinstance(count, int) or isinstance(count, bool):
        result.errors.append("locationCount should be a number")
    elif isinstance(locations, list) and count != len(locations):
        result.errors.append("locationCount does not match locations array length")

    html = data.get("htmlBody")
    if isinstance(html, str) and not is_valid_html(html):
        result.errors.append("htmlBody should contain valid HTML structure")
    if "subject" in data and isinstance(count, int):
        result.errors.extend(validate_subject_format(data["subject"], count).errors)
    return result


def validate_coordinates(lat: Any, lon: Any) -> ValidationResult:
    result = ValidationResult()
    try:
        latitude = float(lat)
    except (TypeError, ValueError):
        result.errors.append("Invalid latitude format")
    else:
        if not -90 <= latitude <= 90:
            result.errors.append("Latitude must be between -90 and 90")
    try:
        longitude = float(lon)
    except (TypeError, ValueError):
        result.errors.append("Invalid longitude format")
    else:
        if not -180 <= longitude <= 180:
            result.errors.append("Longitude must be between -180 and 180")
    return result
