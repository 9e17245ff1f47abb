from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

import requests

from .config import AppSettings
from .errors import ReportValidationError
from .ingest.cache import ForecastCache
from .ingest.forecast import parse_forecast
from .ingest.pirateweather import PirateWeatherClient
from .locations import split_locations
from .models import Forecast, FormattedReport, LocationRequest, RunSummary
from .report.combine import combine_reports
from .report.csv import write_daily_csv
from .report.location import format_forecast
from .util.emailer import EmailClient
from .util.http import create_session
from .util.logging import setup_logging
from .validation import validate_combined_report

LOGGER = logging.getLogger(__name__)
CACHE_ROOT = Path(".cache")


def run_pipeline(
    settings: AppSettings,
    session: Optional[requests.Session] = None,
    now: Optional[datetime] = None,
) -> RunSummary:
    setup_logging(settings.logs_dir, settings.log_level)
    owns_session = session is None
    session = session or create_session(timeout=settings.http_timeout)
    cache = ForecastCache(CACHE_ROOT, settings.cache_ttl_minutes)
    client = PirateWeatherClient(session, settings.api_url, cache=cache if cache.enabled else None)

    jobs = split_locations(settings.api_key, settings.units, settings.locations)
    generated_at = now or datetime.now(settings.tzinfo)

    reports: List[FormattedReport] = []
    forecasts: List[Tuple[LocationRequest, Forecast]] = []
    try:
        for request in jobs:
            try:
                payload = client.fetch(request)
            except Exception:
                LOGGER.exception("Forecast fetch failed for %s; aborting run", request.name)
                raise
            forecast = parse_forecast(payload, request.name)
            forecasts.append((request, forecast))
            reports.append(format_forecast(forecast, request, payload, tz=settings.tzinfo, now=generated_at))
    finally:
        if owns_session:
            session.close()

    combined = combine_reports(reports, now=generated_at)
    check = validate_combined_report(combined)
    if not check.valid:
        raise ReportValidationError(check.errors)

    stamp = generated_at.strftime("%Y%m%d_%H%M")
    settings.out_dir.mkdir(parents=True, exist_ok=True)
    html_path = settings.out_dir / f"weather_{stamp}.html"
    text_path = settings.out_dir / f"weather_{stamp}.txt"
    csv_path = settings.out_dir / f"daily_{stamp}.csv"
    html_path.write_text(combined.html_body, encoding="utf-8")
    text_path.write_text(combined.weather_info, encoding="utf-8")
    write_daily_csv(forecasts, csv_path, settings.tzinfo)
    LOGGER.info("Wrote %s, %s and %s", html_path, text_path, csv_path)

    email_sent = False
    if settings.email.enabled and not settings.html_only:
        email_sent = EmailClient(settings.email).send_report(combined, {"daily": csv_path})
    elif not settings.html_only:
        LOGGER.info("SMTP settings incomplete; report written to disk only")

    return RunSummary(
        generated_at=generated_at,
        subject=combined.subject,
        location_count=combined.location_count,
        html_report=str(html_path),
        text_report=str(text_path),
        csv_path=str(csv_path),
        email_sent=email_sent,
    )
