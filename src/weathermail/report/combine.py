from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from ..errors import EmptyReportError
from ..models import CombinedReport, FormattedReport
from ..util.time import now_utc
from .html import format_generated, render_combined_document

LOGGER = logging.getLogger(__name__)

SUBJECT_PREFIX = "Weather Report"
SUBJECT_MAX_NAMES = 3
RULE = "=" * 50


def build_subject(names: Sequence[str]) -> str:
    count = len(names)
    if count == 0:
        return SUBJECT_PREFIX
    if count == 1:
        return f"{SUBJECT_PREFIX}: {names[0]}"
    if count == 2:
        return f"{SUBJECT_PREFIX}: {names[0]} & {names[1]}"
    if count == 3:
        return f"{SUBJECT_PREFIX}: {names[0]}, {names[1]} & {names[2]}"
    shown = names[:SUBJECT_MAX_NAMES]
    return f"{SUBJECT_PREFIX}: {', '.join(shown)} +{count - len(shown)} more"


def _title(count: int) -> str:
    noun = "Location" if count == 1 else "Locations"
    return f"🌤️ Daily Weather Report ({count} {noun})"


def combine_reports(reports: Sequence[FormattedReport], now: Optional[datetime] = None) -> CombinedReport:
    """Merge per-location reports, in order, into one email payload."""
    if not reports:
        raise EmptyReportError("No location reports to combine")

    generated_at = now or now_utc()
    names = tuple(report.location for report in reports)
    title = _title(len(reports))

    blocks: List[str] = [title, f"Generated {format_generated(generated_at)}"]
    for report in reports:
        blocks.extend(
            [
                "",
                RULE,
                f"📍 {report.location} ({report.coordinates})",
                RULE,
                report.weather_info,
            ]
        )

    html_body = render_combined_document(
        title,
        format_generated(generated_at),
        [report.html_section for report in reports],
    )
    subject = build_subject(names)
    LOGGER.info("Combined %d location report(s): %s", len(names), subject)

    return CombinedReport(
        weather_info="\n".join(blocks),
        html_body=html_body,
        subject=subject,
        location_count=len(names),
        locations=names,
        timestamp=generated_at.isoformat(),
    )
