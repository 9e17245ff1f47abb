from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from pathlib import Path
from typing import Mapping, Optional

from ..config import EmailSettings
from ..models import CombinedReport

LOGGER = logging.getLogger(__name__)


class EmailClient:
    def __init__(self, settings: EmailSettings) -> None:
        self.settings = settings

    def build_message(
        self,
        subject: str,
        html_body: str,
        text_body: str,
        attachments: Optional[Mapping[str, Path]] = None,
    ) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.settings.sender
        msg["To"] = self.settings.recipient
        msg.set_content(text_body)
        msg.add_alternative(html_body, subtype="html")

        for path in (attachments or {}).values():
            msg.add_attachment(
                path.read_bytes(),
                maintype="text",
                subtype="csv" if path.suffix == ".csv" else "plain",
                filename=path.name,
            )
        return msg

    def send(
        self,
        subject: str,
        html_body: str,
        text_body: str,
        attachments: Optional[Mapping[str, Path]] = None,
    ) -> bool:
        if not self.settings.enabled:
            LOGGER.info("Email disabled; skipping send")
            return False

        msg = self.build_message(subject, html_body, text_body, attachments)
        with smtplib.SMTP(self.settings.host, self.settings.port) as smtp:
            smtp.starttls()
            smtp.login(self.settings.username, self.settings.password)
            smtp.send_message(msg)
        LOGGER.info("Email '%s' delivered to %s", subject, self.settings.recipient)
        return True

    def send_report(self, report: CombinedReport, attachments: Optional[Mapping[str, Path]] = None) -> bool:
        return self.send(report.subject, report.html_body, report.weather_info, attachments)
