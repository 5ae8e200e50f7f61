"""
SMTP email adapter.

Sends multipart (text + HTML) mail through a relay with STARTTLS when the
port is not 465, implicit TLS when it is.
"""

from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid

from abtech.core.ports.email import EmailResult

logger = logging.getLogger(__name__)

SMTPS_PORT = 465


@dataclass
class SMTPEmailAdapter:
    host: str
    port: int = 587
    username: str | None = None
    password: str | None = None
    sender: str = "no-reply@localhost"
    timeout: float = 15.0

    def _build(
        self, recipient: str, subject: str, body_html: str, body_text: str | None
    ) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = recipient
        message["Message-ID"] = make_msgid()
        if body_text:
            message.attach(MIMEText(body_text, "plain", "utf-8"))
        message.attach(MIMEText(body_html, "html", "utf-8"))
        return message

    def _connect(self) -> smtplib.SMTP:
        if self.port == SMTPS_PORT:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        server.starttls()
        return server

    def send_email(
        self,
        recipient: str,
        subject: str,
        body_html: str,
        body_text: str | None = None,
    ) -> EmailResult:
        message = self._build(recipient, subject, body_html, body_text)
        try:
            with self._connect() as server:
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.sendmail(self.sender, [recipient], message.as_string())
        except smtplib.SMTPAuthenticationError:
            logger.error("SMTP authentication failed for %s", self.username)
            return EmailResult.failed(recipient, "SMTP authentication failed")
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP send to %s failed: %s", recipient, e)
            return EmailResult.failed(recipient, str(e))

        logger.info("Email sent to %s", recipient)
        return EmailResult.sent(recipient, message_id=message["Message-ID"])
