"""
Development mail outbox.

Used whenever SMTP_HOST is unset. Nothing leaves the process: each message
is logged on one line and kept in memory, so a developer (or a test) can pull
the confirmation link back out of the last message.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from itertools import count

from abtech.core.ports.email import EmailResult, EmailStatus

logger = logging.getLogger(__name__)

LINK_RE = re.compile(r"https?://[^\s\"'<>]+")


@dataclass(frozen=True)
class OutboxMessage:
    message_id: str
    recipient: str
    subject: str
    body_html: str
    body_text: str
    queued_at: datetime

    @property
    def links(self) -> list[str]:
        """Distinct URLs in the message, text body first."""
        found: list[str] = []
        for url in LINK_RE.findall(f"{self.body_text}\n{self.body_html}"):
            if url not in found:
                found.append(url)
        return found


@dataclass
class DevEmailAdapter:
    """Implements EmailPort without delivering anything."""

    outbox: list[OutboxMessage] = field(default_factory=list)
    preview_chars: int = 100
    _ids: count = field(default_factory=lambda: count(1), init=False, repr=False)

    def send_email(
        self,
        recipient: str,
        subject: str,
        body_html: str,
        body_text: str | None = None,
    ) -> EmailResult:
        message = OutboxMessage(
            message_id=f"dev-{next(self._ids):06d}",
            recipient=recipient,
            subject=subject,
            body_html=body_html,
            body_text=body_text or "",
            queued_at=datetime.now(UTC),
        )
        self.outbox.append(message)

        preview = (body_text or body_html)[: self.preview_chars]
        if len(body_text or body_html) > self.preview_chars:
            preview += "..."
        logger.info(
            "dev mail %s to=%s subject=%r body=%r",
            message.message_id,
            recipient,
            subject,
            preview,
        )

        return EmailResult(EmailStatus.LOGGED, recipient, message_id=message.message_id)

    def get_last_email(self) -> OutboxMessage | None:
        return self.outbox[-1] if self.outbox else None

    def get_emails_to(self, recipient: str) -> list[OutboxMessage]:
        wanted = recipient.lower()
        return [m for m in self.outbox if m.recipient.lower() == wanted]

    def last_link(self, recipient: str | None = None) -> str | None:
        """First link of the newest message, optionally for one recipient."""
        messages = self.get_emails_to(recipient) if recipient else self.outbox
        if not messages or not messages[-1].links:
            return None
        return messages[-1].links[0]

    def clear(self) -> None:
        self.outbox.clear()

    @property
    def email_count(self) -> int:
        return len(self.outbox)
