"""
Outbound email port.

The newsletter flow only needs to know whether a confirmation link went out,
so adapters report a status instead of raising on delivery problems.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class EmailStatus(Enum):
    SENT = "sent"
    LOGGED = "logged"  # recorded by the dev adapter, never delivered
    FAILED = "failed"


@dataclass(frozen=True)
class EmailResult:
    status: EmailStatus
    recipient: str
    message_id: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is not EmailStatus.FAILED

    @classmethod
    def sent(cls, recipient: str, message_id: str | None = None) -> EmailResult:
        return cls(EmailStatus.SENT, recipient, message_id=message_id)

    @classmethod
    def failed(cls, recipient: str, error: str) -> EmailResult:
        return cls(EmailStatus.FAILED, recipient, error=error)


class EmailPort(Protocol):
    def send_email(
        self,
        recipient: str,
        subject: str,
        body_html: str,
        body_text: str | None = None,
    ) -> EmailResult: ...
