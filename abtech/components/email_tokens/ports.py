"""Email token component ports."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from abtech.components.email_tokens.models import EmailToken


class EmailTokenRepoPort(Protocol):
    """Token store. No expiry sweep; tokens are kept forever."""

    def save(self, token: EmailToken) -> EmailToken:
        ...

    def get_by_value(self, value: str) -> EmailToken | None:
        ...

    def mark_consumed(self, value: str, when: datetime) -> bool:
        """
        Set consumed_at only if it is still unset.

        Returns True when this call performed the write.
        """
        ...
