"""Protocol interfaces shared across components."""

from abtech.core.ports.clock import ClockPort
from abtech.core.ports.email import EmailPort, EmailResult, EmailStatus

__all__ = ["ClockPort", "EmailPort", "EmailResult", "EmailStatus"]
