"""
Email token component.

Single-use, purpose-scoped, expiring tokens for email links.
"""

from abtech.components.email_tokens.component import (
    generate_token_value,
    run,
    run_consume,
    run_issue,
    run_verify,
)
from abtech.components.email_tokens.models import (
    NEWSLETTER_CONFIRM,
    ConsumeTokenInput,
    ConsumeTokenOutput,
    EmailToken,
    FailureReason,
    IssueTokenInput,
    IssueTokenOutput,
    VerifyTokenInput,
    VerifyTokenOutput,
)
from abtech.components.email_tokens.ports import EmailTokenRepoPort

__all__ = [
    "run",
    "run_issue",
    "run_verify",
    "run_consume",
    "generate_token_value",
    "NEWSLETTER_CONFIRM",
    "EmailToken",
    "FailureReason",
    "IssueTokenInput",
    "IssueTokenOutput",
    "VerifyTokenInput",
    "VerifyTokenOutput",
    "ConsumeTokenInput",
    "ConsumeTokenOutput",
    "EmailTokenRepoPort",
]
