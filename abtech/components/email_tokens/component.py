"""
Email token service.

Issues, verifies and consumes single-use email tokens.

Verification order: existence, purpose, consumed, expiry. A consumed token is
always `invalid`, whatever its expiry.

Verify and consume are separate calls. The store only writes consumed_at when
it is still NULL, so a second consume is a no-op, but two verifies racing on
the same token can both succeed before either consumes.
"""

from __future__ import annotations

import logging
import secrets

from abtech.components.email_tokens.models import (
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
from abtech.core.ports.clock import ClockPort

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


def generate_token_value(length: int = TOKEN_BYTES) -> str:
    """URL-safe random token value."""
    return secrets.token_urlsafe(length)


def run_issue(
    inp: IssueTokenInput,
    repo: EmailTokenRepoPort,
    clock: ClockPort,
) -> IssueTokenOutput:
    now = clock.now_utc()
    token = EmailToken(
        value=generate_token_value(),
        purpose=inp.purpose,
        subject_email=inp.email.strip().lower(),
        issued_at=now,
        expires_at=now + inp.ttl,
    )
    repo.save(token)
    logger.debug("Issued %s token for %s", inp.purpose, token.subject_email)
    return IssueTokenOutput(token=token)


def run_verify(
    inp: VerifyTokenInput,
    repo: EmailTokenRepoPort,
    clock: ClockPort,
) -> VerifyTokenOutput:
    if not inp.value:
        return VerifyTokenOutput(ok=False, reason=FailureReason.INVALID)

    token = repo.get_by_value(inp.value)
    if token is None:
        return VerifyTokenOutput(ok=False, reason=FailureReason.INVALID)
    if token.purpose != inp.expected_purpose:
        return VerifyTokenOutput(ok=False, reason=FailureReason.INVALID)
    if token.is_consumed:
        return VerifyTokenOutput(ok=False, reason=FailureReason.INVALID)
    if token.is_expired(clock.now_utc()):
        return VerifyTokenOutput(ok=False, reason=FailureReason.EXPIRED)

    return VerifyTokenOutput(ok=True, email=token.subject_email)


def run_consume(
    inp: ConsumeTokenInput,
    repo: EmailTokenRepoPort,
    clock: ClockPort,
) -> ConsumeTokenOutput:
    """Mark a token used. Idempotent; purpose is not checked here."""
    consumed = repo.mark_consumed(inp.value, clock.now_utc())
    if not consumed:
        logger.debug("Token already consumed or unknown")
    return ConsumeTokenOutput(consumed=consumed)


def run(
    inp: IssueTokenInput | VerifyTokenInput | ConsumeTokenInput,
    *,
    repo: EmailTokenRepoPort,
    clock: ClockPort,
) -> IssueTokenOutput | VerifyTokenOutput | ConsumeTokenOutput:
    """Component entry point."""
    if isinstance(inp, IssueTokenInput):
        return run_issue(inp, repo, clock)
    elif isinstance(inp, VerifyTokenInput):
        return run_verify(inp, repo, clock)
    elif isinstance(inp, ConsumeTokenInput):
        return run_consume(inp, repo, clock)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
