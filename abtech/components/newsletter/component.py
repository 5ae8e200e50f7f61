"""
Newsletter subscription component.

Double opt-in over email tokens: subscribe/resend email a
`newsletter-confirm` link, confirm flips the record to active, unsubscribe
flips it back. Records are keyed by lowercased email or by user id.

Key behaviors:
- Honeypot check comes before any store access
- Session identity takes precedence over an email parameter for status
- Email-only subscribe writes no record; the record appears on confirm
- Signed-in subscribe without a record creates a pending record
"""

from __future__ import annotations

import logging
import re
from datetime import timedelta
from urllib.parse import quote

from abtech.components.email_tokens import (
    NEWSLETTER_CONFIRM,
    ConsumeTokenInput,
    EmailTokenRepoPort,
    FailureReason,
    IssueTokenInput,
    VerifyTokenInput,
    run_consume,
    run_issue,
    run_verify,
)
from abtech.components.newsletter.models import (
    CheckInput,
    CheckOutput,
    ConfirmInput,
    ConfirmOutput,
    NewsletterConfig,
    NewsletterSubscription,
    ResendInput,
    ResendOutput,
    StatusInput,
    StatusOutput,
    SubscribeInput,
    SubscribeOutput,
    SubscriptionStatus,
    UnsubscribeInput,
    UnsubscribeOutput,
    ValidationError,
)
from abtech.components.newsletter.ports import NewsletterRepoPort
from abtech.core.entities import SessionIdentity
from abtech.core.ports.clock import ClockPort
from abtech.core.ports.email import EmailPort
from abtech.core.spam import is_spam

logger = logging.getLogger(__name__)

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

SPAM = ValidationError("SPAM", "Spam detected", "honeypot")


# --- Pure Functions ---


def normalize_email(email: str | None) -> str:
    return email.strip().lower() if email else ""


def is_valid_email(email: str | None) -> bool:
    if not email:
        return False
    return EMAIL_REGEX.match(email.strip()) is not None


def build_confirmation_url(base_url: str, token: str, path: str = "/newsletter/confirm") -> str:
    base = base_url.rstrip("/")
    return f"{base}{path}?token={quote(token, safe='')}"


def render_confirmation_email(url: str) -> tuple[str, str]:
    """Return (html, text) bodies for the confirmation email."""
    html = (
        '<div style="font-family:system-ui,Segoe UI,Helvetica,Arial,sans-serif;'
        'line-height:1.6;color:#111">'
        "<h2>Confirm your subscription</h2>"
        "<p>Click the button below to confirm and complete subscription:</p>"
        f'<p><a href="{url}" style="display:inline-block;background:#111;color:#fff;'
        'padding:10px 16px;border-radius:6px;text-decoration:none">'
        "Confirm subscription</a></p></div>"
    )
    text = f"Confirm your subscription: {url}"
    return html, text


def _lookup(
    repo: NewsletterRepoPort,
    email: str | None,
    session: SessionIdentity | None,
) -> NewsletterSubscription | None:
    """Resolve by email when given, otherwise by the session user."""
    normalized = normalize_email(email)
    if normalized:
        return repo.get_by_email(normalized)
    if session is not None and session.user_id:
        return repo.get_by_user_id(session.user_id)
    return None


def _send_confirmation(
    email: str,
    *,
    token_repo: EmailTokenRepoPort,
    clock: ClockPort,
    email_sender: EmailPort,
    config: NewsletterConfig,
) -> bool:
    issued = run_issue(
        IssueTokenInput(
            email=email,
            purpose=NEWSLETTER_CONFIRM,
            ttl=timedelta(hours=config.token_ttl_hours),
        ),
        token_repo,
        clock,
    )
    url = build_confirmation_url(config.base_url, issued.token.value, config.confirm_path)
    html, text = render_confirmation_email(url)
    result = email_sender.send_email(email, config.confirm_subject, html, text)
    if not result.ok:
        logger.warning("Confirmation email to %s failed: %s", email, result.error)
        return False
    return True


# --- Run Handlers ---


def run_check(inp: CheckInput, repo: NewsletterRepoPort) -> CheckOutput:
    email = normalize_email(inp.email)
    if not email:
        return CheckOutput(
            success=False,
            errors=[ValidationError("MISSING_EMAIL", "Email is required", "email")],
        )
    sub = repo.get_by_email(email)
    return CheckOutput(success=True, is_subscribed=bool(sub and sub.active))


def run_confirm(
    inp: ConfirmInput,
    repo: NewsletterRepoPort,
    *,
    token_repo: EmailTokenRepoPort,
    clock: ClockPort,
    config: NewsletterConfig | None = None,
) -> ConfirmOutput:
    cfg = config or NewsletterConfig()

    if not inp.token:
        return ConfirmOutput(
            success=False,
            errors=[ValidationError("MISSING_TOKEN", "Missing token", "token")],
        )

    verified = run_verify(VerifyTokenInput(inp.token, NEWSLETTER_CONFIRM), token_repo, clock)
    if not verified.ok or verified.email is None:
        if verified.reason == FailureReason.EXPIRED:
            error = ValidationError("TOKEN_EXPIRED", "Token expired", "token")
        else:
            error = ValidationError("INVALID_TOKEN", "Invalid token", "token")
        if cfg.debug:
            logger.warning("newsletter.confirm rejected: %s", error.message)
        return ConfirmOutput(success=False, errors=[error])

    email = verified.email.lower()
    repo.upsert_active(email, clock.now_utc())
    run_consume(ConsumeTokenInput(inp.token), token_repo, clock)

    if cfg.debug:
        logger.info("newsletter.confirm verified %s", email)

    return ConfirmOutput(success=True, email=email)


def run_status(inp: StatusInput, repo: NewsletterRepoPort) -> StatusOutput:
    if inp.session is not None and inp.session.user_id:
        sub = repo.get_by_user_id(inp.session.user_id)
        return StatusOutput(status=sub.status if sub else SubscriptionStatus.NONE)

    email = normalize_email(inp.email)
    if not email:
        return StatusOutput(status=SubscriptionStatus.NONE)

    sub = repo.get_by_email(email)
    return StatusOutput(status=sub.status if sub else SubscriptionStatus.NONE)


def run_unsubscribe(
    inp: UnsubscribeInput,
    repo: NewsletterRepoPort,
    *,
    clock: ClockPort,
) -> UnsubscribeOutput:
    if is_spam(inp.honeypot):
        return UnsubscribeOutput(success=False, errors=[SPAM])

    email = inp.email if is_valid_email(inp.email) else None
    sub = _lookup(repo, email, inp.session)
    if sub is None:
        return UnsubscribeOutput(
            success=False,
            errors=[ValidationError("NOT_SUBSCRIBED", "Not subscribed", "email")],
        )

    if not sub.active:
        return UnsubscribeOutput(success=True, already_unsubscribed=True)

    repo.set_active(sub.id, False, clock.now_utc())
    return UnsubscribeOutput(success=True)


def run_subscribe(
    inp: SubscribeInput,
    repo: NewsletterRepoPort,
    *,
    token_repo: EmailTokenRepoPort,
    clock: ClockPort,
    email_sender: EmailPort,
    config: NewsletterConfig | None = None,
) -> SubscribeOutput:
    cfg = config or NewsletterConfig()

    if is_spam(inp.honeypot):
        return SubscribeOutput(success=False, errors=[SPAM])

    email = normalize_email(inp.email)
    if not email:
        return SubscribeOutput(
            success=False,
            errors=[ValidationError("MISSING_EMAIL", "Email is required", "email")],
        )
    if not is_valid_email(email):
        return SubscribeOutput(
            success=False,
            errors=[ValidationError("INVALID_EMAIL", "Invalid email address", "email")],
        )

    existing = repo.get_by_email(email)
    if existing is not None and existing.active:
        return SubscribeOutput(success=True, already_subscribed=True)

    if existing is None and inp.session is not None and inp.session.user_id:
        if repo.get_by_user_id(inp.session.user_id) is None:
            repo.create_pending(email, inp.session.user_id, clock.now_utc())

    sent = _send_confirmation(
        email,
        token_repo=token_repo,
        clock=clock,
        email_sender=email_sender,
        config=cfg,
    )
    if not sent:
        return SubscribeOutput(
            success=False,
            errors=[ValidationError("EMAIL_FAILED", "Failed to send confirmation email")],
        )
    return SubscribeOutput(success=True, pending=True)


def run_resend(
    inp: ResendInput,
    repo: NewsletterRepoPort,
    *,
    token_repo: EmailTokenRepoPort,
    clock: ClockPort,
    email_sender: EmailPort,
    config: NewsletterConfig | None = None,
) -> ResendOutput:
    cfg = config or NewsletterConfig()

    if is_spam(inp.honeypot):
        return ResendOutput(success=False, errors=[SPAM])

    sub = _lookup(repo, inp.email, inp.session)
    if sub is None:
        return ResendOutput(
            success=False,
            errors=[ValidationError("NO_PENDING", "No pending subscription found")],
        )
    if sub.active:
        return ResendOutput(success=True, already_subscribed=True)

    target = sub.email or normalize_email(inp.email)
    if not target:
        return ResendOutput(
            success=False,
            errors=[ValidationError("NO_EMAIL", "No email found for subscription", "email")],
        )

    sent = _send_confirmation(
        target,
        token_repo=token_repo,
        clock=clock,
        email_sender=email_sender,
        config=cfg,
    )
    if not sent:
        return ResendOutput(
            success=False,
            errors=[ValidationError("EMAIL_FAILED", "Failed to send confirmation email")],
        )
    return ResendOutput(success=True)


def run(
    inp: CheckInput
    | ConfirmInput
    | StatusInput
    | UnsubscribeInput
    | SubscribeInput
    | ResendInput,
    *,
    repo: NewsletterRepoPort,
    token_repo: EmailTokenRepoPort,
    clock: ClockPort,
    email_sender: EmailPort,
    config: NewsletterConfig | None = None,
) -> (
    CheckOutput | ConfirmOutput | StatusOutput | UnsubscribeOutput | SubscribeOutput | ResendOutput
):
    """Component entry point."""
    if isinstance(inp, CheckInput):
        return run_check(inp, repo)
    elif isinstance(inp, ConfirmInput):
        return run_confirm(inp, repo, token_repo=token_repo, clock=clock, config=config)
    elif isinstance(inp, StatusInput):
        return run_status(inp, repo)
    elif isinstance(inp, UnsubscribeInput):
        return run_unsubscribe(inp, repo, clock=clock)
    elif isinstance(inp, SubscribeInput):
        return run_subscribe(
            inp,
            repo,
            token_repo=token_repo,
            clock=clock,
            email_sender=email_sender,
            config=config,
        )
    elif isinstance(inp, ResendInput):
        return run_resend(
            inp,
            repo,
            token_repo=token_repo,
            clock=clock,
            email_sender=email_sender,
            config=config,
        )
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
