"""
Newsletter endpoints.

Endpoints:
- GET /api/newsletter/check - Is this email an active subscriber
- GET /api/newsletter/confirm - Redeem a confirmation token
- GET /api/newsletter/status - none / pending / verified
- POST /api/newsletter/unsubscribe - Deactivate a subscription
- POST /api/newsletter/subscribe - Email a confirmation link
- POST /api/newsletter/resend - Email a fresh confirmation link

The CAPTCHA token is accepted on the form posts but not verified.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from abtech.adapters.clock import SystemClock
from abtech.adapters.sqlite.newsletter import SQLiteNewsletterRepo
from abtech.adapters.sqlite.tokens import SQLiteEmailTokenRepo
from abtech.api.deps import (
    get_clock,
    get_email_sender,
    get_newsletter_config,
    get_newsletter_repo,
    get_session,
    get_token_repo,
)
from abtech.api.schemas import EmailActionRequest
from abtech.components.newsletter import (
    CheckInput,
    ConfirmInput,
    NewsletterConfig,
    ResendInput,
    StatusInput,
    SubscribeInput,
    UnsubscribeInput,
    run_check,
    run_confirm,
    run_resend,
    run_status,
    run_subscribe,
    run_unsubscribe,
)
from abtech.core.entities import SessionIdentity
from abtech.core.errors import (
    AppError,
    ExpiredTokenError,
    InternalError,
    InvalidTokenError,
    NotFoundError,
    ValidationError,
)
from abtech.core.ports.email import EmailPort

logger = logging.getLogger(__name__)

router = APIRouter()

# Component error code -> HTTP error
_ERRORS: dict[str, type[AppError]] = {
    "SPAM": ValidationError,
    "MISSING_EMAIL": ValidationError,
    "INVALID_EMAIL": ValidationError,
    "NO_EMAIL": ValidationError,
    "MISSING_TOKEN": InvalidTokenError,
    "INVALID_TOKEN": InvalidTokenError,
    "TOKEN_EXPIRED": ExpiredTokenError,
    "NOT_SUBSCRIBED": NotFoundError,
    "NO_PENDING": NotFoundError,
    "EMAIL_FAILED": InternalError,
}


def _raise_first(errors: list[Any], **kwargs: Any) -> None:
    error = errors[0]
    raise _ERRORS.get(error.code, InternalError)(error.message, **kwargs)


@router.get("/check")
def check_subscription(
    email: str | None = Query(None),
    repo: SQLiteNewsletterRepo = Depends(get_newsletter_repo),
) -> dict[str, Any]:
    try:
        result = run_check(CheckInput(email=email), repo)
    except Exception:
        logger.exception("newsletter.check failed")
        raise InternalError() from None
    if not result.success:
        _raise_first(result.errors)
    return {"isSubscribed": result.is_subscribed}


@router.get("/confirm")
def confirm_subscription(
    token: str | None = Query(None),
    repo: SQLiteNewsletterRepo = Depends(get_newsletter_repo),
    token_repo: SQLiteEmailTokenRepo = Depends(get_token_repo),
    clock: SystemClock = Depends(get_clock),
    config: NewsletterConfig = Depends(get_newsletter_config),
) -> dict[str, Any]:
    try:
        result = run_confirm(
            ConfirmInput(token=token),
            repo,
            token_repo=token_repo,
            clock=clock,
            config=config,
        )
    except Exception:
        logger.exception("newsletter.confirm failed")
        raise InternalError(extra={"ok": False}) from None
    if not result.success:
        _raise_first(result.errors, extra={"ok": False})
    return {"ok": True, "message": "Subscription confirmed", "email": result.email}


@router.get("/status")
def subscription_status(
    email: str | None = Query(None),
    session: SessionIdentity | None = Depends(get_session),
    repo: SQLiteNewsletterRepo = Depends(get_newsletter_repo),
) -> dict[str, Any]:
    try:
        result = run_status(StatusInput(email=email, session=session), repo)
    except Exception:
        logger.exception("newsletter.status failed")
        raise InternalError() from None
    return {"status": result.status.value}


@router.post("/unsubscribe")
def unsubscribe(
    body: EmailActionRequest,
    session: SessionIdentity | None = Depends(get_session),
    repo: SQLiteNewsletterRepo = Depends(get_newsletter_repo),
    clock: SystemClock = Depends(get_clock),
) -> dict[str, Any]:
    inp = UnsubscribeInput(
        email=body.email,
        honeypot=body.honeypot,
        captcha_token=body.captcha_token,
        session=session,
    )
    try:
        result = run_unsubscribe(inp, repo, clock=clock)
    except Exception:
        logger.exception("newsletter.unsubscribe failed")
        raise InternalError() from None
    if not result.success:
        _raise_first(result.errors)
    if result.already_unsubscribed:
        return {"message": "Already unsubscribed"}
    return {"message": "Unsubscribed"}


@router.post("/subscribe")
def subscribe(
    body: EmailActionRequest,
    session: SessionIdentity | None = Depends(get_session),
    repo: SQLiteNewsletterRepo = Depends(get_newsletter_repo),
    token_repo: SQLiteEmailTokenRepo = Depends(get_token_repo),
    clock: SystemClock = Depends(get_clock),
    email_sender: EmailPort = Depends(get_email_sender),
    config: NewsletterConfig = Depends(get_newsletter_config),
) -> dict[str, Any]:
    inp = SubscribeInput(
        email=body.email,
        honeypot=body.honeypot,
        captcha_token=body.captcha_token,
        session=session,
    )
    try:
        result = run_subscribe(
            inp,
            repo,
            token_repo=token_repo,
            clock=clock,
            email_sender=email_sender,
            config=config,
        )
    except Exception:
        logger.exception("newsletter.subscribe failed")
        raise InternalError() from None
    if not result.success:
        _raise_first(result.errors)
    if result.already_subscribed:
        return {"message": "Already subscribed", "alreadySubscribed": True}
    return {"message": "Confirmation email sent", "pending": True}


@router.post("/resend")
def resend_confirmation(
    body: EmailActionRequest,
    session: SessionIdentity | None = Depends(get_session),
    repo: SQLiteNewsletterRepo = Depends(get_newsletter_repo),
    token_repo: SQLiteEmailTokenRepo = Depends(get_token_repo),
    clock: SystemClock = Depends(get_clock),
    email_sender: EmailPort = Depends(get_email_sender),
    config: NewsletterConfig = Depends(get_newsletter_config),
) -> dict[str, Any]:
    inp = ResendInput(
        email=body.email,
        honeypot=body.honeypot,
        captcha_token=body.captcha_token,
        session=session,
    )
    try:
        result = run_resend(
            inp,
            repo,
            token_repo=token_repo,
            clock=clock,
            email_sender=email_sender,
            config=config,
        )
    except Exception:
        logger.exception("newsletter.resend failed")
        raise InternalError() from None
    if not result.success:
        _raise_first(result.errors)
    if result.already_subscribed:
        return {"message": "Already subscribed"}
    return {"message": "Verification email resent"}
