"""
Newsletter component.

Double opt-in subscription state machine over email tokens.
"""

from abtech.components.newsletter.component import (
    EMAIL_REGEX,
    build_confirmation_url,
    is_spam,
    is_valid_email,
    normalize_email,
    render_confirmation_email,
    run,
    run_check,
    run_confirm,
    run_resend,
    run_status,
    run_subscribe,
    run_unsubscribe,
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

__all__ = [
    # Component
    "run",
    "run_check",
    "run_confirm",
    "run_status",
    "run_unsubscribe",
    "run_subscribe",
    "run_resend",
    # Pure functions
    "normalize_email",
    "is_valid_email",
    "is_spam",
    "build_confirmation_url",
    "render_confirmation_email",
    "EMAIL_REGEX",
    # Models
    "NewsletterSubscription",
    "SubscriptionStatus",
    "NewsletterConfig",
    "CheckInput",
    "CheckOutput",
    "ConfirmInput",
    "ConfirmOutput",
    "StatusInput",
    "StatusOutput",
    "UnsubscribeInput",
    "UnsubscribeOutput",
    "SubscribeInput",
    "SubscribeOutput",
    "ResendInput",
    "ResendOutput",
    "ValidationError",
    # Ports
    "NewsletterRepoPort",
]
