import os
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from abtech.adapters.captcha import TurnstileVerifier
from abtech.adapters.clock import SystemClock
from abtech.adapters.cloudinary_media import CloudinaryMediaLibrary
from abtech.adapters.dev_email import DevEmailAdapter
from abtech.adapters.smtp_email import SMTPEmailAdapter
from abtech.adapters.sqlite.catalog import (
    SQLiteArticleRepo,
    SQLiteCourseRepo,
    SQLiteJobRepo,
    SQLiteTagRepo,
    SQLiteUserRepo,
)
from abtech.adapters.sqlite.newsletter import SQLiteNewsletterRepo
from abtech.adapters.sqlite.sections import SQLiteSectionRepo
from abtech.adapters.sqlite.tokens import SQLiteEmailTokenRepo
from abtech.api.auth_utils import session_from_token
from abtech.components.newsletter import NewsletterConfig
from abtech.core.entities import SessionIdentity
from abtech.core.errors import AuthorizationError, ForbiddenError
from abtech.core.ports.email import EmailPort
from abtech.rules.loader import load_rules
from abtech.rules.models import Rules

TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in TRUTHY


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.environ.get("ABTECH_BASE_DIR") or os.getcwd())
        self.data_dir = os.environ.get("ABTECH_DATA_DIR", "./data")
        self.db_path = f"{self.data_dir}/abtech.db"
        self.rules_path = self.base_dir / "rules.yaml"
        self.migrations_dir = str(self.base_dir / "migrations")

        self.env = os.environ.get("ENV", "development")
        self.log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
        self.secret_key = os.environ.get("ABTECH_SECRET_KEY", "dev-secret-unsafe")
        self.base_url = os.environ.get("BASE_URL", "http://localhost:3000")

        # Dev proxy target for /api/socketio/*
        self.backend_port = os.environ.get("BACKEND_PORT", "4000")
        self.hostname = os.environ.get("HOSTNAME", "localhost")

        self.turnstile_secret = os.environ.get("TURNSTILE_SECRET_KEY") or None

        self.smtp_debug = _env_flag("SMTP_DEBUG")
        self.smtp_host = os.environ.get("SMTP_HOST") or None
        self.smtp_port = int(os.environ.get("SMTP_PORT", "587"))
        self.smtp_user = os.environ.get("SMTP_USER") or None
        self.smtp_password = os.environ.get("SMTP_PASSWORD") or None
        self.smtp_from = os.environ.get("SMTP_FROM", "AB TECH <no-reply@abtech.local>")

        self.cloudinary_cloud_name = os.environ.get("CLOUDINARY_CLOUD_NAME") or None
        self.cloudinary_api_key = os.environ.get("CLOUDINARY_API_KEY") or None
        self.cloudinary_api_secret = os.environ.get("CLOUDINARY_API_SECRET") or None

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def backend_url(self) -> str:
        return f"http://{self.hostname}:{self.backend_port}"


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


# --- Repos ---
def get_token_repo(settings: Settings = Depends(get_settings)) -> SQLiteEmailTokenRepo:
    return SQLiteEmailTokenRepo(settings.db_path)


def get_newsletter_repo(settings: Settings = Depends(get_settings)) -> SQLiteNewsletterRepo:
    return SQLiteNewsletterRepo(settings.db_path)


def get_user_repo(settings: Settings = Depends(get_settings)) -> SQLiteUserRepo:
    return SQLiteUserRepo(settings.db_path)


def get_tag_repo(settings: Settings = Depends(get_settings)) -> SQLiteTagRepo:
    return SQLiteTagRepo(settings.db_path)


def get_course_repo(settings: Settings = Depends(get_settings)) -> SQLiteCourseRepo:
    return SQLiteCourseRepo(settings.db_path)


def get_article_repo(settings: Settings = Depends(get_settings)) -> SQLiteArticleRepo:
    return SQLiteArticleRepo(settings.db_path)


def get_job_repo(settings: Settings = Depends(get_settings)) -> SQLiteJobRepo:
    return SQLiteJobRepo(settings.db_path)


def get_section_repo(settings: Settings = Depends(get_settings)) -> SQLiteSectionRepo:
    return SQLiteSectionRepo(settings.db_path)


# --- Adapters ---
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


_dev_email_instance: DevEmailAdapter | None = None


def get_email_sender(settings: Settings = Depends(get_settings)) -> EmailPort:
    """SMTP when SMTP_HOST is set, otherwise the logging dev adapter."""
    global _dev_email_instance
    if settings.smtp_host:
        return SMTPEmailAdapter(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user,
            password=settings.smtp_password,
            sender=settings.smtp_from,
        )
    if _dev_email_instance is None:
        _dev_email_instance = DevEmailAdapter()
    return _dev_email_instance


def get_captcha_verifier(settings: Settings = Depends(get_settings)) -> TurnstileVerifier:
    return TurnstileVerifier(settings.turnstile_secret)


def get_media_library(settings: Settings = Depends(get_settings)) -> CloudinaryMediaLibrary:
    return CloudinaryMediaLibrary(
        settings.cloudinary_cloud_name,
        settings.cloudinary_api_key,
        settings.cloudinary_api_secret,
    )


def get_newsletter_config(
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> NewsletterConfig:
    return NewsletterConfig(
        token_ttl_hours=rules.newsletter.confirm_token_ttl_hours,
        site_name=rules.newsletter.site_name,
        base_url=settings.base_url,
        confirm_path=rules.newsletter.confirm_path,
        confirm_subject=rules.newsletter.confirm_subject,
        debug=settings.smtp_debug,
    )


# --- Auth ---
bearer_scheme = HTTPBearer(auto_error=False)


def read_session(request: Request, settings: Settings, rules: Rules) -> SessionIdentity | None:
    """Session from the cookie, falling back to an Authorization: Bearer header."""
    token = request.cookies.get(rules.sessions.cookie_name)
    if not token:
        header = request.headers.get("authorization", "")
        scheme, _, value = header.partition(" ")
        if scheme.lower() == "bearer" and value:
            token = value.strip()
    return session_from_token(token, settings.secret_key)


def get_session(
    request: Request,
    _creds: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> SessionIdentity | None:
    """Optional session; None for anonymous callers."""
    return read_session(request, settings, rules)


def require_editor(key: str = "message") -> Callable[..., SessionIdentity]:
    """
    Dependency factory: 401 unless the session role is one of the editor
    roles in rules.yaml (ADMIN, MODERATOR).

    `key` names the JSON field the error message is rendered under.
    """

    def dependency(
        session: SessionIdentity | None = Depends(get_session),
        rules: Rules = Depends(get_rules),
    ) -> SessionIdentity:
        if session is None or session.role not in rules.admin.editor_roles:
            raise AuthorizationError(key=key)
        return session

    return dependency


def require_admin(key: str = "message") -> Callable[..., SessionIdentity]:
    """Dependency factory: 403 unless the session belongs to an ADMIN."""

    def dependency(
        session: SessionIdentity | None = Depends(get_session),
    ) -> SessionIdentity:
        if session is None or not session.is_admin:
            raise ForbiddenError(key=key)
        return session

    return dependency
