"""
Domain entities for the AB TECH site.

One explicit record type per persisted table. Repositories map rows to these
dataclasses and components work only with them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4


def utc_now() -> datetime:
    return datetime.now(UTC)


class Role(Enum):
    """User roles carried in the session token."""

    ADMIN = "ADMIN"
    MODERATOR = "MODERATOR"
    AUTHOR = "AUTHOR"
    PREMIUM_USER = "PREMIUM_USER"
    FREE_USER = "FREE_USER"


class JobSource(Enum):
    ABTECH = "ABTECH"
    EXTERNAL = "EXTERNAL"


class ReviewStatus(Enum):
    """Moderation state of a job submission or application."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class SessionIdentity:
    """
    Authenticated caller, decoded from the session token.

    Passed explicitly into component calls; components never read the
    request themselves.
    """

    user_id: str
    role: str
    email: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


@dataclass
class User:
    id: UUID
    email: str
    name: str | None = None
    role: str = Role.FREE_USER.value
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class Tag:
    id: UUID
    name: str
    slug: str
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class ModuleAsset:
    id: UUID
    module_id: UUID
    title: str
    url: str | None = None
    position: int = 0


@dataclass
class CourseModule:
    id: UUID
    course_id: UUID
    title: str
    description: str | None = None
    position: int = 0
    assets: list[ModuleAsset] = field(default_factory=list)


@dataclass
class Course:
    id: UUID
    title: str
    slug: str
    description: str | None = None
    cover_image: str | None = None
    level: str | None = None
    views: int = 0
    status: str = "DRAFT"  # DRAFT | PUBLISHED | ARCHIVED
    published: bool = False
    created_at: datetime = field(default_factory=utc_now)
    modules: list[CourseModule] = field(default_factory=list)

    @property
    def is_public(self) -> bool:
        return self.published and self.status == "PUBLISHED"


@dataclass
class Article:
    """
    A published or draft article.

    `tags` and `author_name` are filled in on read; saving an article
    replaces its tag links with `tags`.
    """

    id: UUID
    title: str
    slug: str
    excerpt: str = ""
    content: str = ""
    author_id: UUID | None = None
    published: bool = False
    premium: bool = False
    featured: bool = False
    trending: bool = False
    read_time: int = 0
    cover_image: str | None = None
    views: int = 0
    published_at: datetime | None = None
    created_at: datetime | None = field(default_factory=utc_now)
    updated_at: datetime | None = field(default_factory=utc_now)
    tags: list[Tag] = field(default_factory=list)
    author_name: str | None = None

    def is_owned_by(self, session: SessionIdentity | None) -> bool:
        return session is not None and str(self.author_id) == session.user_id


@dataclass
class Job:
    id: UUID
    title: str
    company: str
    location: str
    type: str
    description: str
    source: str = JobSource.EXTERNAL.value
    tags: str | None = None
    apply_url: str | None = None
    contact_email: str | None = None
    active: bool = True
    posted_at: datetime = field(default_factory=utc_now)


@dataclass
class JobSubmission:
    id: UUID
    title: str
    company: str
    location: str
    type: str
    description: str
    apply_url: str
    contact_email: str
    tags: str | None = None
    compensation_type: str | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    currency: str | None = None
    remote_type: str | None = None
    experience_level: str | None = None
    status: str = ReviewStatus.PENDING.value
    reviewed_at: datetime | None = None
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class JobApplication:
    id: UUID
    job_id: UUID
    name: str
    email: str
    phone: str | None = None
    linkedin: str | None = None
    portfolio: str | None = None
    resume_url: str | None = None
    cover_letter: str | None = None
    status: str = ReviewStatus.PENDING.value
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class SiteSection:
    """
    Keyed JSON content block (FAQ lists, help and community sections).

    `namespace` groups keys: "pricing", "community", "help".
    """

    namespace: str
    key: str
    data: Any = None
    updated_at: datetime = field(default_factory=utc_now)


def new_id() -> UUID:
    return uuid4()
