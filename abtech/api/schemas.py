"""
Request and response models for the JSON API.

Field names are snake_case in Python and camelCase on the wire; requests
accept either spelling.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from abtech.components.articles.models import ArticleView, AuthorCount, RecentArticle
from abtech.components.courses.models import CourseSummary
from abtech.core.entities import (
    Article,
    Course,
    CourseModule,
    Job,
    JobApplication,
    JobSubmission,
    SiteSection,
    Tag,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Requests ---


class EmailActionRequest(CamelModel):
    """Body shared by the newsletter subscribe / unsubscribe / resend forms."""

    email: str | None = None
    captcha_token: str | None = None
    honeypot: Any = None


class CreateTagRequest(CamelModel):
    name: str | None = None


class JobSubmitRequest(CamelModel):
    title: str | None = None
    company: str | None = None
    location: str | None = None
    type: str | None = None
    description: str | None = None
    apply_url: str | None = None
    contact_email: str | None = None
    tags: str | None = None
    compensation_type: str | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    currency: str | None = None
    remote_type: str | None = None
    experience_level: str | None = None
    honeypot: Any = None
    captcha_token: str | None = None


class ListEditRequest(CamelModel):
    """PATCH body for index-addressed list edits. `index` is left untyped."""

    op: str | None = None
    key: str | None = None
    index: Any = None
    item: Any = None


class ListDeleteRequest(CamelModel):
    key: str | None = None
    index: Any = None


class HelpEditRequest(CamelModel):
    key: str | None = None
    index: Any = None
    data: Any = None


class SectionPutRequest(CamelModel):
    key: str | None = None
    data: Any = None


class ArticleWriteRequest(CamelModel):
    """Create and update body. On update, omitted fields are left unchanged."""

    title: str | None = None
    excerpt: str | None = None
    content: str | None = None
    featured: bool | None = None
    trending: bool | None = None
    premium: bool | None = None
    read_time: int | None = None
    cover_image: str | None = None
    published: bool | None = None
    tag_ids: list[str] | None = None


class JobApplyRequest(CamelModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    portfolio: str | None = None
    resume_url: str | None = None
    cover_letter: str | None = None
    honeypot: Any = None
    captcha_token: str | None = None


class JobWriteRequest(CamelModel):
    """Admin job create / PATCH. `id` is required on PATCH only."""

    id: Any = None
    title: str | None = None
    company: str | None = None
    location: str | None = None
    type: str | None = None
    description: str | None = None
    source: str | None = None
    tags: str | None = None
    apply_url: str | None = None
    contact_email: str | None = None
    active: bool | None = None


class SubmissionReviewRequest(CamelModel):
    id: Any = None
    op: str | None = None


class ApplicationStatusRequest(CamelModel):
    id: Any = None
    status: Any = None


class CourseWriteRequest(CamelModel):
    """Course create / PATCH. Values are checked by the course component."""

    id: Any = None
    title: Any = None
    slug: Any = None
    description: Any = None
    cover_image: Any = None
    level: Any = None
    status: Any = None


class ModuleWriteRequest(CamelModel):
    """Module create, PATCH or bulk reorder (`reorder: [{id, order}]`)."""

    id: Any = None
    title: Any = None
    description: Any = None
    order: Any = None
    reorder: list[Any] | None = None


# --- Responses ---


class TagResponse(CamelModel):
    id: UUID
    name: str
    slug: str
    created_at: datetime

    @classmethod
    def from_entity(cls, tag: Tag) -> "TagResponse":
        return cls(id=tag.id, name=tag.name, slug=tag.slug, created_at=tag.created_at)


class CourseSummaryResponse(CamelModel):
    id: UUID
    title: str
    slug: str
    description: str | None = None
    cover_image: str | None = None
    level: str | None = None
    views: int
    created_at: datetime
    module_count: int
    asset_count: int
    module_titles: list[str]

    @classmethod
    def from_summary(cls, summary: CourseSummary) -> "CourseSummaryResponse":
        return cls(
            id=summary.id,
            title=summary.title,
            slug=summary.slug,
            description=summary.description,
            cover_image=summary.cover_image,
            level=summary.level,
            views=summary.views,
            created_at=summary.created_at,
            module_count=summary.module_count,
            asset_count=summary.asset_count,
            module_titles=summary.module_titles,
        )


class CourseListResponse(CamelModel):
    courses: list[CourseSummaryResponse]


class AssetResponse(CamelModel):
    id: UUID
    title: str
    url: str | None = None
    order: int


class ModuleResponse(CamelModel):
    id: UUID
    title: str
    description: str | None = None
    order: int
    assets: list[AssetResponse]

    @classmethod
    def from_entity(cls, module: CourseModule) -> "ModuleResponse":
        return cls(
            id=module.id,
            title=module.title,
            description=module.description,
            order=module.position,
            assets=[
                AssetResponse(id=a.id, title=a.title, url=a.url, order=a.position)
                for a in module.assets
            ],
        )


class CourseDetail(CamelModel):
    id: UUID
    title: str
    slug: str
    description: str | None = None
    cover_image: str | None = None
    level: str | None = None
    views: int
    status: str
    published: bool
    created_at: datetime
    modules: list[ModuleResponse]

    @classmethod
    def from_entity(cls, course: Course) -> "CourseDetail":
        return cls(
            id=course.id,
            title=course.title,
            slug=course.slug,
            description=course.description,
            cover_image=course.cover_image,
            level=course.level,
            views=course.views,
            status=course.status,
            published=course.published,
            created_at=course.created_at,
            modules=[ModuleResponse.from_entity(m) for m in course.modules],
        )


class CourseDetailResponse(CamelModel):
    course: CourseDetail


class CourseListAdminResponse(CamelModel):
    courses: list[CourseDetail]


class ModuleWriteResponse(CamelModel):
    module: ModuleResponse


class JobResponse(CamelModel):
    id: UUID
    title: str
    company: str
    location: str
    type: str
    description: str
    source: str
    tags: str | None = None
    apply_url: str | None = None
    contact_email: str | None = None
    active: bool
    posted_at: datetime

    @classmethod
    def from_entity(cls, job: Job) -> "JobResponse":
        return cls(
            id=job.id,
            title=job.title,
            company=job.company,
            location=job.location,
            type=job.type,
            description=job.description,
            source=job.source,
            tags=job.tags,
            apply_url=job.apply_url,
            contact_email=job.contact_email,
            active=job.active,
            posted_at=job.posted_at,
        )


class JobSearchResponse(CamelModel):
    abtech: list[JobResponse]
    external: list[JobResponse]


class JobSubmissionResponse(CamelModel):
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
    status: str
    reviewed_at: datetime | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, sub: JobSubmission) -> "JobSubmissionResponse":
        return cls(
            id=sub.id,
            title=sub.title,
            company=sub.company,
            location=sub.location,
            type=sub.type,
            description=sub.description,
            apply_url=sub.apply_url,
            contact_email=sub.contact_email,
            tags=sub.tags,
            compensation_type=sub.compensation_type,
            salary_min=sub.salary_min,
            salary_max=sub.salary_max,
            currency=sub.currency,
            remote_type=sub.remote_type,
            experience_level=sub.experience_level,
            status=sub.status,
            reviewed_at=sub.reviewed_at,
            created_at=sub.created_at,
        )


class JobSubmitResponse(CamelModel):
    success: bool
    submission: JobSubmissionResponse


class AuthorResponse(CamelModel):
    id: str
    name: str
    count: int

    @classmethod
    def from_count(cls, author: AuthorCount) -> "AuthorResponse":
        return cls(id=author.id, name=author.name, count=author.count)


class RecentArticleResponse(CamelModel):
    id: UUID
    title: str
    views: int
    published_at: datetime | None = None

    @classmethod
    def from_article(cls, article: RecentArticle) -> "RecentArticleResponse":
        return cls(
            id=article.id,
            title=article.title,
            views=article.views,
            published_at=article.published_at,
        )


class AdminStatsResponse(CamelModel):
    total_articles: int
    total_users: int
    total_views: int
    recent_articles: list[RecentArticleResponse]


class SectionResponse(CamelModel):
    namespace: str
    key: str
    data: Any = None
    updated_at: datetime

    @classmethod
    def from_entity(cls, section: SiteSection) -> "SectionResponse":
        return cls(
            namespace=section.namespace,
            key=section.key,
            data=section.data,
            updated_at=section.updated_at,
        )


class SectionWriteResponse(CamelModel):
    success: bool
    section: SectionResponse


# --- Articles ---


class ArticleCardResponse(CamelModel):
    """Listing card: everything but the body."""

    id: UUID
    title: str
    slug: str
    excerpt: str
    author_id: UUID | None = None
    author_name: str | None = None
    published: bool
    premium: bool
    featured: bool
    trending: bool
    read_time: int
    cover_image: str | None = None
    views: int
    published_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    tags: list[TagResponse]

    @classmethod
    def fields_of(cls, article: Article) -> dict[str, Any]:
        return dict(
            id=article.id,
            title=article.title,
            slug=article.slug,
            excerpt=article.excerpt,
            author_id=article.author_id,
            author_name=article.author_name,
            published=article.published,
            premium=article.premium,
            featured=article.featured,
            trending=article.trending,
            read_time=article.read_time,
            cover_image=article.cover_image,
            views=article.views,
            published_at=article.published_at,
            created_at=article.created_at,
            updated_at=article.updated_at,
            tags=[TagResponse.from_entity(t) for t in article.tags],
        )

    @classmethod
    def from_entity(cls, article: Article) -> "ArticleCardResponse":
        return cls(**cls.fields_of(article))


class ArticleResponse(ArticleCardResponse):
    content: str

    @classmethod
    def from_entity(cls, article: Article, content: str | None = None) -> "ArticleResponse":
        body = article.content if content is None else content
        return cls(content=body, **cls.fields_of(article))


class PaginationResponse(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class ArticleListResponse(CamelModel):
    articles: list[ArticleCardResponse]
    pagination: PaginationResponse


class ArticleViewResponse(CamelModel):
    article: ArticleResponse
    locked: bool
    lock_reason: str

    @classmethod
    def from_view(cls, view: ArticleView) -> "ArticleViewResponse":
        return cls(
            article=ArticleResponse.from_entity(view.article, content=view.content),
            locked=view.locked,
            lock_reason=view.lock_reason.value,
        )


class MessageResponse(CamelModel):
    message: str


# --- Job moderation ---


class JobApplicationResponse(CamelModel):
    id: UUID
    job_id: UUID
    name: str
    email: str
    phone: str | None = None
    linkedin: str | None = None
    portfolio: str | None = None
    resume_url: str | None = None
    cover_letter: str | None = None
    status: str
    created_at: datetime

    @classmethod
    def from_entity(cls, app: JobApplication) -> "JobApplicationResponse":
        return cls(
            id=app.id,
            job_id=app.job_id,
            name=app.name,
            email=app.email,
            phone=app.phone,
            linkedin=app.linkedin,
            portfolio=app.portfolio,
            resume_url=app.resume_url,
            cover_letter=app.cover_letter,
            status=app.status,
            created_at=app.created_at,
        )


class JobApplyResponse(CamelModel):
    success: bool
    application: JobApplicationResponse


class JobListResponse(CamelModel):
    jobs: list[JobResponse]


class JobWriteResponse(CamelModel):
    job: JobResponse


class SubmissionListResponse(CamelModel):
    submissions: list[JobSubmissionResponse]


class SubmissionReviewResponse(CamelModel):
    success: bool
    submission: JobSubmissionResponse
    job: JobResponse | None = None


class ApplicationListResponse(CamelModel):
    applications: list[JobApplicationResponse]


class ApplicationWriteResponse(CamelModel):
    application: JobApplicationResponse


class SuccessResponse(CamelModel):
    success: bool
