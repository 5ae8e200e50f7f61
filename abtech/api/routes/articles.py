"""
Article endpoints.

- GET /api/articles - Paginated published list (editors may ask for drafts)
- POST /api/articles - Create (ADMIN / AUTHOR)
- GET /api/articles/authors - Author directory with article counts
- GET /api/articles/by-slug/{slug} - Reader view, premium content locked
- GET/PUT/DELETE /api/articles/{article_id} - Editor read, update, delete
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from abtech.adapters.sqlite.catalog import SQLiteArticleRepo, SQLiteTagRepo, SQLiteUserRepo
from abtech.api.deps import get_article_repo, get_session, get_tag_repo, get_user_repo
from abtech.api.schemas import (
    ArticleCardResponse,
    ArticleListResponse,
    ArticleResponse,
    ArticleViewResponse,
    ArticleWriteRequest,
    AuthorResponse,
    MessageResponse,
    PaginationResponse,
)
from abtech.components.articles import (
    CreateArticleInput,
    DeleteArticleInput,
    GetArticleInput,
    GetBySlugInput,
    ListArticlesInput,
    ListAuthorsInput,
    UpdateArticleInput,
    run_create_article,
    run_delete_article,
    run_get_article,
    run_get_by_slug,
    run_list_articles,
    run_list_authors,
    run_update_article,
)
from abtech.components.articles.models import ValidationError as ComponentError
from abtech.core.entities import SessionIdentity
from abtech.core.errors import (
    AppError,
    AuthorizationError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_TYPES: dict[str, type[AppError]] = {
    "UNAUTHORIZED": AuthorizationError,
    "FORBIDDEN": ForbiddenError,
    "NOT_FOUND": NotFoundError,
}


def raise_for(errors: list[ComponentError]) -> None:
    error = errors[0]
    raise ERROR_TYPES.get(error.code, ValidationError)(error.message)


@router.get("", response_model=ArticleListResponse)
def list_articles(
    page: int = Query(1),
    limit: int = Query(10),
    tag: str | None = Query(None),
    search: str | None = Query(None),
    drafts: str | None = Query(None),
    exclude: str | None = Query(None),
    author_role: str | None = Query(None, alias="authorRole"),
    author_id: str | None = Query(None, alias="authorId"),
    session: SessionIdentity | None = Depends(get_session),
    repo: SQLiteArticleRepo = Depends(get_article_repo),
) -> ArticleListResponse:
    inp = ListArticlesInput(
        session=session,
        page=page,
        limit=limit,
        tag=tag,
        search=search,
        drafts=drafts == "true",
        exclude=exclude,
        author_role=author_role,
        author_id=author_id,
    )
    try:
        result = run_list_articles(inp, repo)
    except Exception:
        logger.exception("Error fetching articles")
        raise InternalError() from None
    return ArticleListResponse(
        articles=[ArticleCardResponse.from_entity(a) for a in result.articles],
        pagination=PaginationResponse(
            page=result.page, limit=result.limit, total=result.total, pages=result.pages
        ),
    )


@router.post("", response_model=ArticleResponse, status_code=201)
def create_article(
    body: ArticleWriteRequest,
    session: SessionIdentity | None = Depends(get_session),
    repo: SQLiteArticleRepo = Depends(get_article_repo),
    tags: SQLiteTagRepo = Depends(get_tag_repo),
    users: SQLiteUserRepo = Depends(get_user_repo),
) -> ArticleResponse:
    inp = CreateArticleInput(
        session=session,
        title=body.title,
        excerpt=body.excerpt,
        content=body.content,
        featured=bool(body.featured),
        trending=bool(body.trending),
        premium=bool(body.premium),
        read_time=body.read_time or 0,
        cover_image=body.cover_image or None,
        tag_ids=body.tag_ids or [],
    )
    try:
        result = run_create_article(inp, repo, tags, users)
    except Exception:
        logger.exception("Error creating article")
        raise InternalError() from None
    if not result.success or result.article is None:
        raise_for(result.errors)
    logger.info("Article created: %s", result.article.slug)
    return ArticleResponse.from_entity(result.article)


@router.get("/authors", response_model=list[AuthorResponse])
def list_authors(
    published: str | None = Query(None),
    repo: SQLiteArticleRepo = Depends(get_article_repo),
) -> list[AuthorResponse]:
    """
    Authors with at least one article and their article counts.

    `published=true` counts only published articles, any other value only
    unpublished ones; omit it to count everything.
    """
    flag = None if published is None else published == "true"
    try:
        result = run_list_authors(ListAuthorsInput(published=flag), repo)
    except Exception:
        logger.exception("Error fetching authors")
        raise InternalError() from None
    return [AuthorResponse.from_count(a) for a in result.authors]


@router.get("/by-slug/{slug}", response_model=ArticleViewResponse)
def get_article_by_slug(
    slug: str,
    session: SessionIdentity | None = Depends(get_session),
    repo: SQLiteArticleRepo = Depends(get_article_repo),
) -> ArticleViewResponse:
    try:
        result = run_get_by_slug(GetBySlugInput(session=session, slug=slug), repo)
    except Exception:
        logger.exception("Error fetching article by slug")
        raise InternalError() from None
    if not result.success or result.view is None:
        raise_for(result.errors)
    return ArticleViewResponse.from_view(result.view)


@router.get("/{article_id}", response_model=ArticleResponse)
def get_article(
    article_id: str,
    session: SessionIdentity | None = Depends(get_session),
    repo: SQLiteArticleRepo = Depends(get_article_repo),
) -> ArticleResponse:
    try:
        result = run_get_article(GetArticleInput(session=session, article_id=article_id), repo)
    except Exception:
        logger.exception("Error fetching article")
        raise InternalError() from None
    if not result.success or result.article is None:
        raise_for(result.errors)
    return ArticleResponse.from_entity(result.article)


@router.put("/{article_id}", response_model=ArticleResponse)
def update_article(
    article_id: str,
    body: ArticleWriteRequest,
    session: SessionIdentity | None = Depends(get_session),
    repo: SQLiteArticleRepo = Depends(get_article_repo),
    tags: SQLiteTagRepo = Depends(get_tag_repo),
) -> ArticleResponse:
    inp = UpdateArticleInput(
        session=session,
        article_id=article_id,
        title=body.title,
        excerpt=body.excerpt,
        content=body.content,
        featured=body.featured,
        trending=body.trending,
        premium=body.premium,
        read_time=body.read_time,
        cover_image=body.cover_image,
        published=body.published,
        tag_ids=body.tag_ids,
    )
    try:
        result = run_update_article(inp, repo, tags)
    except Exception:
        logger.exception("Error updating article")
        raise InternalError() from None
    if not result.success or result.article is None:
        raise_for(result.errors)
    return ArticleResponse.from_entity(result.article)


@router.delete("/{article_id}", response_model=MessageResponse)
def delete_article(
    article_id: str,
    session: SessionIdentity | None = Depends(get_session),
    repo: SQLiteArticleRepo = Depends(get_article_repo),
) -> MessageResponse:
    try:
        result = run_delete_article(
            DeleteArticleInput(session=session, article_id=article_id), repo
        )
    except Exception:
        logger.exception("Error deleting article")
        raise InternalError() from None
    if not result.success:
        raise_for(result.errors)
    logger.info("Article deleted: %s", article_id)
    return MessageResponse(message="Article deleted successfully")
