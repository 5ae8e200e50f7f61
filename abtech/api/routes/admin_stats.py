"""Admin dashboard counters."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from abtech.adapters.sqlite.catalog import SQLiteArticleRepo, SQLiteUserRepo
from abtech.api.deps import get_article_repo, get_session, get_user_repo
from abtech.api.schemas import AdminStatsResponse, RecentArticleResponse
from abtech.components.articles import AdminStatsInput, run_admin_stats
from abtech.core.entities import SessionIdentity
from abtech.core.errors import AuthorizationError, InternalError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=AdminStatsResponse)
def get_admin_stats(
    session: SessionIdentity | None = Depends(get_session),
    repo: SQLiteArticleRepo = Depends(get_article_repo),
    users: SQLiteUserRepo = Depends(get_user_repo),
) -> AdminStatsResponse:
    try:
        result = run_admin_stats(AdminStatsInput(session=session), repo, users)
    except Exception:
        logger.exception("Error fetching admin stats")
        raise InternalError() from None

    if not result.success:
        raise AuthorizationError(result.errors[0].message)
    return AdminStatsResponse(
        total_articles=result.total_articles,
        total_users=result.total_users,
        total_views=result.total_views,
        recent_articles=[RecentArticleResponse.from_article(a) for a in result.recent_articles],
    )
