"""Tag endpoints: list all tags, create a tag from a name."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from abtech.adapters.sqlite.catalog import SQLiteTagRepo
from abtech.api.deps import get_tag_repo
from abtech.api.schemas import CreateTagRequest, TagResponse
from abtech.components.tags import CreateTagInput, ListTagsInput, run_create, run_list
from abtech.core.errors import ConflictError, InternalError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[TagResponse])
def list_tags(repo: SQLiteTagRepo = Depends(get_tag_repo)) -> list[TagResponse]:
    """All tags ordered by name."""
    try:
        result = run_list(ListTagsInput(), repo)
    except Exception:
        logger.exception("Error fetching tags")
        raise InternalError() from None
    return [TagResponse.from_entity(t) for t in result.tags]


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
def create_tag(
    body: CreateTagRequest,
    repo: SQLiteTagRepo = Depends(get_tag_repo),
) -> TagResponse:
    try:
        result = run_create(CreateTagInput(name=body.name), repo)
    except Exception:
        logger.exception("Error creating tag")
        raise InternalError() from None

    if not result.success or result.tag is None:
        error = result.errors[0]
        if error.code == "DUPLICATE":
            raise ConflictError(error.message)
        raise ValidationError(error.message)
    return TagResponse.from_entity(result.tag)
