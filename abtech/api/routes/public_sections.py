"""Public reads of the help and community sections as `{key: data}` maps."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from abtech.adapters.sqlite.sections import SQLiteSectionRepo
from abtech.api.deps import get_section_repo
from abtech.components.sections import COMMUNITY, HELP, ReadNamespaceInput, run_read_namespace
from abtech.core.errors import InternalError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/help/sections")
def get_help_sections(repo: SQLiteSectionRepo = Depends(get_section_repo)) -> dict[str, Any]:
    """Every help key maps to a list; a broken store reads as no sections."""
    try:
        result = run_read_namespace(ReadNamespaceInput(HELP), repo)
    except Exception:
        logger.exception("Error loading help sections")
        return {}
    return result.as_map(lists_only=True)


@router.get("/community/sections")
def get_community_sections(repo: SQLiteSectionRepo = Depends(get_section_repo)) -> dict[str, Any]:
    try:
        result = run_read_namespace(ReadNamespaceInput(COMMUNITY), repo)
    except Exception:
        logger.exception("Error loading community sections")
        raise InternalError(key="error") from None
    return result.as_map()
