"""
Help and community section editors (ADMIN / MODERATOR).

Help sections answer with the stored row and render errors under `message`;
community sections answer `{success, section}` and render errors under
`error`. Keys are limited to the lists in rules.yaml.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from abtech.adapters.sqlite.sections import SQLiteSectionRepo
from abtech.api.deps import get_rules, get_section_repo, require_editor
from abtech.api.schemas import (
    HelpEditRequest,
    ListDeleteRequest,
    ListEditRequest,
    SectionPutRequest,
    SectionResponse,
    SectionWriteResponse,
)
from abtech.components.sections import (
    COMMUNITY,
    HELP,
    BulkPutInput,
    EditOutput,
    HelpItemDeleteInput,
    HelpItemEditInput,
    ListItemDeleteInput,
    ListItemEditInput,
    PutSectionInput,
    ReadNamespaceInput,
    run_bulk_put,
    run_help_item_delete,
    run_help_item_edit,
    run_list_item_delete,
    run_list_item_edit,
    run_put_section,
    run_read_namespace,
)
from abtech.core.entities import SessionIdentity
from abtech.core.errors import InternalError, ValidationError
from abtech.rules.models import Rules

logger = logging.getLogger(__name__)

help_router = APIRouter()
community_router = APIRouter()


def _saved(result: EditOutput, key: str) -> SectionResponse:
    if not result.success or result.section is None:
        raise ValidationError(result.errors[0].message, key=key)
    return SectionResponse.from_entity(result.section)


# --- Help ---


@help_router.get("", response_model=list[SectionResponse])
def list_help_sections(
    _session: SessionIdentity = Depends(require_editor()),
    repo: SQLiteSectionRepo = Depends(get_section_repo),
) -> list[SectionResponse]:
    try:
        result = run_read_namespace(ReadNamespaceInput(HELP), repo)
    except Exception:
        logger.exception("Admin GET help sections error")
        raise InternalError() from None
    return [SectionResponse.from_entity(s) for s in result.sections]


@help_router.post("", response_model=list[SectionResponse])
def replace_help_sections(
    body: Any = Body(None),
    _session: SessionIdentity = Depends(require_editor()),
    repo: SQLiteSectionRepo = Depends(get_section_repo),
    rules: Rules = Depends(get_rules),
) -> list[SectionResponse]:
    """Upsert a full `[{key, data}]` payload; unknown keys are skipped."""
    if not isinstance(body, list):
        raise ValidationError("Invalid body")
    inp = BulkPutInput(
        namespace=HELP,
        items=body,
        allowed_keys=tuple(rules.sections.help_allowed_keys),
    )
    try:
        result = run_bulk_put(inp, repo)
    except Exception:
        logger.exception("Admin POST help sections error")
        raise InternalError() from None
    return [SectionResponse.from_entity(s) for s in result.sections]


@help_router.patch("", response_model=SectionResponse)
def edit_help_item(
    body: HelpEditRequest,
    _session: SessionIdentity = Depends(require_editor()),
    repo: SQLiteSectionRepo = Depends(get_section_repo),
    rules: Rules = Depends(get_rules),
) -> SectionResponse:
    """Replace item `index` of `key`, or append when the index is missing or out of range."""
    inp = HelpItemEditInput(
        key=body.key,
        index=body.index,
        data=body.data,
        allowed_keys=tuple(rules.sections.help_allowed_keys),
    )
    try:
        result = run_help_item_edit(inp, repo)
    except Exception:
        logger.exception("Admin PATCH help sections error")
        raise InternalError() from None
    return _saved(result, "message")


@help_router.delete("", response_model=SectionResponse)
def delete_help_item(
    body: ListDeleteRequest,
    _session: SessionIdentity = Depends(require_editor()),
    repo: SQLiteSectionRepo = Depends(get_section_repo),
    rules: Rules = Depends(get_rules),
) -> SectionResponse:
    inp = HelpItemDeleteInput(
        key=body.key,
        index=body.index,
        allowed_keys=tuple(rules.sections.help_allowed_keys),
    )
    try:
        result = run_help_item_delete(inp, repo)
    except Exception:
        logger.exception("Admin DELETE help sections error")
        raise InternalError() from None
    return _saved(result, "message")


# --- Community ---


@community_router.get("")
def get_community_sections(
    _session: SessionIdentity = Depends(require_editor(key="error")),
    repo: SQLiteSectionRepo = Depends(get_section_repo),
) -> dict[str, Any]:
    try:
        result = run_read_namespace(ReadNamespaceInput(COMMUNITY), repo)
    except Exception:
        logger.exception("Admin community GET error")
        raise InternalError(key="error") from None
    return result.as_map()


@community_router.post("", response_model=SectionWriteResponse)
def put_community_section(
    body: SectionPutRequest,
    _session: SessionIdentity = Depends(require_editor(key="error")),
    repo: SQLiteSectionRepo = Depends(get_section_repo),
    rules: Rules = Depends(get_rules),
) -> SectionWriteResponse:
    inp = PutSectionInput(
        namespace=COMMUNITY,
        key=body.key,
        data=body.data,
        allowed_keys=tuple(rules.sections.community_allowed_keys),
    )
    try:
        result = run_put_section(inp, repo)
    except Exception:
        logger.exception("Admin community POST error")
        raise ValidationError("Bad Request", key="error") from None
    return SectionWriteResponse(success=True, section=_saved(result, "error"))


@community_router.patch("", response_model=SectionWriteResponse)
def edit_community_item(
    body: ListEditRequest,
    _session: SessionIdentity = Depends(require_editor(key="error")),
    repo: SQLiteSectionRepo = Depends(get_section_repo),
    rules: Rules = Depends(get_rules),
) -> SectionWriteResponse:
    inp = ListItemEditInput(
        namespace=COMMUNITY,
        key=body.key or "",
        op=body.op,
        index=body.index,
        item=body.item,
        allowed_keys=tuple(rules.sections.community_allowed_keys),
    )
    try:
        result = run_list_item_edit(inp, repo)
    except Exception:
        logger.exception("Admin community PATCH error")
        raise ValidationError("Bad Request", key="error") from None
    return SectionWriteResponse(success=True, section=_saved(result, "error"))


@community_router.delete("", response_model=SectionWriteResponse)
def delete_community_item(
    body: ListDeleteRequest,
    _session: SessionIdentity = Depends(require_editor(key="error")),
    repo: SQLiteSectionRepo = Depends(get_section_repo),
    rules: Rules = Depends(get_rules),
) -> SectionWriteResponse:
    inp = ListItemDeleteInput(
        namespace=COMMUNITY,
        key=body.key or "",
        index=body.index,
        allowed_keys=tuple(rules.sections.community_allowed_keys),
    )
    try:
        result = run_list_item_delete(inp, repo)
    except Exception:
        logger.exception("Admin community DELETE error")
        raise ValidationError("Bad Request", key="error") from None
    return SectionWriteResponse(success=True, section=_saved(result, "error"))
