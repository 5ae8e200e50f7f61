"""
FAQ list editors.

- /api/admin/pricing/faqs - pricing page FAQs, answers `{ok: true}`
- /api/admin/contact/faqs - contact page FAQs (ADMIN / MODERATOR)

Both store a JSON list and address items by index; errors render under
`error`.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from abtech.adapters.sqlite.sections import SQLiteSectionRepo
from abtech.api.deps import get_section_repo, require_editor
from abtech.api.schemas import ListDeleteRequest, ListEditRequest
from abtech.components.sections import (
    COMMUNITY,
    CONTACT_FAQS_KEY,
    PRICING,
    PRICING_FAQS_KEY,
    ListItemDeleteInput,
    ListItemEditInput,
    PricingFaqDeleteInput,
    PricingFaqEditInput,
    ReadListInput,
    run_list_item_delete,
    run_list_item_edit,
    run_pricing_faq_delete,
    run_pricing_faq_edit,
    run_read_list,
)
from abtech.core.entities import SessionIdentity
from abtech.core.errors import InternalError, ValidationError

logger = logging.getLogger(__name__)

pricing_router = APIRouter()
contact_router = APIRouter()


# --- Pricing ---


@pricing_router.get("")
def get_pricing_faqs(repo: SQLiteSectionRepo = Depends(get_section_repo)) -> dict[str, Any]:
    try:
        result = run_read_list(ReadListInput(PRICING, PRICING_FAQS_KEY), repo)
    except Exception:
        logger.exception("Admin pricing FAQs GET error")
        raise InternalError(key="error") from None
    return {"faqs": result.items}


@pricing_router.patch("")
def edit_pricing_faq(
    body: ListEditRequest,
    repo: SQLiteSectionRepo = Depends(get_section_repo),
) -> dict[str, Any]:
    """`op: "add"` prepends `item`; otherwise `item` replaces `index`."""
    inp = PricingFaqEditInput(op=body.op, index=body.index, item=body.item)
    try:
        result = run_pricing_faq_edit(inp, repo)
    except Exception:
        logger.exception("Admin pricing FAQs PATCH error")
        raise InternalError(key="error") from None
    if not result.success:
        raise ValidationError(result.errors[0].message, key="error")
    return {"ok": True}


@pricing_router.delete("")
def delete_pricing_faq(
    body: ListDeleteRequest,
    repo: SQLiteSectionRepo = Depends(get_section_repo),
) -> dict[str, Any]:
    try:
        result = run_pricing_faq_delete(PricingFaqDeleteInput(index=body.index), repo)
    except Exception:
        logger.exception("Admin pricing FAQs DELETE error")
        raise InternalError(key="error") from None
    if not result.success:
        raise ValidationError(result.errors[0].message, key="error")
    return {"ok": True}


# --- Contact ---


@contact_router.get("")
def get_contact_faqs(
    _session: SessionIdentity = Depends(require_editor(key="error")),
    repo: SQLiteSectionRepo = Depends(get_section_repo),
) -> dict[str, Any]:
    try:
        result = run_read_list(ReadListInput(COMMUNITY, CONTACT_FAQS_KEY), repo)
    except Exception:
        logger.exception("Admin contact FAQs GET error")
        raise InternalError(key="error") from None
    return {"faqs": result.items}


@contact_router.patch("")
def edit_contact_faq(
    body: ListEditRequest,
    _session: SessionIdentity = Depends(require_editor(key="error")),
    repo: SQLiteSectionRepo = Depends(get_section_repo),
) -> dict[str, Any]:
    inp = ListItemEditInput(
        namespace=COMMUNITY,
        key=CONTACT_FAQS_KEY,
        op=body.op,
        index=body.index,
        item=body.item,
    )
    try:
        result = run_list_item_edit(inp, repo)
    except Exception:
        logger.exception("Admin contact FAQs PATCH error")
        raise ValidationError("Bad Request", key="error") from None
    if not result.success:
        raise ValidationError(result.errors[0].message, key="error")
    return {"success": True, "faqs": result.items}


@contact_router.delete("")
def delete_contact_faq(
    body: ListDeleteRequest,
    _session: SessionIdentity = Depends(require_editor(key="error")),
    repo: SQLiteSectionRepo = Depends(get_section_repo),
) -> dict[str, Any]:
    inp = ListItemDeleteInput(namespace=COMMUNITY, key=CONTACT_FAQS_KEY, index=body.index)
    try:
        result = run_list_item_delete(inp, repo)
    except Exception:
        logger.exception("Admin contact FAQs DELETE error")
        raise ValidationError("Bad Request", key="error") from None
    if not result.success:
        raise ValidationError(result.errors[0].message, key="error")
    return {"success": True, "faqs": result.items}
