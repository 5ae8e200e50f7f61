"""
Section component.

Index-based editing of list-valued sections. Each admin surface keeps its own
rules for bad indexes:

- pricing FAQs: add prepends; replace/delete need 0 <= index < len
- contact FAQs and community lists: add or missing index appends; replace
  accepts index 0 on an empty list
- help sections: an out-of-range or missing index appends

Edits are read-modify-write on the whole list; concurrent edits to the same
section keep the last write.
"""

from __future__ import annotations

from typing import Any

from abtech.components.sections.models import (
    HELP,
    PRICING,
    PRICING_FAQS_KEY,
    BulkPutInput,
    BulkPutOutput,
    EditOutput,
    HelpItemDeleteInput,
    HelpItemEditInput,
    ListItemDeleteInput,
    ListItemEditInput,
    PricingFaqDeleteInput,
    PricingFaqEditInput,
    PutSectionInput,
    ReadListInput,
    ReadListOutput,
    ReadNamespaceInput,
    ReadNamespaceOutput,
    ValidationError,
)
from abtech.components.sections.ports import SectionRepoPort
from abtech.core.entities import SiteSection, utc_now


INVALID_KEY = ValidationError("INVALID_KEY", "Invalid key", "key")
INVALID_INDEX = ValidationError("INVALID_INDEX", "Invalid index", "index")
OUT_OF_RANGE = ValidationError("OUT_OF_RANGE", "Index out of range", "index")


# --- Pure Functions ---


def strict_index(value: Any) -> int | None:
    """Only real integers count as an index."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def coerce_index(value: Any) -> int | None:
    """
    Lenient index parsing for form posts: ints, integral floats and numeric
    strings. None when the value is not a whole number.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def as_list(section: SiteSection | None) -> list[Any]:
    if section is None or not isinstance(section.data, list):
        return []
    return list(section.data)


def _save(repo: SectionRepoPort, namespace: str, key: str, data: Any) -> SiteSection:
    return repo.upsert(SiteSection(namespace=namespace, key=key, data=data, updated_at=utc_now()))


def _key_allowed(key: str | None, allowed: tuple[str, ...] | None) -> bool:
    if not key:
        return False
    return allowed is None or key in allowed


# --- Run Handlers ---


def run_read_list(inp: ReadListInput, repo: SectionRepoPort) -> ReadListOutput:
    return ReadListOutput(items=as_list(repo.get(inp.namespace, inp.key)))


def run_read_namespace(inp: ReadNamespaceInput, repo: SectionRepoPort) -> ReadNamespaceOutput:
    return ReadNamespaceOutput(sections=repo.list_namespace(inp.namespace))


def run_pricing_faq_edit(inp: PricingFaqEditInput, repo: SectionRepoPort) -> EditOutput:
    faqs = as_list(repo.get(PRICING, PRICING_FAQS_KEY))

    if inp.op == "add":
        item = inp.item if isinstance(inp.item, dict) else {}
        if not item.get("question") or not item.get("answer"):
            return EditOutput(
                success=False,
                errors=[
                    ValidationError("MISSING_FIELDS", "question and answer are required", "item")
                ],
            )
        saved = _save(repo, PRICING, PRICING_FAQS_KEY, [item, *faqs])
        return EditOutput(success=True, section=saved)

    index = strict_index(inp.index)
    if index is None or index < 0 or index >= len(faqs):
        return EditOutput(
            success=False,
            errors=[ValidationError("INVALID_INDEX", "invalid index", "index")],
        )
    faqs[index] = inp.item
    return EditOutput(success=True, section=_save(repo, PRICING, PRICING_FAQS_KEY, faqs))


def run_pricing_faq_delete(inp: PricingFaqDeleteInput, repo: SectionRepoPort) -> EditOutput:
    faqs = as_list(repo.get(PRICING, PRICING_FAQS_KEY))
    index = strict_index(inp.index)
    if index is None or index < 0 or index >= len(faqs):
        return EditOutput(
            success=False,
            errors=[ValidationError("INVALID_INDEX", "invalid index", "index")],
        )
    del faqs[index]
    return EditOutput(success=True, section=_save(repo, PRICING, PRICING_FAQS_KEY, faqs))


def run_list_item_edit(inp: ListItemEditInput, repo: SectionRepoPort) -> EditOutput:
    if not _key_allowed(inp.key, inp.allowed_keys):
        return EditOutput(success=False, errors=[INVALID_KEY])

    items = as_list(repo.get(inp.namespace, inp.key))

    if inp.op == "add" or inp.index is None:
        items.append(inp.item)
    else:
        index = coerce_index(inp.index)
        # Index 0 is accepted on an empty list and fills the first slot.
        if index is None or index < 0 or index >= max(1, len(items)):
            return EditOutput(success=False, errors=[INVALID_INDEX])
        if index == len(items):
            items.append(inp.item)
        else:
            items[index] = inp.item

    return EditOutput(success=True, section=_save(repo, inp.namespace, inp.key, items))


def run_list_item_delete(inp: ListItemDeleteInput, repo: SectionRepoPort) -> EditOutput:
    if not _key_allowed(inp.key, inp.allowed_keys):
        return EditOutput(success=False, errors=[INVALID_KEY])

    index = coerce_index(inp.index)
    if index is None or index < 0:
        return EditOutput(success=False, errors=[INVALID_INDEX])

    items = as_list(repo.get(inp.namespace, inp.key))
    if index >= len(items):
        return EditOutput(success=False, errors=[OUT_OF_RANGE])
    del items[index]

    return EditOutput(success=True, section=_save(repo, inp.namespace, inp.key, items))


def run_help_item_edit(inp: HelpItemEditInput, repo: SectionRepoPort) -> EditOutput:
    if not _key_allowed(inp.key, inp.allowed_keys):
        return EditOutput(success=False, errors=[INVALID_KEY])
    key = str(inp.key)

    items = as_list(repo.get(HELP, key))
    index = strict_index(inp.index)
    if index is None or index < 0 or index >= len(items):
        items.append(inp.data)
    else:
        items[index] = inp.data

    return EditOutput(success=True, section=_save(repo, HELP, key, items))


def run_help_item_delete(inp: HelpItemDeleteInput, repo: SectionRepoPort) -> EditOutput:
    index = strict_index(inp.index)
    if not _key_allowed(inp.key, inp.allowed_keys) or index is None:
        return EditOutput(
            success=False,
            errors=[ValidationError("INVALID_REQUEST", "Invalid request")],
        )
    key = str(inp.key)

    items = as_list(repo.get(HELP, key))
    if index < 0 or index >= len(items):
        return EditOutput(success=False, errors=[OUT_OF_RANGE])
    del items[index]

    return EditOutput(success=True, section=_save(repo, HELP, key, items))


def run_put_section(inp: PutSectionInput, repo: SectionRepoPort) -> EditOutput:
    if not _key_allowed(inp.key, inp.allowed_keys):
        return EditOutput(success=False, errors=[INVALID_KEY])
    return EditOutput(success=True, section=_save(repo, inp.namespace, str(inp.key), inp.data))


def run_bulk_put(inp: BulkPutInput, repo: SectionRepoPort) -> BulkPutOutput:
    saved = []
    for item in inp.items:
        key = item.get("key") if isinstance(item, dict) else None
        if key not in inp.allowed_keys:
            continue
        data = item.get("data")
        saved.append(_save(repo, inp.namespace, key, data if data is not None else []))
    return BulkPutOutput(sections=saved)


def run(inp: Any, *, repo: SectionRepoPort) -> Any:
    """Component entry point."""
    handlers = {
        ReadListInput: run_read_list,
        ReadNamespaceInput: run_read_namespace,
        PricingFaqEditInput: run_pricing_faq_edit,
        PricingFaqDeleteInput: run_pricing_faq_delete,
        ListItemEditInput: run_list_item_edit,
        ListItemDeleteInput: run_list_item_delete,
        HelpItemEditInput: run_help_item_edit,
        HelpItemDeleteInput: run_help_item_delete,
        PutSectionInput: run_put_section,
        BulkPutInput: run_bulk_put,
    }
    handler = handlers.get(type(inp))
    if handler is None:
        raise ValueError(f"Unknown input type: {type(inp)}")
    return handler(inp, repo)
