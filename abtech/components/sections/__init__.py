"""Editable site sections (FAQ lists, help and community blocks)."""

from abtech.components.sections.component import (
    as_list,
    coerce_index,
    run,
    run_bulk_put,
    run_help_item_delete,
    run_help_item_edit,
    run_list_item_delete,
    run_list_item_edit,
    run_pricing_faq_delete,
    run_pricing_faq_edit,
    run_put_section,
    run_read_list,
    run_read_namespace,
    strict_index,
)
from abtech.components.sections.models import (
    COMMUNITY,
    COMMUNITY_KEYS,
    CONTACT_FAQS_KEY,
    HELP,
    HELP_KEYS,
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

__all__ = [
    "run",
    "run_read_list",
    "run_read_namespace",
    "run_pricing_faq_edit",
    "run_pricing_faq_delete",
    "run_list_item_edit",
    "run_list_item_delete",
    "run_help_item_edit",
    "run_help_item_delete",
    "run_put_section",
    "run_bulk_put",
    "as_list",
    "coerce_index",
    "strict_index",
    "COMMUNITY",
    "COMMUNITY_KEYS",
    "CONTACT_FAQS_KEY",
    "HELP",
    "HELP_KEYS",
    "PRICING",
    "PRICING_FAQS_KEY",
    "BulkPutInput",
    "BulkPutOutput",
    "EditOutput",
    "HelpItemDeleteInput",
    "HelpItemEditInput",
    "ListItemDeleteInput",
    "ListItemEditInput",
    "PricingFaqDeleteInput",
    "PricingFaqEditInput",
    "PutSectionInput",
    "ReadListInput",
    "ReadListOutput",
    "ReadNamespaceInput",
    "ReadNamespaceOutput",
    "ValidationError",
    "SectionRepoPort",
]
