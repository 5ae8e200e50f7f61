"""Tag component."""

from abtech.components.tags.component import run, run_create, run_list, slugify
from abtech.components.tags.models import (
    CreateTagInput,
    CreateTagOutput,
    ListTagsInput,
    ListTagsOutput,
    ValidationError,
)
from abtech.components.tags.ports import TagRepoPort

__all__ = [
    "run",
    "run_create",
    "run_list",
    "slugify",
    "CreateTagInput",
    "CreateTagOutput",
    "ListTagsInput",
    "ListTagsOutput",
    "ValidationError",
    "TagRepoPort",
]
