"""
Tag component.

Tags are unique by both name and slug. The slug is derived from the name.
"""

from __future__ import annotations

import re

from abtech.components.tags.models import (
    CreateTagInput,
    CreateTagOutput,
    ListTagsInput,
    ListTagsOutput,
    ValidationError,
)
from abtech.components.tags.ports import TagRepoPort
from abtech.core.entities import Tag, new_id, utc_now

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """'Web Dev!' -> 'web-dev'"""
    return _NON_ALNUM.sub("-", name.lower()).strip("-")


def run_list(inp: ListTagsInput, repo: TagRepoPort) -> ListTagsOutput:
    return ListTagsOutput(tags=repo.list_all())


def run_create(inp: CreateTagInput, repo: TagRepoPort) -> CreateTagOutput:
    if not inp.name:
        return CreateTagOutput(
            success=False,
            errors=[ValidationError("MISSING_NAME", "Tag name is required", "name")],
        )

    slug = slugify(inp.name)
    if repo.find_by_name_or_slug(inp.name, slug) is not None:
        return CreateTagOutput(
            success=False,
            errors=[ValidationError("DUPLICATE", "Tag with this name already exists", "name")],
        )

    tag = Tag(id=new_id(), name=inp.name, slug=slug, created_at=utc_now())
    return CreateTagOutput(success=True, tag=repo.save(tag))


def run(
    inp: ListTagsInput | CreateTagInput,
    *,
    repo: TagRepoPort,
) -> ListTagsOutput | CreateTagOutput:
    if isinstance(inp, ListTagsInput):
        return run_list(inp, repo)
    elif isinstance(inp, CreateTagInput):
        return run_create(inp, repo)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
