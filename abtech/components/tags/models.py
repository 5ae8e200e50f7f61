"""Tag component models."""

from __future__ import annotations

from dataclasses import dataclass, field

from abtech.core.entities import Tag


@dataclass(frozen=True)
class ListTagsInput:
    pass


@dataclass(frozen=True)
class CreateTagInput:
    name: str | None


@dataclass(frozen=True)
class ValidationError:
    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class ListTagsOutput:
    tags: list[Tag]


@dataclass(frozen=True)
class CreateTagOutput:
    success: bool
    tag: Tag | None = None
    errors: list[ValidationError] = field(default_factory=list)
