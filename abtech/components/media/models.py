"""Media library component models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from abtech.core.entities import SessionIdentity


@dataclass(frozen=True)
class MediaInfoInput:
    public_id: str | None
    session: SessionIdentity | None


@dataclass(frozen=True)
class ListMediaInput:
    session: SessionIdentity | None
    prefix: str = ""
    max_results: int = 100


@dataclass(frozen=True)
class ValidationError:
    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class MediaOutput:
    success: bool
    data: Any = None
    errors: list[ValidationError] = field(default_factory=list)


class MediaProviderError(Exception):
    """The media provider rejected or failed a request."""
