"""Media library component (CDN lookups)."""

from abtech.components.media.component import run, run_info, run_list
from abtech.components.media.models import (
    ListMediaInput,
    MediaInfoInput,
    MediaOutput,
    MediaProviderError,
    ValidationError,
)
from abtech.components.media.ports import MediaLibraryPort

__all__ = [
    "run",
    "run_info",
    "run_list",
    "ListMediaInput",
    "MediaInfoInput",
    "MediaOutput",
    "MediaProviderError",
    "ValidationError",
    "MediaLibraryPort",
]
