"""Media library component ports."""

from __future__ import annotations

from typing import Any, Protocol


class MediaLibraryPort(Protocol):
    """
    Read-only view of the media CDN.

    Methods raise MediaProviderError when the provider call fails.
    """

    def is_configured(self) -> bool:
        ...

    def get_resource(self, public_id: str) -> dict[str, Any]:
        ...

    def list_resources(self, prefix: str, max_results: int) -> dict[str, Any]:
        ...
