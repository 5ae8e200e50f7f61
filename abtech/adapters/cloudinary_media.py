"""
Cloudinary media library adapter.

Configures the SDK lazily on first use so env vars loaded after import still
apply.
"""

from __future__ import annotations

from typing import Any

import cloudinary
import cloudinary.api
from cloudinary.exceptions import Error as CloudinaryError

from abtech.components.media import MediaProviderError


class CloudinaryMediaLibrary:
    """Implements MediaLibraryPort with the Cloudinary admin API."""

    def __init__(
        self,
        cloud_name: str | None,
        api_key: str | None,
        api_secret: str | None,
    ) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self._configured = False

    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def _ensure_configured(self) -> None:
        if self._configured:
            return
        cloudinary.config(
            cloud_name=self.cloud_name,
            api_key=self.api_key,
            api_secret=self.api_secret,
            secure=True,
        )
        self._configured = True

    def get_resource(self, public_id: str) -> dict[str, Any]:
        self._ensure_configured()
        try:
            return dict(cloudinary.api.resource(public_id))
        except CloudinaryError as e:
            raise MediaProviderError(str(e)) from e

    def list_resources(self, prefix: str, max_results: int) -> dict[str, Any]:
        self._ensure_configured()
        options: dict[str, Any] = {"type": "upload", "max_results": max_results}
        if prefix:
            options["prefix"] = prefix
        try:
            return dict(cloudinary.api.resources(**options))
        except CloudinaryError as e:
            raise MediaProviderError(str(e)) from e
