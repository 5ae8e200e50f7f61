"""
Media library component.

Admin-only lookups against the media CDN. Check order: role, provider
configuration, then request parameters.
"""

from __future__ import annotations

import logging

from abtech.components.media.models import (
    ListMediaInput,
    MediaInfoInput,
    MediaOutput,
    MediaProviderError,
    ValidationError,
)
from abtech.components.media.ports import MediaLibraryPort
from abtech.core.entities import SessionIdentity

logger = logging.getLogger(__name__)

FORBIDDEN = ValidationError("FORBIDDEN", "Forbidden")
NOT_CONFIGURED = ValidationError("NOT_CONFIGURED", "Cloudinary not configured on server")


def _precheck(session: SessionIdentity | None, library: MediaLibraryPort) -> MediaOutput | None:
    if session is None or not session.is_admin:
        return MediaOutput(success=False, errors=[FORBIDDEN])
    if not library.is_configured():
        return MediaOutput(success=False, errors=[NOT_CONFIGURED])
    return None


def run_info(inp: MediaInfoInput, library: MediaLibraryPort) -> MediaOutput:
    failed = _precheck(inp.session, library)
    if failed is not None:
        return failed
    if not inp.public_id:
        return MediaOutput(
            success=False,
            errors=[ValidationError("MISSING_ID", "Missing publicId", "publicId")],
        )

    try:
        data = library.get_resource(inp.public_id)
    except MediaProviderError as e:
        logger.warning("Media info for %s failed: %s", inp.public_id, e)
        return MediaOutput(success=False, errors=[ValidationError("PROVIDER", str(e))])
    return MediaOutput(success=True, data=data)


def run_list(inp: ListMediaInput, library: MediaLibraryPort) -> MediaOutput:
    failed = _precheck(inp.session, library)
    if failed is not None:
        return failed

    try:
        data = library.list_resources(inp.prefix or "", inp.max_results)
    except MediaProviderError as e:
        logger.warning("Media list for prefix %r failed: %s", inp.prefix, e)
        return MediaOutput(success=False, errors=[ValidationError("PROVIDER", str(e))])
    return MediaOutput(success=True, data=data)


def run(
    inp: MediaInfoInput | ListMediaInput,
    *,
    library: MediaLibraryPort,
) -> MediaOutput:
    if isinstance(inp, MediaInfoInput):
        return run_info(inp, library)
    elif isinstance(inp, ListMediaInput):
        return run_list(inp, library)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
