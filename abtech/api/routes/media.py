"""
Cloudinary lookups for the admin media picker.

- GET /api/cloudinary/info?publicId=... - one resource
- GET /api/cloudinary/list?prefix=... - resources under a folder prefix
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from abtech.adapters.cloudinary_media import CloudinaryMediaLibrary
from abtech.api.deps import get_media_library, get_rules, get_session
from abtech.components.media import ListMediaInput, MediaInfoInput, MediaOutput, run_info, run_list
from abtech.core.entities import SessionIdentity
from abtech.rules.models import Rules

logger = logging.getLogger(__name__)

router = APIRouter()

_STATUS = {"FORBIDDEN": 403, "MISSING_ID": 400}


def _respond(result: MediaOutput) -> dict[str, Any] | JSONResponse:
    if result.success:
        return {"success": True, "data": result.data}
    error = result.errors[0]
    body: dict[str, Any] = {"error": error.message}
    if error.code != "MISSING_ID":
        body = {"success": False, **body}
    return JSONResponse(body, status_code=_STATUS.get(error.code, 500))


@router.get("/info", response_model=None)
def media_info(
    public_id: str | None = Query(None, alias="publicId"),
    session: SessionIdentity | None = Depends(get_session),
    library: CloudinaryMediaLibrary = Depends(get_media_library),
) -> dict[str, Any] | JSONResponse:
    try:
        result = run_info(MediaInfoInput(public_id=public_id, session=session), library)
    except Exception:
        logger.exception("Cloudinary info route error")
        return JSONResponse({"error": "Internal error"}, status_code=500)
    return _respond(result)


@router.get("/list", response_model=None)
def media_list(
    prefix: str = Query(""),
    session: SessionIdentity | None = Depends(get_session),
    library: CloudinaryMediaLibrary = Depends(get_media_library),
    rules: Rules = Depends(get_rules),
) -> dict[str, Any] | JSONResponse:
    inp = ListMediaInput(session=session, prefix=prefix, max_results=rules.media.list_max_results)
    try:
        result = run_list(inp, library)
    except Exception:
        logger.exception("Cloudinary list route error")
        return JSONResponse({"success": False, "error": "Internal error"}, status_code=500)
    return _respond(result)
