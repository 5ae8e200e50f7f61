"""
Development pass-through for the realtime backend.

Outside production, `/api/socketio/*` is forwarded to the local backend at
HOSTNAME:BACKEND_PORT so the frontend can talk to a single origin.
"""

from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from abtech.api.deps import Settings, get_settings
from abtech.core.errors import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()

# Connection-level headers are not forwarded.
HOP_BY_HOP = {
    "connection",
    "keep-alive",
    "transfer-encoding",
    "upgrade",
    "host",
    "content-length",
    "content-encoding",
}


def _forward_headers(headers: httpx.Headers | dict[str, str]) -> dict[str, str]:
    return {k: v for k, v in headers.items() if k.lower() not in HOP_BY_HOP}


@router.api_route("/socketio/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
async def proxy_socketio(
    path: str,
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Response:
    if settings.is_production:
        raise NotFoundError()

    url = f"{settings.backend_url}/api/socketio/{path}"
    try:
        async with httpx.AsyncClient(timeout=30.0) as client:
            upstream = await client.request(
                request.method,
                url,
                params=request.query_params,
                headers=_forward_headers(dict(request.headers)),
                content=await request.body(),
            )
    except httpx.HTTPError as e:
        logger.warning("Dev proxy to %s failed: %s", url, e)
        return Response(status_code=502)

    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        headers=_forward_headers(upstream.headers),
    )
