"""
Admin page guard.

Page requests under the protected prefix need a session with the admin role;
everyone else is redirected to the sign-in page with the original path in
`redirect`. API routes under /api do their own role checks.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from urllib.parse import quote

from fastapi import Request
from starlette.responses import RedirectResponse, Response

from abtech.api.deps import get_rules, get_settings, read_session

logger = logging.getLogger(__name__)


def is_protected(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def signin_redirect_url(signin_path: str, original_path: str) -> str:
    return f"{signin_path}?redirect={quote(original_path, safe='')}"


async def admin_guard(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    rules = get_rules()
    path = request.url.path
    if not is_protected(path, rules.admin.protected_prefix):
        return await call_next(request)

    session = read_session(request, get_settings(), rules)
    if session is None or session.role != rules.admin.admin_role:
        logger.info("Redirecting unauthenticated admin request for %s", path)
        return RedirectResponse(
            signin_redirect_url(rules.admin.signin_path, path),
            status_code=307,
        )
    return await call_next(request)
