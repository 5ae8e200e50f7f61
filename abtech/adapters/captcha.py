"""
Cloudflare Turnstile verifier.

Without a secret every check passes; without a client token every check
fails. Provider errors count as a failed check.
"""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

SITEVERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"


class TurnstileVerifier:
    def __init__(
        self,
        secret: str | None,
        *,
        url: str = SITEVERIFY_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.secret = secret
        self.url = url
        self.timeout = timeout
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.secret)

    async def verify(self, token: str | None, remote_ip: str | None = None) -> bool:
        if not self.enabled:
            return True
        if not token:
            return False

        form = {"secret": self.secret, "response": token}
        if remote_ip:
            form["remoteip"] = remote_ip

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, data=form)
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Turnstile verification error: %s", e)
            return False

        success = bool(data.get("success"))
        if not success:
            logger.info("Turnstile rejected token: %s", data.get("error-codes"))
        return success
