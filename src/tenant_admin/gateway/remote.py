"""Reload notifier that talks to a gateway's HTTP control API."""

import logging
from typing import Optional

import httpx

from tenant_admin.common.exceptions import GatewayError
from tenant_admin.gateway.base import GatewayStatus, ReloadNotifier

logger = logging.getLogger(__name__)


class HttpReloadNotifier(ReloadNotifier):
    """Calls ``POST /restart`` and ``GET /health`` on a remote gateway."""

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def restart(self) -> None:
        try:
            async with self._client() as client:
                resp = await client.post("/restart")
                resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Gateway restart via %s failed: %s", self.base_url, e)
            raise GatewayError(f"Gateway restart failed: {e}", cause=e) from e
        logger.info("Gateway at %s restarted", self.base_url)

    async def health(self) -> GatewayStatus:
        try:
            async with self._client() as client:
                resp = await client.get("/health")
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            raise GatewayError(f"Gateway unreachable: {e}", cause=e) from e
        except ValueError as e:
            raise GatewayError("Gateway returned a non-JSON health response", cause=e) from e

        if not isinstance(data, dict):
            raise GatewayError("Gateway returned a malformed health response")
        if "running" in data:
            running = bool(data["running"])
        else:
            running = data.get("status") == "ok"
        return GatewayStatus(
            running=running,
            uptime=data.get("uptime"),
            version=data.get("version"),
        )
