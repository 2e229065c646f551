# supplier_hub/services/downstream.py
"""
Authenticated HTTP access to the downstream platforms (Supplier Portal,
Menu Platform, restaurant main system).

One call per request, no retries. Transport failures surface as
DownstreamUnavailable, non-2xx answers as DownstreamRejected (or
NotFoundError when the caller asks for 404 to be mapped).
"""
import logging
from typing import Any, Dict, Optional

import httpx

from supplier_hub.core.config import Settings
from supplier_hub.core.errors import DownstreamRejected, DownstreamUnavailable, NotFoundError

logger = logging.getLogger(__name__)

SUPPLIER_PORTAL = "Supplier Portal"
MENU_PLATFORM = "Menu Platform"
MAIN_SYSTEM = "Main System"


class DownstreamClient:
    """Thin wrapper around a shared httpx.AsyncClient bound to one platform"""

    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str,
        platform: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
    ):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.platform = platform
        self.token = token
        self.timeout = timeout

    def _headers(self, with_body: bool) -> Dict[str, str]:
        headers = {}
        if with_body:
            headers["Content-Type"] = "application/json"
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        failure_message: Optional[str] = None,
        not_found_message: Optional[str] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        logger.info(f"[Relay] {method} {url} -> {self.platform}")

        try:
            response = await self.http.request(
                method,
                url,
                json=json,
                params=params,
                headers=self._headers(json is not None),
                timeout=self.timeout,
            )
        except httpx.TimeoutException:
            logger.error(f"[Relay] Timeout communicating with {self.platform}: {url}")
            raise DownstreamUnavailable(self.platform)
        except httpx.RequestError as e:
            logger.error(f"[Relay] Error communicating with {self.platform}: {str(e)}")
            raise DownstreamUnavailable(self.platform)

        if response.status_code == 404 and not_found_message:
            raise NotFoundError(not_found_message)

        if not response.is_success:
            body_preview = response.text[:500] if response.text else "(empty)"
            logger.error(
                f"[Relay] {self.platform} answered HTTP {response.status_code} for {method} {path}: {body_preview}"
            )
            raise DownstreamRejected(self.platform, response.status_code, body_preview, failure_message)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            body_preview = response.text[:500]
            logger.warning(f"[Relay] Non-JSON answer from {self.platform}: {body_preview}")
            return {"raw": body_preview}

    async def get(self, path: str, **kwargs) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> Any:
        return await self.request("POST", path, **kwargs)

    async def patch(self, path: str, **kwargs) -> Any:
        return await self.request("PATCH", path, **kwargs)

    async def put(self, path: str, **kwargs) -> Any:
        return await self.request("PUT", path, **kwargs)


def supplier_portal_client(http: httpx.AsyncClient, settings: Settings) -> DownstreamClient:
    return DownstreamClient(
        http,
        settings.SUPPLIER_PORTAL_URL,
        SUPPLIER_PORTAL,
        token=settings.supplier_portal_token,
        timeout=settings.DOWNSTREAM_TIMEOUT_SECONDS,
    )


def menu_platform_client(http: httpx.AsyncClient, settings: Settings) -> DownstreamClient:
    return DownstreamClient(
        http,
        settings.MENU_PLATFORM_URL,
        MENU_PLATFORM,
        token=settings.menu_platform_token,
        timeout=settings.DOWNSTREAM_TIMEOUT_SECONDS,
    )


def main_system_client(http: httpx.AsyncClient, settings: Settings) -> DownstreamClient:
    return DownstreamClient(
        http,
        settings.MAIN_SYSTEM_URL,
        MAIN_SYSTEM,
        timeout=settings.DOWNSTREAM_TIMEOUT_SECONDS,
    )
