"""GiteaClient: authenticated JSON calls against the Gitea REST API."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from gitea_mcp.gitea.errors import APIError, RequestError, ResponseDecodeError
from gitea_mcp.utils.telemetry import (
    ATTR_HTTP_METHOD,
    ATTR_HTTP_PATH,
    ATTR_HTTP_STATUS,
    get_tracer,
)

API_PREFIX = "/api/v1"

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class GiteaClient:
    """Thin async wrapper over the Gitea REST API.

    Every path is relative to the API root (``<base_url>/api/v1``). Calls
    return the decoded JSON body, or ``None`` for bodiless responses, and
    raise a :class:`~gitea_mcp.gitea.errors.GiteaError` on failure.

    Usage::

        async with GiteaClient("https://gitea.example.com", token) as client:
            labels = await client.get("/repos/acme/widgets/labels", {"limit": "10"})
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def api_root(self) -> str:
        return self._base_url + API_PREFIX

    async def __aenter__(self) -> GiteaClient:
        self._client = httpx.AsyncClient(
            base_url=self.api_root,
            headers={
                "Authorization": f"Bearer {self._token}",
                "Accept": "application/json",
            },
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "GiteaClient must be used as an async context manager"
            raise RuntimeError(msg)
        return self._client

    async def get(self, path: str, query: dict[str, str] | None = None) -> Any:
        """GET *path* with optional query parameters."""
        return await self._request("GET", path, query=query)

    async def post(self, path: str, body: Any = None) -> Any:
        """POST *body* as JSON to *path*."""
        return await self._request("POST", path, body=body)

    async def patch(self, path: str, body: Any = None) -> Any:
        """PATCH *path* with *body* as JSON."""
        return await self._request("PATCH", path, body=body)

    async def delete(self, path: str) -> None:
        """DELETE *path*; any response body is discarded."""
        await self._request("DELETE", path)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        query: dict[str, str] | None = None,
        body: Any = None,
    ) -> Any:
        http = self._http()
        with _tracer.start_as_current_span("gitea_mcp.http.request") as span:
            span.set_attribute(ATTR_HTTP_METHOD, method)
            span.set_attribute(ATTR_HTTP_PATH, path)
            logger.debug("%s %s query=%s", method, path, query)

            try:
                response = await http.request(
                    method,
                    path,
                    params=query or None,
                    json=body,
                )
            except httpx.HTTPError as exc:
                raise RequestError(method, path, str(exc)) from exc

            span.set_attribute(ATTR_HTTP_STATUS, response.status_code)
            if response.status_code >= 400:
                logger.debug("%s %s failed with %d", method, path, response.status_code)
                raise APIError(response.status_code, response.text)

            if response.status_code == httpx.codes.NO_CONTENT or not response.content:
                return None

            try:
                return response.json()
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                raise ResponseDecodeError(str(exc)) from exc
