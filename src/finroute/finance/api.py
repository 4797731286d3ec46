"""Async client for the upstream financial data REST API (FMP)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from finroute.core.errors import UpstreamApiError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://financialmodelingprep.com/stable"


@dataclass(frozen=True, slots=True)
class ApiResponse:
    """Parsed JSON body plus the URL it came from (API key removed)."""

    data: Any
    url: str


class FinancialDataClient:
    """Thin async wrapper over one ``httpx.AsyncClient``.

    Usage::

        async with FinancialDataClient(api_key) as client:
            resp = await client.get("/quote", {"symbol": "AAPL"})
            print(resp.url, resp.data)
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> FinancialDataClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def source_url(self, path: str, params: dict[str, Any] | None = None) -> str:
        """Build the public request URL for *path*; never includes the key."""
        return str(httpx.URL(f"{self._base_url}{path}", params=params or {}))

    async def get(self, path: str, params: dict[str, Any] | None = None) -> ApiResponse:
        """GET *path* with *params* and return the decoded JSON body.

        ``None`` values in *params* are dropped.

        Raises:
            UpstreamApiError: On transport failure, HTTP status >= 400,
                or a body that is not JSON.
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        url = self.source_url(path, query)
        request_params = dict(query)
        if self._api_key:
            request_params["apikey"] = self._api_key

        logger.debug("GET %s", url)
        try:
            response = await self._client.get(path, params=request_params)
        except httpx.HTTPError as e:
            raise UpstreamApiError(f"Request to {path} failed: {e}", url=url) from e

        self._raise_for_status(response, url)

        try:
            data = response.json()
        except ValueError as e:
            msg = f"Response from {path} is not valid JSON"
            raise UpstreamApiError(
                msg, status_code=response.status_code, url=url
            ) from e
        return ApiResponse(data=data, url=url)

    @staticmethod
    def _raise_for_status(response: httpx.Response, url: str) -> None:
        if response.status_code < 400:
            return
        try:
            body = response.json()
            detail = body.get("Error Message") or body.get("message") or response.text
        except (ValueError, AttributeError):
            detail = response.text
        raise UpstreamApiError(
            str(detail) or response.reason_phrase,
            status_code=response.status_code,
            url=url,
        )
