"""
FILE: showcase_matcher/providers/http/httpx_client.py

httpx-backed HTTP client.

Wraps httpx.AsyncClient and maps every request failure into HttpError:
- non-2xx responses keep status, reason phrase and the decoded body
- network failures keep only the message and the original exception
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from showcase_matcher.core.exceptions import HttpError
from .base import HttpResponse, IHttpClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpxClientConfig:
    base_url: str = ""
    timeout_s: Optional[float] = None
    headers: Dict[str, str] = field(default_factory=dict)


class HttpxClient(IHttpClient):
    def __init__(
        self,
        config: Optional[HttpxClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or HttpxClientConfig()
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_s,
            headers=self.config.headers,
            transport=transport,
        )

    async def get(self, url, *, headers=None, params=None, timeout=None) -> HttpResponse:
        return await self._request("GET", url, headers=headers, params=params, timeout=timeout)

    async def post(self, url, data=None, *, headers=None, params=None, timeout=None) -> HttpResponse:
        return await self._request(
            "POST", url, json=data, headers=headers, params=params, timeout=timeout
        )

    async def put(self, url, data=None, *, headers=None, params=None, timeout=None) -> HttpResponse:
        return await self._request(
            "PUT", url, json=data, headers=headers, params=params, timeout=timeout
        )

    async def delete(self, url, *, headers=None, params=None, timeout=None) -> HttpResponse:
        return await self._request("DELETE", url, headers=headers, params=params, timeout=timeout)

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        kwargs: Dict[str, Any] = {"headers": headers, "params": params}
        if json is not None:
            kwargs["json"] = json
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except Exception as e:
            raise self._map_error(e) from e

        return self._map_response(response)

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    def _map_response(self, response: httpx.Response) -> HttpResponse:
        return HttpResponse(
            data=self._decode_body(response),
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=dict(response.headers),
        )

    def _map_error(self, error: Exception) -> HttpError:
        if isinstance(error, httpx.HTTPStatusError):
            response = error.response
            return HttpError(
                str(error),
                status=response.status_code,
                status_text=response.reason_phrase,
                response=self._decode_body(response),
                cause=error,
            )

        logger.debug("HTTP transport failure: %s", error)
        return HttpError(str(error) or error.__class__.__name__, cause=error)


__all__ = ["HttpxClient", "HttpxClientConfig"]
