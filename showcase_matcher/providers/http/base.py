"""
FILE: showcase_matcher/providers/http/base.py

HTTP client interface (contract).
Transport used by hosted embedding providers. Every failure must surface as
showcase_matcher.core.exceptions.HttpError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class HttpResponse(Generic[T]):
    data: T
    status: int
    status_text: str = ""
    headers: Dict[str, str] = field(default_factory=dict)


class IHttpClient(ABC):
    """Abstract base class for HTTP clients."""

    @abstractmethod
    async def get(
        self,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        raise NotImplementedError

    @abstractmethod
    async def post(
        self,
        url: str,
        data: Any = None,
        *,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        """
        POST `data` as a JSON body.

        Raises:
            HttpError: on non-2xx status or any transport failure
        """
        raise NotImplementedError

    @abstractmethod
    async def put(
        self,
        url: str,
        data: Any = None,
        *,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        raise NotImplementedError

    @abstractmethod
    async def delete(
        self,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        raise NotImplementedError

    async def close(self) -> None:
        """Release pooled connections (no-op by default)."""
        return None
