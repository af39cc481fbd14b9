"""HTTP transport providers."""

from .base import HttpResponse, IHttpClient
from .httpx_client import HttpxClient, HttpxClientConfig

__all__ = ["HttpResponse", "IHttpClient", "HttpxClient", "HttpxClientConfig"]
