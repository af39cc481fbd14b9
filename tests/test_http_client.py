"""Tests - httpx-backed HTTP client."""

import httpx
import pytest

from showcase_matcher.core.exceptions import HttpError
from showcase_matcher.providers.http.httpx_client import HttpxClient, HttpxClientConfig


def make_client(handler) -> HttpxClient:
    return HttpxClient(HttpxClientConfig(base_url="https://api.test"), transport=httpx.MockTransport(handler))


class TestHttpxClient:
    @pytest.mark.asyncio
    async def test_post_sends_json_and_returns_response(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = request.content
            return httpx.Response(200, json={"ok": True})

        client = make_client(handler)
        response = await client.post("/things", {"a": 1}, headers={"Authorization": "Bearer k"})

        assert response.status == 200
        assert response.status_text == "OK"
        assert response.data == {"ok": True}
        assert seen["method"] == "POST"
        assert seen["auth"] == "Bearer k"
        assert b'"a"' in seen["body"]
        await client.close()

    @pytest.mark.asyncio
    async def test_get_passes_query_params(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"q": request.url.params.get("q")})

        client = make_client(handler)
        response = await client.get("/search", params={"q": "zk"})

        assert response.data == {"q": "zk"}
        await client.close()

    @pytest.mark.asyncio
    async def test_non_2xx_becomes_http_error_with_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, json={"error": "slow down"})

        client = make_client(handler)
        with pytest.raises(HttpError) as exc_info:
            await client.post("/things", {})

        err = exc_info.value
        assert err.status == 429
        assert err.has_status(429)
        assert err.is_client_error()
        assert not err.is_server_error()
        assert err.response == {"error": "slow down"}
        assert isinstance(err.cause, httpx.HTTPStatusError)
        await client.close()

    @pytest.mark.asyncio
    async def test_text_body_is_kept_as_string(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="maintenance")

        client = make_client(handler)
        with pytest.raises(HttpError) as exc_info:
            await client.delete("/things/1")

        assert exc_info.value.is_server_error()
        assert exc_info.value.response == "maintenance"
        await client.close()

    @pytest.mark.asyncio
    async def test_network_failure_has_no_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        client = make_client(handler)
        with pytest.raises(HttpError) as exc_info:
            await client.put("/things/1", {"a": 2})

        err = exc_info.value
        assert err.status is None
        assert "Connection refused" in err.message
        assert isinstance(err.cause, httpx.ConnectError)
        await client.close()
