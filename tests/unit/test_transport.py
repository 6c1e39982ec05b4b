"""Unit tests for the HTTP transport."""
import httpx
import pytest

from parallelclient import ErrorKind
from parallelclient.codec import decode_search_response
from parallelclient.transport import Transport, api_key_headers, bearer_headers


def _transport(handler) -> Transport:
    return Transport(base_url="https://api.parallel.test/v1beta/", transport=httpx.MockTransport(handler))


class TestHeaders:
    """Tests for the header builders."""

    def test_api_key_headers_with_body(self):
        assert api_key_headers("k", "beta-1") == {
            "x-api-key": "k",
            "parallel-beta": "beta-1",
            "Content-Type": "application/json",
        }

    def test_api_key_headers_without_body(self):
        assert "Content-Type" not in api_key_headers("k", "beta-1", with_body=False)

    def test_bearer_headers(self):
        assert bearer_headers("k")["Authorization"] == "Bearer k"


class TestSend:
    """Tests for Transport.send."""

    def test_url_joining(self):
        transport = Transport(base_url="https://api.parallel.test/v1beta/")
        assert transport.url("/search") == "https://api.parallel.test/v1beta/search"
        assert transport.url("tasks/runs") == "https://api.parallel.test/v1beta/tasks/runs"

    @pytest.mark.asyncio
    async def test_success_returns_json(self):
        transport = _transport(lambda request: httpx.Response(200, json={"ok": [1, 2]}))
        result = await transport.send("POST", "/search", {}, {"a": 1})
        assert result.is_ok()
        assert result.value == {"ok": [1, 2]}

    @pytest.mark.asyncio
    async def test_any_2xx_is_success(self):
        transport = _transport(lambda request: httpx.Response(202, json={"run_id": "r"}))
        result = await transport.send("POST", "/tasks/runs", {}, {})
        assert result.is_ok()

    @pytest.mark.asyncio
    async def test_plain_text_error_body_is_kept_verbatim(self):
        transport = _transport(lambda request: httpx.Response(503, text="upstream down\n"))
        result = await transport.send("GET", "/tasks/runs/r", {})

        assert result.is_err()
        assert result.error.message == "API error: 503 Service Unavailable — upstream down\n"
        assert result.error.detail is None

    @pytest.mark.asyncio
    async def test_json_error_body_is_parsed_best_effort(self):
        body = '{"error": {"message": "run not found"}}'
        transport = _transport(
            lambda request: httpx.Response(404, content=body, headers={"content-type": "application/json"})
        )
        result = await transport.send("GET", "/tasks/runs/missing", {})

        assert result.error.kind == ErrorKind.API
        assert result.error.message == f"API error: 404 Not Found — {body}"
        assert result.error.detail == {"error": {"message": "run not found"}}

    @pytest.mark.asyncio
    async def test_timeout_is_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        result = await _transport(handler).send("GET", "/tasks/runs/r", {})

        assert result.is_err()
        assert result.error.kind == ErrorKind.TRANSPORT
        assert "timed out" in result.error.message

    @pytest.mark.asyncio
    async def test_empty_success_body_is_decode_error(self):
        transport = _transport(lambda request: httpx.Response(200, content=b""))
        result = await transport.send("GET", "/tasks/runs/r", {})

        assert result.error.kind == ErrorKind.DECODE
        assert result.error.status_code == 200

    @pytest.mark.asyncio
    async def test_parse_applies_decoder(self):
        transport = _transport(lambda request: httpx.Response(200, json={"search_id": "s-1"}))
        result = await transport.send("POST", "/search", {}, {}, parse=decode_search_response)
        assert result.value.search_id == "s-1"

    @pytest.mark.asyncio
    async def test_parse_shape_error_keeps_status_and_body(self):
        transport = _transport(lambda request: httpx.Response(201, text='"just a string"'))
        result = await transport.send("POST", "/search", {}, {}, parse=decode_search_response)

        assert result.error.kind == ErrorKind.DECODE
        assert result.error.status_code == 201
        assert result.error.body == '"just a string"'
