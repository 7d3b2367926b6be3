"""Tests for HttpxTransport — HTTP mocked with pytest-httpx."""

from __future__ import annotations

import json

import httpx
import pytest
from pytest_httpx import HTTPXMock

from bch_consumer import BchClient, HttpxTransport, Transport, TransportError

BASE_URL = "http://localhost:5005"


class TestProtocol:
    def test_httpx_transport_satisfies_protocol(self) -> None:
        assert isinstance(HttpxTransport(), Transport)


class TestPostJson:
    @pytest.mark.asyncio
    async def test_returns_decoded_body(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/bch/balance",
            json={"success": True, "balances": []},
        )
        result = await HttpxTransport().post_json(f"{BASE_URL}/bch/balance", {"addresses": ["a"]})
        assert result == {"success": True, "balances": []}

    @pytest.mark.asyncio
    async def test_sends_json_body_and_headers(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=f"{BASE_URL}/bch/utxos", json=[])
        await HttpxTransport().post_json(f"{BASE_URL}/bch/utxos", {"address": "a"})

        requests = httpx_mock.get_requests()
        assert len(requests) == 1
        assert json.loads(requests[0].content) == {"address": "a"}
        assert requests[0].headers["Content-Type"] == "application/json"
        assert "Authorization" not in requests[0].headers

    @pytest.mark.asyncio
    async def test_custom_headers(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=f"{BASE_URL}/x", json={})
        await HttpxTransport(headers={"X-Trace": "1"}).post_json(f"{BASE_URL}/x", {})
        assert httpx_mock.get_requests()[0].headers["X-Trace"] == "1"


class TestGetJson:
    @pytest.mark.asyncio
    async def test_returns_decoded_body(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="GET", url=f"{BASE_URL}/price/usd", json={"usd": 300.0})
        assert await HttpxTransport().get_json(f"{BASE_URL}/price/usd") == {"usd": 300.0}

    @pytest.mark.asyncio
    async def test_no_body(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="GET", url=f"{BASE_URL}/price/usd", json={"usd": 1})
        await HttpxTransport().get_json(f"{BASE_URL}/price/usd")
        assert httpx_mock.get_requests()[0].content == b""


class TestErrors:
    @pytest.mark.asyncio
    async def test_http_error_status(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=f"{BASE_URL}/bch/broadcast", status_code=500)
        with pytest.raises(TransportError) as info:
            await HttpxTransport().post_json(f"{BASE_URL}/bch/broadcast", {"hex": "00"})
        assert info.value.error_code == "HTTP_ERROR"
        assert info.value.details["status_code"] == 500

    @pytest.mark.asyncio
    async def test_timeout(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"))
        with pytest.raises(TransportError) as info:
            await HttpxTransport(timeout_s=1.0).get_json(f"{BASE_URL}/price/usd")
        assert info.value.error_code == "TIMEOUT"
        assert isinstance(info.value.__cause__, httpx.ReadTimeout)

    @pytest.mark.asyncio
    async def test_connection_failed(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_exception(httpx.ConnectError("refused"))
        with pytest.raises(TransportError) as info:
            await HttpxTransport().post_json(f"{BASE_URL}/bch/balance", {})
        assert info.value.error_code == "CONNECTION_FAILED"

    @pytest.mark.asyncio
    async def test_invalid_json(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="GET", url=f"{BASE_URL}/price/usd", text="<html>oops</html>")
        with pytest.raises(TransportError) as info:
            await HttpxTransport().get_json(f"{BASE_URL}/price/usd")
        assert info.value.error_code == "INVALID_JSON"
        assert "oops" in info.value.details["body_preview"]


class TestClientOverHttpx:
    @pytest.mark.asyncio
    async def test_rejected_broadcast_over_http(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/bch/broadcast",
            json={"success": False, "endpoint": "broadcast"},
        )
        client = BchClient(BASE_URL)
        result = await client.send_tx("0100")
        assert result == {"success": False, "endpoint": "broadcast"}

    @pytest.mark.asyncio
    async def test_gateway_failure_reaches_caller(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=f"{BASE_URL}/bch/txData", status_code=503)
        client = BchClient(BASE_URL)
        with pytest.raises(TransportError, match="HTTP 503"):
            await client.get_tx_data(["id1"])


class TestNonSuccessStatus:
    @pytest.mark.asyncio
    async def test_redirect_is_an_error(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/price/usd",
            status_code=302,
            json={"usd": 1.0},
            headers={"Location": "http://elsewhere/price/usd"},
        )
        with pytest.raises(TransportError) as info:
            await BchClient(BASE_URL).get_usd()
        assert info.value.error_code == "HTTP_ERROR"
        assert info.value.details["status_code"] == 302

    @pytest.mark.asyncio
    async def test_accepted_202_is_success(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            method="POST", url=f"{BASE_URL}/bch/broadcast", status_code=202, json={"success": True}
        )
        assert await BchClient(BASE_URL).send_tx("00") == {"success": True}


class TestUndecodableBody:
    @pytest.mark.asyncio
    async def test_non_utf8_body_is_invalid_json(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            method="POST", url=f"{BASE_URL}/bch/balance", content=b"\x80\x81\x82\x83\x84"
        )
        with pytest.raises(TransportError) as info:
            await HttpxTransport().post_json(f"{BASE_URL}/bch/balance", {"addresses": ["a"]})
        assert info.value.error_code == "INVALID_JSON"
        assert isinstance(info.value.details["body_preview"], str)

    @pytest.mark.asyncio
    async def test_non_utf8_error_body_preview(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            method="GET", url=f"{BASE_URL}/price/usd", status_code=500, content=b"\xff\xfe"
        )
        with pytest.raises(TransportError) as info:
            await HttpxTransport().get_json(f"{BASE_URL}/price/usd")
        assert info.value.error_code == "HTTP_ERROR"
        assert info.value.details["body_preview"] == "��"
