"""
Tests for the referral lookup HTTP client.

Runs the client against a local aiohttp test server.
"""

import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from distributor.services.referral.lookup_client import (
    LookupResult,
    ReferralLookupClient,
    parse_lookup_response,
)
from distributor.utils.exceptions import ReferralLookupError


WALLET = "SysvarRent111111111111111111111111111111111"


async def _get_referrer(request: web.Request) -> web.StreamResponse:
    code = request.match_info["code"]
    if code == "GOOD":
        return web.json_response({"success": True, "referrerWallet": WALLET})
    if code == "NOREF":
        return web.json_response({"success": False, "message": "No referrer"})
    if code == "NOWALLET":
        return web.json_response({"success": True})
    if code == "BROKEN":
        return web.json_response({"success": False}, status=500)
    if code == "NOTJSON":
        return web.Response(text="<html>oops</html>")
    if code == "SLOW":
        await asyncio.sleep(1)
        return web.json_response({"success": False})
    return web.json_response({"success": False, "message": "Not found"}, status=404)


def _make_app() -> web.Application:
    app = web.Application()
    app.router.add_get("/api/whitelist/get-referrer/{code}", _get_referrer)
    return app


class TestReferralLookupClient:
    """Tests for ReferralLookupClient."""

    @pytest.mark.asyncio
    async def test_found(self) -> None:
        async with TestServer(_make_app()) as server:
            async with ReferralLookupClient(str(server.make_url(""))) as client:
                result = await client.lookup("GOOD")

        assert result == LookupResult(success=True, referrer_wallet=WALLET)

    @pytest.mark.asyncio
    async def test_service_reports_no_referrer(self) -> None:
        async with TestServer(_make_app()) as server:
            async with ReferralLookupClient(str(server.make_url(""))) as client:
                result = await client.lookup("NOREF")

        assert result.success is False
        assert result.message == "No referrer"

    @pytest.mark.asyncio
    async def test_404_is_not_found(self) -> None:
        async with TestServer(_make_app()) as server:
            async with ReferralLookupClient(str(server.make_url(""))) as client:
                result = await client.lookup("UNKNOWN")

        assert result.success is False
        assert result.referrer_wallet is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", ["BROKEN", "NOTJSON", "NOWALLET"])
    async def test_bad_responses_raise(self, code: str) -> None:
        async with TestServer(_make_app()) as server:
            async with ReferralLookupClient(str(server.make_url(""))) as client:
                with pytest.raises(ReferralLookupError) as exc_info:
                    await client.lookup(code)

        assert exc_info.value.code == "referral_lookup_failed"

    @pytest.mark.asyncio
    async def test_timeout_raises(self) -> None:
        async with TestServer(_make_app()) as server:
            async with ReferralLookupClient(str(server.make_url("")), timeout=0.1) as client:
                with pytest.raises(ReferralLookupError):
                    await client.lookup("SLOW")

    @pytest.mark.asyncio
    async def test_connection_error_raises(self) -> None:
        async with ReferralLookupClient("http://127.0.0.1:1", timeout=1.0) as client:
            with pytest.raises(ReferralLookupError):
                await client.lookup("GOOD")

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self) -> None:
        client = ReferralLookupClient("http://localhost:3000")

        await client.close()
        await client.close()

    def test_url_for_escapes_code(self) -> None:
        client = ReferralLookupClient("https://ref.example.com/")

        assert client.url_for("SIMO-AB") == (
            "https://ref.example.com/api/whitelist/get-referrer/SIMO-AB"
        )
        assert client.url_for("a/b c") == (
            "https://ref.example.com/api/whitelist/get-referrer/a%2Fb%20c"
        )


class TestParseLookupResponse:
    """Tests for parse_lookup_response."""

    def test_success(self) -> None:
        result = parse_lookup_response({"success": True, "referrerWallet": WALLET})

        assert result.referrer_wallet == WALLET

    def test_failure_with_message(self) -> None:
        result = parse_lookup_response({"success": False, "message": "nope"})

        assert result == LookupResult(success=False, message="nope")

    @pytest.mark.parametrize(
        "data",
        [
            None,
            [],
            "success",
            {},
            {"success": "true"},
            {"success": True},
            {"success": True, "referrerWallet": 123},
        ],
    )
    def test_malformed(self, data) -> None:
        with pytest.raises(ReferralLookupError):
            parse_lookup_response(data)
