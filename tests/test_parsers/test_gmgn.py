"""Tests for GMGN holder analytics client."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.parsers.gmgn.client import CIRCUIT_BREAKER_THRESHOLD, MAX_RETRIES, GmgnClient
from src.parsers.gmgn.exceptions import (
    CloudflareBlockedError,
    GmgnApiError,
    GmgnRateLimitError,
)


def _response(status_code: int, payload: object = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json = MagicMock(return_value=payload)
    return resp


@pytest.fixture
def gmgn():
    """Client with the TLS session and user-agent pool mocked out."""
    with (
        patch("src.parsers.gmgn.client.tls_client.Session") as session_cls,
        patch("src.parsers.gmgn.client.UserAgent"),
        patch("src.parsers.gmgn.client.asyncio.sleep", new=AsyncMock()),
    ):
        client = GmgnClient(max_rps=1000)
        yield client, session_cls.return_value


class TestRequests:
    @pytest.mark.asyncio
    async def test_holder_stat_returns_envelope(self, gmgn, holder_stat_doc) -> None:
        client, session = gmgn
        session.get.return_value = _response(200, holder_stat_doc)

        doc = await client.get_holder_stat("Mint111")

        assert doc == holder_stat_doc
        url = session.get.call_args.args[0]
        assert url == "https://gmgn.ai/vas/api/v1/token_holder_stat/sol/Mint111"

    @pytest.mark.asyncio
    async def test_token_holders_params(self, gmgn, token_holders_doc) -> None:
        client, session = gmgn
        session.get.return_value = _response(200, token_holders_doc)

        doc = await client.get_token_holders("Mint111", limit=20)

        assert doc == token_holders_doc
        call = session.get.call_args
        assert call.args[0] == "https://gmgn.ai/vas/api/v1/token_holders/sol/Mint111"
        assert call.kwargs["params"] == {
            "limit": 20,
            "orderby": "amount_percentage",
            "direction": "desc",
        }

    @pytest.mark.asyncio
    async def test_error_envelope_not_raised(self, gmgn) -> None:
        """Envelope check belongs to the caller."""
        client, session = gmgn
        session.get.return_value = _response(200, {"code": 40001, "msg": "not found"})

        doc = await client.get_holder_stat("Mint111")
        assert doc["code"] == 40001


class TestErrors:
    @pytest.mark.asyncio
    async def test_rate_limited(self, gmgn) -> None:
        client, session = gmgn
        session.get.return_value = _response(429)
        with pytest.raises(GmgnRateLimitError):
            await client.get_holder_stat("Mint111")

    @pytest.mark.asyncio
    async def test_http_error_carries_status(self, gmgn) -> None:
        client, session = gmgn
        session.get.return_value = _response(500)
        with pytest.raises(GmgnApiError) as exc_info:
            await client.get_holder_stat("Mint111")
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_invalid_json(self, gmgn) -> None:
        client, session = gmgn
        resp = _response(200)
        resp.json.side_effect = ValueError("not json")
        session.get.return_value = resp
        with pytest.raises(GmgnApiError):
            await client.get_token_holders("Mint111")

    @pytest.mark.asyncio
    async def test_transport_failure_retried(self, gmgn, holder_stat_doc) -> None:
        client, session = gmgn
        session.get.side_effect = [ConnectionError("reset"), _response(200, holder_stat_doc)]

        assert await client.get_holder_stat("Mint111") == holder_stat_doc
        assert session.get.call_count == 2

    @pytest.mark.asyncio
    async def test_transport_failure_exhausted(self, gmgn) -> None:
        client, session = gmgn
        session.get.side_effect = ConnectionError("reset")
        with pytest.raises(GmgnApiError):
            await client.get_holder_stat("Mint111")
        assert session.get.call_count == MAX_RETRIES


class TestCircuitBreaker:
    @pytest.mark.asyncio
    async def test_repeated_403_raises(self, gmgn) -> None:
        client, session = gmgn
        session.get.return_value = _response(403)
        with pytest.raises(CloudflareBlockedError):
            await client.get_holder_stat("Mint111")
        assert session.get.call_count == MAX_RETRIES

    @pytest.mark.asyncio
    async def test_breaker_opens_and_fails_fast(self, gmgn) -> None:
        client, session = gmgn
        session.get.return_value = _response(403)

        for _ in range(CIRCUIT_BREAKER_THRESHOLD):
            try:
                await client.get_holder_stat("Mint111")
            except CloudflareBlockedError:
                pass
        calls_before = session.get.call_count

        with pytest.raises(CloudflareBlockedError, match="Circuit breaker open"):
            await client.get_holder_stat("Mint111")
        assert session.get.call_count == calls_before


@pytest.mark.asyncio
async def test_close_swallows_session_errors(gmgn) -> None:
    client, session = gmgn
    session.close.side_effect = RuntimeError("already closed")
    await client.close()
