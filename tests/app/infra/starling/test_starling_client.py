"""Testes do StarlingClient com httpx.MockTransport."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from app.domain.feed_item import Money
from app.infra.starling import StarlingApiError, StarlingClient, build_http_client
from config.settings import StarlingSettings

API_BASE = "https://api.starlingbank.com/api/v2"
ACCOUNT_UID = "account-uid-0001"
GOAL_UID = "goal-uid-0001"


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> StarlingClient:
    http_client = httpx.AsyncClient(base_url=API_BASE, transport=httpx.MockTransport(handler))
    return StarlingClient(http_client)


class TestGetEffectiveBalance:
    """GET /accounts/{accountUid}/balance."""

    async def test_returns_effective_balance(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "clearedBalance": {"currency": "GBP", "minorUnits": 100},
                    "effectiveBalance": {"currency": "GBP", "minorUnits": 275412},
                },
            )

        balance = await _client(handler).get_effective_balance(ACCOUNT_UID)

        assert balance == Money(minor_units=275412, currency="GBP")
        assert seen[0].method == "GET"
        assert seen[0].url.path == f"/api/v2/accounts/{ACCOUNT_UID}/balance"

    async def test_negative_balance_is_accepted(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, json={"effectiveBalance": {"currency": "GBP", "minorUnits": -5000}}
            )

        balance = await _client(handler).get_effective_balance(ACCOUNT_UID)

        assert balance.minor_units == -5000

    async def test_http_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, text="forbidden")

        with pytest.raises(StarlingApiError) as exc_info:
            await _client(handler).get_effective_balance(ACCOUNT_UID)

        assert exc_info.value.status_code == 403
        assert exc_info.value.response_text == "forbidden"

    async def test_malformed_body_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"unexpected": True})

        with pytest.raises(StarlingApiError, match="balance_response_invalid"):
            await _client(handler).get_effective_balance(ACCOUNT_UID)

    async def test_timeout_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timeout", request=request)

        with pytest.raises(StarlingApiError, match="starling_timeout"):
            await _client(handler).get_effective_balance(ACCOUNT_UID)

    async def test_connection_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(StarlingApiError, match="starling_connection_error"):
            await _client(handler).get_effective_balance(ACCOUNT_UID)


class TestTransferToSavingsGoal:
    """PUT /account/{accountUid}/savings-goals/{goalUid}/add-money/{transferUid}."""

    async def test_sends_amount_and_returns_transfer_uid(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"transferUid": "tx-123", "success": True})

        transfer_uid = await _client(handler).transfer_to_savings_goal(
            ACCOUNT_UID,
            GOAL_UID,
            Money(minor_units=25412, currency="GBP"),
        )

        assert transfer_uid == "tx-123"
        request = seen[0]
        assert request.method == "PUT"
        prefix = f"/api/v2/account/{ACCOUNT_UID}/savings-goals/{GOAL_UID}/add-money/"
        assert request.url.path.startswith(prefix)
        assert len(request.url.path.removeprefix(prefix)) == 36  # uuid4
        assert json.loads(request.content) == {
            "amount": {"currency": "GBP", "minorUnits": 25412}
        }

    async def test_each_transfer_uses_new_uid(self) -> None:
        paths: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(200, json={"transferUid": "tx", "success": True})

        client = _client(handler)
        amount = Money(minor_units=1, currency="GBP")
        await client.transfer_to_savings_goal(ACCOUNT_UID, GOAL_UID, amount)
        await client.transfer_to_savings_goal(ACCOUNT_UID, GOAL_UID, amount)

        assert paths[0] != paths[1]

    async def test_success_false_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"transferUid": "tx", "success": False})

        with pytest.raises(StarlingApiError, match="transfer_rejected"):
            await _client(handler).transfer_to_savings_goal(
                ACCOUNT_UID, GOAL_UID, Money(minor_units=1, currency="GBP")
            )

    async def test_server_error_is_not_retried(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(500, text="boom")

        with pytest.raises(StarlingApiError, match="starling_http_500"):
            await _client(handler).transfer_to_savings_goal(
                ACCOUNT_UID, GOAL_UID, Money(minor_units=1, currency="GBP")
            )
        assert calls == 1


async def test_build_http_client_sets_auth_and_base_url() -> None:
    settings = StarlingSettings(access_token="token-abc", account_uid=ACCOUNT_UID)

    client = build_http_client(settings)
    try:
        assert str(client.base_url).rstrip("/") == API_BASE
        assert client.headers["Authorization"] == "Bearer token-abc"
        assert client.timeout.read == settings.request_timeout_seconds
    finally:
        await client.aclose()
