"""Cliente assíncrono da Starling Bank API v2.

Responsabilidades:
- Ler o saldo efetivo da conta
- Mover dinheiro da conta para um savings goal

Sem retry interno: cada chamada é feita uma única vez e qualquer falha vira
StarlingApiError. O `httpx.AsyncClient` é injetado (testes usam
httpx.MockTransport); o timeout vem do próprio client.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from app.domain.feed_item import Money
from app.infra.starling.errors import StarlingApiError
from app.infra.starling.models import BalanceResponse, TransferResponse
from config.logging import mask_identifier

if TYPE_CHECKING:
    from config.settings import StarlingSettings

logger = logging.getLogger(__name__)

USER_AGENT = "starling-sweep"


def build_http_client(settings: StarlingSettings) -> httpx.AsyncClient:
    """Cria httpx.AsyncClient com base URL, Bearer token e timeout."""
    return httpx.AsyncClient(
        base_url=settings.api_endpoint,
        headers={
            "Authorization": f"Bearer {settings.access_token}",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        },
        timeout=settings.request_timeout_seconds,
    )


class StarlingClient:
    """Cliente mínimo da Starling API (implementa BankingClientProtocol)."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    async def get_effective_balance(self, account_uid: str) -> Money:
        """Retorna o saldo efetivo (inclui a transação recém-recebida).

        Raises:
            StarlingApiError: Em falha HTTP, rede ou resposta malformada.
        """
        response = await self._request("GET", f"/accounts/{account_uid}/balance")
        try:
            balance = BalanceResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise StarlingApiError(
                "balance_response_invalid",
                status_code=response.status_code,
                response_text=response.text,
            ) from exc

        effective = balance.effective_balance
        logger.debug(
            "starling_balance_fetched",
            extra={"account_uid": mask_identifier(account_uid)},
        )
        return Money(minor_units=effective.minor_units, currency=effective.currency)

    async def transfer_to_savings_goal(
        self,
        account_uid: str,
        goal_uid: str,
        amount: Money,
    ) -> str:
        """Transfere `amount` da conta para o savings goal.

        Returns:
            transferUid devolvido pela API.

        Raises:
            StarlingApiError: Em falha HTTP, rede, resposta malformada ou
                `success: false`.
        """
        transfer_uid = str(uuid.uuid4())
        path = (
            f"/account/{account_uid}/savings-goals/{goal_uid}"
            f"/add-money/{transfer_uid}"
        )
        body = {
            "amount": {
                "currency": amount.currency,
                "minorUnits": amount.minor_units,
            }
        }
        response = await self._request("PUT", path, json=body)
        try:
            result = TransferResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise StarlingApiError(
                "transfer_response_invalid",
                status_code=response.status_code,
                response_text=response.text,
            ) from exc

        if not result.success:
            raise StarlingApiError(
                "transfer_rejected",
                status_code=response.status_code,
                response_text=response.text,
            )
        return result.transfer_uid

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, object] | None = None,
    ) -> httpx.Response:
        try:
            response = await self._http.request(method, path, json=json)
        except httpx.TimeoutException as exc:
            raise StarlingApiError("starling_timeout") from exc
        except httpx.HTTPError as exc:
            raise StarlingApiError(f"starling_connection_error: {type(exc).__name__}") from exc

        if response.is_error:
            logger.warning(
                "starling_api_error_status",
                extra={"method": method, "status_code": response.status_code},
            )
            raise StarlingApiError(
                f"starling_http_{response.status_code}",
                status_code=response.status_code,
                response_text=response.text,
            )
        return response
