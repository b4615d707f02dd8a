"""Dispatcher de transferências para savings goals.

Uma chamada à API por transferência decidida, sem retry. Falha vira
TransferError com o status do provider; o pipeline loga e encerra.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.infra.starling.errors import StarlingApiError
from config.logging import mask_identifier

if TYPE_CHECKING:
    from app.domain.transfer import TransferRequest
    from app.protocols.banking import BankingClientProtocol

logger = logging.getLogger(__name__)

DRY_RUN_TRANSFER_UID = "dry-run"


class TransferError(RuntimeError):
    """Provider rejeitou ou não completou a transferência.

    Attributes:
        status_code: Status HTTP devolvido (None em falha de rede)
        response_text: Corpo da resposta (truncado)
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text


class TransferDispatcher:
    """Executa TransferRequest via API bancária.

    Args:
        banking_client: Cliente que implementa BankingClientProtocol
        account_uid: Conta de origem
    """

    def __init__(self, banking_client: BankingClientProtocol, account_uid: str) -> None:
        self._bank = banking_client
        self._account_uid = account_uid

    async def transfer(self, request: TransferRequest, *, dry_run: bool = False) -> str:
        """Transfere para o goal e retorna o transferUid.

        Em dry-run nada é enviado; retorna DRY_RUN_TRANSFER_UID.

        Raises:
            ValueError: Se o valor não for positivo.
            TransferError: Se a API falhar ou rejeitar a transferência.
        """
        amount = request.amount
        if amount.minor_units <= 0:
            raise ValueError(f"Valor de transferência inválido: {amount.minor_units}")

        log_extra = {
            "kind": request.kind.value,
            "goal_uid": mask_identifier(request.goal_uid),
            "amount_minor_units": amount.minor_units,
            "currency": amount.currency,
        }
        if dry_run:
            logger.info("transfer_dry_run", extra=log_extra)
            return DRY_RUN_TRANSFER_UID

        try:
            transfer_uid = await self._bank.transfer_to_savings_goal(
                self._account_uid,
                request.goal_uid,
                amount,
            )
        except StarlingApiError as exc:
            raise TransferError(
                f"transfer_failed: {exc}",
                status_code=exc.status_code,
                response_text=exc.response_text,
            ) from exc

        logger.info("transfer_succeeded", extra={**log_extra, "transfer_uid": transfer_uid})
        return transfer_uid
