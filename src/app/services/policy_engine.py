"""Motor de política: decide se e quanto mover para um savings goal.

Dois procedimentos independentes, escolhidos pela origem do evento:

- Round-up (gasto com cartão): arredonda o gasto para a próxima unidade
  maior e move a diferença para o goal de round-up.
- Sweep (entrada grande): quando a entrada supera o threshold, move o saldo
  anterior à transação (saldo efetivo menos a entrada) para o goal de sweep.

Todos os valores em unidades menores. Nunca decide transferência <= 0.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.constants.starling import SWEEP_SOURCES, TransactionSource
from app.domain.feed_item import Money
from app.domain.transfer import PolicyDecision, TransferKind, TransferRequest
from app.infra.starling.errors import StarlingApiError

if TYPE_CHECKING:
    from app.domain.feed_item import NotificationEvent
    from app.protocols.banking import BankingClientProtocol
    from config.settings import PolicySettings

logger = logging.getLogger(__name__)

MINOR_UNITS_PER_MAJOR = 100


class BalanceFetchError(RuntimeError):
    """Falha ao ler o saldo efetivo; nenhuma transferência é tentada."""


def round_up(amount_minor_units: int) -> int:
    """Diferença até a próxima unidade maior.

    Múltiplos exatos de 100 resultam em 0; o resultado fica em [0, 99].

    Exemplo:
        round_up(2499) -> 1
        round_up(2500) -> 0
    """
    if amount_minor_units < 0:
        raise ValueError("round_up espera magnitude não negativa")
    rounded = (amount_minor_units + MINOR_UNITS_PER_MAJOR - 1) // MINOR_UNITS_PER_MAJOR
    return rounded * MINOR_UNITS_PER_MAJOR - amount_minor_units


class PolicyEngine:
    """Aplica round-up ou sweep a um evento classificado.

    Args:
        settings: Goals e threshold (imutáveis, injetados no startup)
        banking_client: Cliente para leitura de saldo
        account_uid: Conta monitorada
    """

    def __init__(
        self,
        settings: PolicySettings,
        banking_client: BankingClientProtocol,
        account_uid: str,
    ) -> None:
        self._settings = settings
        self._bank = banking_client
        self._account_uid = account_uid

    async def decide(self, event: NotificationEvent) -> PolicyDecision:
        """Decide a transferência para o evento.

        Raises:
            BalanceFetchError: Se o sweep precisar do saldo e a leitura falhar.
        """
        if event.source is TransactionSource.CARD_SPEND:
            return self._decide_round_up(event)
        if event.source in SWEEP_SOURCES:
            return await self._decide_sweep(event)
        return PolicyDecision.no_op("unsupported_source")

    def _decide_round_up(self, event: NotificationEvent) -> PolicyDecision:
        goal_uid = self._settings.roundup_goal_uid
        if not goal_uid:
            logger.info("roundup_goal_not_configured")
            return PolicyDecision.no_op("no_roundup_goal")

        if event.is_inbound:
            logger.info("roundup_ignoring_inbound", extra={"source": event.raw_source})
            return PolicyDecision.no_op("inbound_card_transaction")

        amount = round_up(event.amount.minor_units)
        logger.info(
            "roundup_computed",
            extra={
                "amount_minor_units": event.amount.minor_units,
                "round_up_minor_units": amount,
            },
        )
        if amount == 0:
            return PolicyDecision.no_op("zero_round_up")

        return PolicyDecision(
            reason="round_up",
            request=TransferRequest(
                goal_uid=goal_uid,
                amount=Money(minor_units=amount, currency=event.amount.currency),
                kind=TransferKind.ROUND_UP,
            ),
        )

    async def _decide_sweep(self, event: NotificationEvent) -> PolicyDecision:
        goal_uid = self._settings.sweep_goal_uid
        if not goal_uid:
            logger.info("sweep_goal_not_configured")
            return PolicyDecision.no_op("no_sweep_goal")

        threshold = self._settings.sweep_threshold
        amount = event.amount.minor_units
        if threshold <= 0 or amount < threshold:
            logger.info(
                "sweep_below_threshold",
                extra={"amount_minor_units": amount, "threshold_minor_units": threshold},
            )
            return PolicyDecision.no_op("below_threshold")

        if amount == threshold:
            logger.info("sweep_nothing_to_transfer", extra={"amount_minor_units": amount})
            return PolicyDecision.no_op("equal_to_threshold")

        balance = await self._fetch_effective_balance()
        diff = balance.minor_units - amount
        logger.info(
            "sweep_balance_before_computed",
            extra={"threshold_minor_units": threshold, "balance_before_minor_units": diff},
        )
        if diff <= 0:
            logger.info("sweep_nothing_to_transfer", extra={"balance_before_minor_units": diff})
            return PolicyDecision.no_op("non_positive_balance_before")

        return PolicyDecision(
            reason="sweep",
            request=TransferRequest(
                goal_uid=goal_uid,
                amount=Money(minor_units=diff, currency=event.amount.currency),
                kind=TransferKind.SWEEP,
            ),
        )

    async def _fetch_effective_balance(self) -> Money:
        try:
            return await self._bank.get_effective_balance(self._account_uid)
        except StarlingApiError as exc:
            raise BalanceFetchError(f"balance_fetch_failed: {exc}") from exc
