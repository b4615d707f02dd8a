"""Protocolo do cliente da API bancária.

Evita dependência direta de app/ sobre o cliente HTTP concreto.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.feed_item import Money


class BankingClientProtocol(Protocol):
    """Contrato mínimo para leitura de saldo e transferência para goals."""

    async def get_effective_balance(self, account_uid: str) -> Money: ...

    async def transfer_to_savings_goal(
        self,
        account_uid: str,
        goal_uid: str,
        amount: Money,
    ) -> str: ...
