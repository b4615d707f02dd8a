"""Serviços de aplicação.

Unidades reutilizáveis do pipeline (sem IO direto; IO entra via protocolos).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.idempotency_guard import IdempotencyGuard
from app.services.policy_engine import BalanceFetchError, PolicyEngine, round_up
from app.services.transfer_dispatcher import TransferDispatcher, TransferError

__all__ = [
    "BalanceFetchError",
    "IdempotencyGuard",
    "PolicyEngine",
    "TransferDispatcher",
    "TransferError",
    "round_up",
]
