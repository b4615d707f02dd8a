"""Decisão de política, pedido de transferência e desfecho do pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from app.domain.feed_item import Money  # noqa: TC001 - usado em runtime pelos dataclasses


class ProcessingOutcome(StrEnum):
    """Estado terminal de uma entrega de webhook."""

    DUPLICATE = "duplicate"
    IGNORED = "ignored"
    NO_OP = "no_op"
    TRANSFERRED = "transferred"
    DRY_RUN = "dry_run"
    FAILED = "failed"


class TransferKind(StrEnum):
    ROUND_UP = "round_up"
    SWEEP = "sweep"


@dataclass(frozen=True, slots=True)
class TransferRequest:
    """Pedido de transferência para um savings goal."""

    goal_uid: str
    amount: Money
    kind: TransferKind

    def __post_init__(self) -> None:
        if self.amount.minor_units <= 0:
            msg = f"Transferência exige valor positivo: {self.amount.minor_units}"
            raise ValueError(msg)
        if not self.goal_uid:
            raise ValueError("goal_uid é obrigatório")


@dataclass(frozen=True, slots=True)
class PolicyDecision:
    """Resultado do motor de política.

    `request` é None quando não há nada a transferir; `reason` explica o
    no-op (ex.: "below_threshold", "zero_round_up").
    """

    reason: str
    request: TransferRequest | None = None

    @property
    def should_transfer(self) -> bool:
        return self.request is not None

    @classmethod
    def no_op(cls, reason: str) -> PolicyDecision:
        return cls(reason=reason)


@dataclass(frozen=True, slots=True)
class ProcessingResult:
    """Resumo do processamento de uma entrega (para logs e testes)."""

    outcome: ProcessingOutcome
    reason: str = ""
    event_uid: str = ""
    transfer_uid: str | None = None
    amount_minor_units: int = 0
