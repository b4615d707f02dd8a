"""Modelos de domínio do feed item recebido por webhook.

Valores monetários são inteiros em unidades menores; a direção vem em
campo próprio, nunca no sinal do valor.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.constants.starling import Direction, TransactionSource


@dataclass(frozen=True, slots=True)
class Money:
    """Valor monetário em unidades menores (ex.: pence)."""

    minor_units: int
    currency: str


@dataclass(frozen=True, slots=True)
class NotificationEvent:
    """Evento imutável parseado de uma entrega de webhook.

    `event_uid` identifica a entrega (o provider pode reentregar o mesmo
    evento). `raw_source` guarda a tag original para logs.
    """

    event_uid: str
    source: TransactionSource
    raw_source: str
    direction: Direction
    amount: Money
    feed_item_uid: str | None = None

    @property
    def is_inbound(self) -> bool:
        return self.direction is Direction.IN

    @property
    def is_actionable(self) -> bool:
        return self.source is not TransactionSource.OTHER
