"""Protocolo de classificação de eventos inbound."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.feed_item import NotificationEvent


class EventParseError(ValueError):
    """Payload com estrutura inválida para o esquema de feed item."""


class EventClassifierProtocol(Protocol):
    """Converte o payload do webhook em NotificationEvent tipado.

    Raises:
        EventParseError: Se o payload não respeitar o esquema.
    """

    def classify(self, payload: dict[str, Any]) -> NotificationEvent: ...
