"""Classificador de feed items Starling.

Converte o payload do webhook em NotificationEvent e mapeia `content.source`
para o conjunto fechado de origens. Origem desconhecida vira OTHER (o
pipeline ignora, sem erro).
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from api.connectors.starling.models import FeedItemWebhookPayload
from app.constants.starling import SOURCE_MAP, Direction, TransactionSource
from app.domain.feed_item import Money, NotificationEvent
from app.protocols.classifier import EventParseError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


def map_source(raw_source: str) -> TransactionSource:
    """Mapeia a tag do provider para a origem interna."""
    return SOURCE_MAP.get(raw_source.strip().upper(), TransactionSource.OTHER)


def classify_event(payload: bytes | Mapping[str, Any]) -> NotificationEvent:
    """Valida o payload (corpo bruto ou já decodificado) e devolve o evento.

    Raises:
        EventParseError: Se o JSON for inválido ou não respeitar o esquema.
    """
    if isinstance(payload, bytes):
        try:
            payload = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise EventParseError("invalid_json") from exc

    try:
        parsed = FeedItemWebhookPayload.model_validate(payload)
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise EventParseError(f"invalid_feed_item: {', '.join(fields)}") from exc

    content = parsed.content
    source = map_source(content.source)
    if source is TransactionSource.OTHER:
        logger.debug("feed_item_source_unmapped", extra={"source": content.source})
    return NotificationEvent(
        event_uid=parsed.webhook_event_uid,
        source=source,
        raw_source=content.source,
        direction=Direction(content.direction),
        amount=Money(
            minor_units=content.amount.minor_units,
            currency=content.amount.currency.upper(),
        ),
        feed_item_uid=content.feed_item_uid,
    )


class StarlingEventClassifier:
    """Implementação de EventClassifierProtocol para webhooks Starling."""

    def classify(self, payload: dict[str, Any]) -> NotificationEvent:
        return classify_event(payload)
