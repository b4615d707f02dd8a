"""Contrato do payload de webhook Starling (feed item v2).

Esquema canônico: `content.amount.minorUnits` é uma magnitude inteira não
negativa e `content.direction` (IN/OUT) carrega o sentido. Campos extras
são ignorados.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.constants.starling import DEFAULT_CURRENCY


class WebhookAmount(BaseModel):
    """Valor do feed item em unidades menores."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    currency: str = Field(default=DEFAULT_CURRENCY, min_length=3, max_length=3)
    minor_units: int = Field(..., ge=0, strict=True, alias="minorUnits")


class FeedItemContent(BaseModel):
    """Bloco `content` do webhook."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    feed_item_uid: str | None = Field(default=None, alias="feedItemUid")
    account_uid: str | None = Field(default=None, alias="accountUid")
    amount: WebhookAmount
    direction: Literal["IN", "OUT"]
    source: str = ""
    status: str | None = None


class FeedItemWebhookPayload(BaseModel):
    """Entrega de webhook de feed item."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    webhook_event_uid: str = Field(default="", alias="webhookEventUid")
    content: FeedItemContent
