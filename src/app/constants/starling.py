"""Constantes da Starling Bank (webhook v2 e API pública)."""

from __future__ import annotations

from enum import StrEnum


class TransactionSource(StrEnum):
    """Classes de origem sobre as quais o serviço age."""

    CARD_SPEND = "card_spend"
    FASTER_PAYMENT_IN = "faster_payment_in"
    NOSTRO_DEPOSIT = "nostro_deposit"
    DIRECT_CREDIT = "direct_credit"
    OTHER = "other"


class Direction(StrEnum):
    """Direção do feed item (o valor é sempre uma magnitude)."""

    IN = "IN"
    OUT = "OUT"


# Tag `content.source` do provider → classe interna. Fora deste mapa = OTHER.
SOURCE_MAP: dict[str, TransactionSource] = {
    "MASTER_CARD": TransactionSource.CARD_SPEND,
    "FASTER_PAYMENTS_IN": TransactionSource.FASTER_PAYMENT_IN,
    "NOSTRO_DEPOSIT": TransactionSource.NOSTRO_DEPOSIT,
    "DIRECT_CREDIT": TransactionSource.DIRECT_CREDIT,
}

# Entradas grandes (salário etc.) elegíveis para sweep
SWEEP_SOURCES = frozenset(
    {
        TransactionSource.FASTER_PAYMENT_IN,
        TransactionSource.NOSTRO_DEPOSIT,
        TransactionSource.DIRECT_CREDIT,
    }
)

DEFAULT_CURRENCY = "GBP"

# Header de versão do /_ping
VERSION_HEADER = "Starling-Sweeper-Version"
PING_TOKEN = "PONG\n"
