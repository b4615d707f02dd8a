"""Correlation_id por entrega de webhook.

Cada entrega recebida do Starling ganha um correlation_id, propagado para os
logs de todo o pipeline (assinatura → dedupe → política → transferência).
Usa ContextVar, portanto é seguro entre tasks asyncio concorrentes.

Uso:
    from app.observability import get_correlation_id, set_correlation_id

    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id da entrega atual (vazio fora de request)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID recebido no header. Se None/vazio, gera um UUID4.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    return _correlation_id.set(correlation_id or generate_correlation_id())


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())
