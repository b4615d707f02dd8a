"""Exceções de domínio para falhas recuperáveis de infraestrutura."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class CacheError(InfrastructureError):
    """Cache de idempotência indisponível ou com resposta inválida."""


class RedisConnectionError(CacheError):
    """Falha de conexão/timeout ao acessar Redis."""
