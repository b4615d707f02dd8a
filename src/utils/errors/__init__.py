"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    CacheError,
    InfrastructureError,
    RedisConnectionError,
)

__all__ = [
    "CacheError",
    "InfrastructureError",
    "RedisConnectionError",
]
