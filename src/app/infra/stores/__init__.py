"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - redis_dedupe_store: último evento processado em Redis (produção)
    - memory_stores: store em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryDedupeStore
from app.infra.stores.redis_dedupe_store import RedisDedupeStore

__all__ = [
    # Memory (dev/test)
    "MemoryDedupeStore",
    # Redis
    "RedisDedupeStore",
]
