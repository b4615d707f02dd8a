"""Store de dedupe em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios
e sem compartilhamento entre instâncias.
"""

from __future__ import annotations

import time

from app.protocols.dedupe import AsyncDedupeProtocol


class MemoryDedupeStore(AsyncDedupeProtocol):
    """Store de dedupe em memória — apenas para dev/test.

    Sem `await` entre leitura e escrita, logo atômico dentro do event loop.
    """

    def __init__(self) -> None:
        self._store: dict[str, tuple[str, float | None]] = {}  # key -> (value, expires_at)
        self.writes = 0

    def _current(self, key: str) -> str | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and time.time() > expires_at:
            del self._store[key]
            return None
        return value

    async def check_and_set(self, key: str, value: str, ttl: int | None = None) -> bool:
        if self._current(key) == value:
            return True
        expires_at = time.time() + ttl if ttl else None
        self._store[key] = (value, expires_at)
        self.writes += 1
        return False

    async def get(self, key: str) -> str | None:
        return self._current(key)
