"""Protocolos de domínio para o store de dedupe.

Interfaces leves (ABCs) dependidas por Application.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AsyncDedupeProtocol(ABC):
    """Contrato mínimo assíncrono para o store do último evento processado.

    Método canônico:
    - check_and_set(key, value, ttl) -> bool
      Retorna True se `key` já guarda `value` (duplicado, sem escrita).
      Caso contrário grava `value` e retorna False.
    """

    @abstractmethod
    async def check_and_set(self, key: str, value: str, ttl: int | None = None) -> bool:
        """Compara e grava o valor de forma atômica.

        Args:
            key: Chave global (ex.: last_processed_event_uid)
            value: UID da entrega atual
            ttl: TTL em segundos; None = sem expiração

        Returns:
            True se duplicado; False se o valor foi gravado agora.

        Raises:
            CacheError: Se o store estiver indisponível.
        """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Lê o valor atual da chave (None se ausente).

        Raises:
            CacheError: Se o store estiver indisponível.
        """
