"""Settings de dedupe/idempotência.

Uma única chave global guarda o último webhookEventUid processado.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

DedupeBackend = Literal["memory", "redis"]

LAST_EVENT_KEY = "last_processed_event_uid"


@dataclass(frozen=True)
class DedupeSettings:
    """Configurações de dedupe/idempotência.

    Attributes:
        backend: Backend para dedupe (memory|redis)
        key: Chave global do último evento processado
        ttl_seconds: TTL da chave; 0 = sem expiração
    """

    backend: DedupeBackend = "memory"
    key: str = LAST_EVENT_KEY
    ttl_seconds: int = 0

    @property
    def ttl(self) -> int | None:
        """TTL efetivo para o store (None = sem expiração)."""
        return self.ttl_seconds or None

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações de dedupe.

        Args:
            base: BaseSettings para verificar ambiente e REDIS_URL.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in {"memory", "redis"}:
            errors.append(f"DEDUPE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append(
                "DEDUPE_BACKEND=memory proibido em staging/production. Use Redis."
            )

        if self.backend == "redis" and not base.redis_url:
            errors.append("DEDUPE_BACKEND=redis requer REDIS_URL configurado")

        if not self.key:
            errors.append("DEDUPE_KEY não pode ser vazio")

        if self.ttl_seconds < 0:
            errors.append("DEDUPE_TTL_SECONDS deve ser >= 0")

        return errors


def _load_dedupe_from_env() -> DedupeSettings:
    """Carrega DedupeSettings de variáveis de ambiente.

    Sem DEDUPE_BACKEND explícito, usa Redis sempre que REDIS_URL existir.
    """
    default_backend = "redis" if os.getenv("REDIS_URL") else "memory"
    backend_str = os.getenv("DEDUPE_BACKEND", default_backend).lower()
    backend: DedupeBackend = backend_str if backend_str in ("memory", "redis") else "memory"
    return DedupeSettings(
        backend=backend,
        key=os.getenv("DEDUPE_KEY", LAST_EVENT_KEY),
        ttl_seconds=int(os.getenv("DEDUPE_TTL_SECONDS", "0")),
    )


@lru_cache(maxsize=1)
def get_dedupe_settings() -> DedupeSettings:
    """Retorna instância cacheada de DedupeSettings."""
    return _load_dedupe_from_env()
