"""Factories — criação do store de dedupe e do pipeline de feed items.

Todas as dependências recebem settings imutáveis por parâmetro; nada aqui
lê variáveis de ambiente.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.normalizers.starling import StarlingEventClassifier
from app.infra.starling import StarlingClient
from app.infra.stores import MemoryDedupeStore, RedisDedupeStore
from app.services import IdempotencyGuard, PolicyEngine, TransferDispatcher
from app.use_cases.feed_item import ProcessFeedItemUseCase

if TYPE_CHECKING:
    import httpx
    from redis.asyncio import Redis as AsyncRedis

    from app.protocols.banking import BankingClientProtocol
    from app.protocols.dedupe import AsyncDedupeProtocol
    from config.settings import (
        BaseSettings,
        DedupeSettings,
        PolicySettings,
        StarlingSettings,
    )

logger = logging.getLogger(__name__)


def create_dedupe_store(
    settings: DedupeSettings,
    base: BaseSettings,
    redis_client: AsyncRedis[bytes] | None,
) -> AsyncDedupeProtocol:
    """Cria store de dedupe conforme DEDUPE_BACKEND.

    - "redis": RedisDedupeStore (staging/production)
    - "memory": MemoryDedupeStore (dev only)
    """
    if settings.backend == "redis":
        if redis_client is None:
            msg = "DEDUPE_BACKEND=redis requer cliente Redis"
            raise ValueError(msg)
        logger.info("dedupe_store_created", extra={"backend": "redis"})
        return RedisDedupeStore(redis_client)

    if not base.is_development:
        logger.warning(
            "memory_store_in_non_dev",
            extra={"backend": "memory", "environment": base.environment},
        )
    logger.info("dedupe_store_created", extra={"backend": "memory"})
    return MemoryDedupeStore()


def create_process_feed_item(
    *,
    policy: PolicySettings,
    starling: StarlingSettings,
    dedupe: DedupeSettings,
    dedupe_store: AsyncDedupeProtocol,
    http_client: httpx.AsyncClient | None = None,
    banking_client: BankingClientProtocol | None = None,
) -> ProcessFeedItemUseCase:
    """Monta o pipeline completo com dependências injetadas.

    Args:
        policy: Goals e threshold
        starling: Conta e credenciais da API
        dedupe: Chave e TTL do guard
        dedupe_store: Store de dedupe
        http_client: httpx.AsyncClient da Starling (ignorado se banking_client)
        banking_client: Cliente bancário pronto (testes)
    """
    if banking_client is None:
        if http_client is None:
            msg = "http_client ou banking_client é obrigatório"
            raise ValueError(msg)
        banking_client = StarlingClient(http_client)

    return ProcessFeedItemUseCase(
        classifier=StarlingEventClassifier(),
        guard=IdempotencyGuard(dedupe_store, key=dedupe.key, ttl_seconds=dedupe.ttl),
        policy_engine=PolicyEngine(policy, banking_client, starling.account_uid),
        dispatcher=TransferDispatcher(banking_client, starling.account_uid),
    )
