"""Factories de clientes externos — Redis e Starling API (httpx)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.infra.starling import build_http_client

if TYPE_CHECKING:
    import httpx
    from redis.asyncio import Redis as AsyncRedis

    from config.settings import StarlingSettings

logger = logging.getLogger(__name__)


def create_async_redis_client(redis_url: str) -> AsyncRedis[bytes]:
    """Cria cliente Redis assíncrono.

    Args:
        redis_url: URL de conexão (REDIS_URL)

    Raises:
        ValueError: Se REDIS_URL não configurado
    """
    from redis.asyncio import Redis as AsyncRedis

    if not redis_url:
        msg = "REDIS_URL não configurado"
        raise ValueError(msg)

    client: AsyncRedis[bytes] = AsyncRedis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )

    host = client.connection_pool.connection_kwargs.get("host", "unknown")
    logger.info("async_redis_client_created", extra={"host": host})
    return client


def create_starling_http_client(settings: StarlingSettings) -> httpx.AsyncClient:
    """Cria httpx.AsyncClient autenticado para a Starling API."""
    client = build_http_client(settings)
    logger.info(
        "starling_http_client_created",
        extra={
            "base_url": settings.api_base_url,
            "timeout_seconds": settings.request_timeout_seconds,
        },
    )
    return client
