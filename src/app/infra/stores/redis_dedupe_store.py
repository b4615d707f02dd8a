"""Redis Dedupe Store — último evento processado em uma chave global.

A comparação e a escrita rodam num único script Lua, portanto são atômicas:
duas entregas concorrentes do mesmo evento nunca passam ambas pelo guard.
Em duplicado nada é escrito.

Contrato de Keys:
    Valores são UIDs opacos do webhook (webhookEventUid). Nunca gravar
    payload, valores ou dados da conta.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.dedupe import AsyncDedupeProtocol
from config.logging import mask_identifier
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

# Prefixo para namespace de dedupe
DEDUPE_PREFIX = "dedupe:"

# KEYS[1] = chave; ARGV[1] = uid; ARGV[2] = ttl (0 = sem expiração)
# Retorna 1 se duplicado (sem escrita), 0 se gravou.
CHECK_AND_SET_SCRIPT = """
local current = redis.call('GET', KEYS[1])
if current == ARGV[1] then
    return 1
end
local ttl = tonumber(ARGV[2])
if ttl > 0 then
    redis.call('SET', KEYS[1], ARGV[1], 'EX', ttl)
else
    redis.call('SET', KEYS[1], ARGV[1])
end
return 0
"""


class RedisDedupeStore(AsyncDedupeProtocol):
    """Store de dedupe usando Redis assíncrono.

    Args:
        redis_client: Cliente redis.asyncio
    """

    def __init__(self, redis_client: AsyncRedis[bytes]) -> None:
        self._redis = redis_client

    def _key(self, key: str) -> str:
        """Gera chave Redis com namespace."""
        return f"{DEDUPE_PREFIX}{key}"

    async def check_and_set(self, key: str, value: str, ttl: int | None = None) -> bool:
        """Compara e grava atomicamente via EVAL.

        Args:
            key: Chave global
            value: UID da entrega
            ttl: TTL em segundos (None/0 = sem expiração)

        Returns:
            True se duplicado, False se gravou
        """
        try:
            result = await self._redis.eval(
                CHECK_AND_SET_SCRIPT,
                1,
                self._key(key),
                value,
                ttl or 0,
            )
        except Exception as exc:
            raise RedisConnectionError("Falha ao executar check-and-set no Redis") from exc

        is_duplicate = int(result) == 1
        logger.debug(
            "dedupe_duplicate_detected" if is_duplicate else "dedupe_marked",
            extra={"event_uid": mask_identifier(value)},
        )
        return is_duplicate

    async def get(self, key: str) -> str | None:
        try:
            raw = await self._redis.get(self._key(key))
        except Exception as exc:
            raise RedisConnectionError("Falha ao consultar dedupe no Redis") from exc
        if raw is None:
            return None
        return raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)
