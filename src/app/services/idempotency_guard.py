"""Guard de idempotência por entrega de webhook.

Uma única chave global guarda o último webhookEventUid processado. A
reentrega do mesmo evento é descartada sem nova escrita.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging import mask_identifier

if TYPE_CHECKING:
    from app.protocols.dedupe import AsyncDedupeProtocol

logger = logging.getLogger(__name__)


class IdempotencyGuard:
    """Detecta entregas duplicadas via store externo.

    Args:
        store: Store com check-and-set atômico
        key: Chave global do último evento
        ttl_seconds: TTL opcional da chave (None = sem expiração)
    """

    def __init__(
        self,
        store: AsyncDedupeProtocol,
        key: str,
        ttl_seconds: int | None = None,
    ) -> None:
        self._store = store
        self._key = key
        self._ttl = ttl_seconds

    async def check_and_record(self, event_uid: str) -> bool:
        """Retorna True se a entrega já foi processada.

        Sem event_uid não há como deduplicar: segue como novo, sem escrita.

        Raises:
            CacheError: Se o store estiver indisponível (o chamador aborta).
        """
        if not event_uid:
            logger.warning("dedupe_skipped_missing_event_uid")
            return False

        is_duplicate = await self._store.check_and_set(self._key, event_uid, self._ttl)
        if is_duplicate:
            logger.info(
                "webhook_duplicate_ignored",
                extra={"event_uid": mask_identifier(event_uid)},
            )
        return is_duplicate
