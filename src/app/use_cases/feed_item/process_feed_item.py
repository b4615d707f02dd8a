"""Use case: processa uma entrega de webhook de feed item.

Fluxo (assinatura já verificada na borda):
1. Classifica o payload (EventParseError → failed)
2. Guard de idempotência (duplicado → duplicate; CacheError → failed)
3. Filtra origens não suportadas (→ ignored)
4. Motor de política (no-op → no_op; BalanceFetchError → failed)
5. Dispatcher (TransferError → failed; sucesso → transferred/dry_run)

Nenhuma etapa faz retry. Erros esperados viram ProcessingResult(failed)
com log; apenas exceções inesperadas propagam.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from app.domain.transfer import ProcessingOutcome, ProcessingResult
from app.observability import record_latency, record_outcome, record_transfer
from app.protocols.classifier import EventParseError
from app.services.policy_engine import BalanceFetchError
from app.services.transfer_dispatcher import TransferError
from config.logging import mask_identifier
from utils.errors import CacheError

if TYPE_CHECKING:
    from app.domain.feed_item import NotificationEvent
    from app.domain.transfer import TransferRequest
    from app.protocols.classifier import EventClassifierProtocol
    from app.services.idempotency_guard import IdempotencyGuard
    from app.services.policy_engine import PolicyEngine
    from app.services.transfer_dispatcher import TransferDispatcher

logger = logging.getLogger(__name__)


class ProcessFeedItemUseCase:
    """Pipeline classificação → guard → filtro de origem → política → transferência."""

    def __init__(
        self,
        *,
        classifier: EventClassifierProtocol,
        guard: IdempotencyGuard,
        policy_engine: PolicyEngine,
        dispatcher: TransferDispatcher,
    ) -> None:
        self._classifier = classifier
        self._guard = guard
        self._policy = policy_engine
        self._dispatcher = dispatcher

    async def execute(
        self,
        *,
        payload: dict[str, Any],
        correlation_id: str = "",
        dry_run: bool = False,
    ) -> ProcessingResult:
        """Executa o pipeline para um payload já autenticado."""
        started_at = time.perf_counter()
        result = await self._run(payload, dry_run=dry_run)
        record_latency(
            "feed_item_pipeline",
            "execute",
            (time.perf_counter() - started_at) * 1000,
            correlation_id,
        )
        record_outcome(result.outcome.value, reason=result.reason, correlation_id=correlation_id)
        return result

    async def _run(self, payload: dict[str, Any], *, dry_run: bool) -> ProcessingResult:
        try:
            event = self._classifier.classify(payload)
        except EventParseError as exc:
            logger.warning("webhook_payload_invalid", extra={"error": str(exc)})
            return ProcessingResult(outcome=ProcessingOutcome.FAILED, reason="invalid_payload")

        logger.info(
            "feed_item_received",
            extra={
                "event_uid": mask_identifier(event.event_uid),
                "feed_item_uid": mask_identifier(event.feed_item_uid),
                "source": event.raw_source,
                "direction": event.direction.value,
                "amount_minor_units": event.amount.minor_units,
                "currency": event.amount.currency,
            },
        )

        try:
            if await self._guard.check_and_record(event.event_uid):
                return self._result(event, ProcessingOutcome.DUPLICATE, "duplicate_delivery")
        except CacheError as exc:
            logger.error(
                "dedupe_cache_unavailable",
                extra={"error_type": type(exc).__name__, "error": str(exc)},
            )
            return self._result(event, ProcessingOutcome.FAILED, "cache_unavailable")

        if not event.is_actionable:
            logger.info("feed_item_source_ignored", extra={"source": event.raw_source})
            return self._result(event, ProcessingOutcome.IGNORED, "unsupported_source")

        try:
            decision = await self._policy.decide(event)
        except BalanceFetchError as exc:
            logger.error("balance_fetch_failed", extra={"error": str(exc)})
            return self._result(event, ProcessingOutcome.FAILED, "balance_fetch_failed")

        if decision.request is None:
            return self._result(event, ProcessingOutcome.NO_OP, decision.reason)

        return await self._dispatch(event, decision.request, dry_run=dry_run)

    async def _dispatch(
        self,
        event: NotificationEvent,
        request: TransferRequest,
        *,
        dry_run: bool,
    ) -> ProcessingResult:
        try:
            transfer_uid = await self._dispatcher.transfer(request, dry_run=dry_run)
        except TransferError as exc:
            logger.error(
                "transfer_failed",
                extra={
                    "kind": request.kind.value,
                    "status_code": exc.status_code,
                    "response": exc.response_text,
                },
            )
            return self._result(event, ProcessingOutcome.FAILED, "transfer_failed")

        outcome = ProcessingOutcome.DRY_RUN if dry_run else ProcessingOutcome.TRANSFERRED
        if not dry_run:
            record_transfer(request.kind.value, request.amount.minor_units, request.amount.currency)
        return ProcessingResult(
            outcome=outcome,
            reason=request.kind.value,
            event_uid=event.event_uid,
            transfer_uid=transfer_uid,
            amount_minor_units=request.amount.minor_units,
        )

    @staticmethod
    def _result(
        event: NotificationEvent,
        outcome: ProcessingOutcome,
        reason: str,
    ) -> ProcessingResult:
        return ProcessingResult(outcome=outcome, reason=reason, event_uid=event.event_uid)
