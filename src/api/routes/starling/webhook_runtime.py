"""Runtime do webhook de feed items — despacho inline/async com timeout."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from api.routes.starling.task_runner import FeedItemTaskRunner
    from app.domain.transfer import ProcessingResult
    from app.use_cases.feed_item import ProcessFeedItemUseCase
    from config.settings import WebhookSettings

logger = logging.getLogger(__name__)


async def process_feed_item_safe(
    *,
    payload: dict[str, Any],
    correlation_id: str,
    use_case: ProcessFeedItemUseCase,
    dry_run: bool,
    timeout_seconds: float,
) -> ProcessingResult | None:
    """Executa o pipeline com timeout total, sem propagar exceções.

    Returns:
        ProcessingResult, ou None se o pipeline não concluiu.
    """
    try:
        result = await asyncio.wait_for(
            use_case.execute(payload=payload, correlation_id=correlation_id, dry_run=dry_run),
            timeout=timeout_seconds,
        )
    except TimeoutError:
        logger.error(
            "webhook_processing_timeout",
            extra={"correlation_id": correlation_id, "timeout_seconds": timeout_seconds},
        )
        return None
    except InfrastructureError as exc:
        logger.error(
            "webhook_processing_infra_failed",
            extra={"correlation_id": correlation_id, "error_type": type(exc).__name__},
        )
        return None
    except Exception:
        logger.exception("webhook_processing_failed", extra={"correlation_id": correlation_id})
        return None

    logger.info(
        "webhook_processing_completed",
        extra={
            "correlation_id": correlation_id,
            "outcome": result.outcome.value,
            "reason": result.reason,
            "dry_run": dry_run,
        },
    )
    return result


async def dispatch_feed_item_processing(
    *,
    payload: dict[str, Any],
    correlation_id: str,
    use_case: ProcessFeedItemUseCase | None,
    settings: WebhookSettings,
    task_runner: FeedItemTaskRunner | None = None,
    dry_run: bool = False,
) -> None:
    """Despacha processamento inline ou async conforme WEBHOOK_PROCESSING_MODE.

    Em modo async a entrega vai para o `task_runner`; sem runner (app sem
    lifespan) o processamento cai para inline.
    """
    if use_case is None:
        logger.warning(
            "webhook_use_case_unavailable",
            extra={
                "correlation_id": correlation_id,
                "reason": "ProcessFeedItemUseCase não inicializado",
            },
        )
        return

    coroutine = process_feed_item_safe(
        payload=payload,
        correlation_id=correlation_id,
        use_case=use_case,
        dry_run=dry_run,
        timeout_seconds=settings.processing_timeout_seconds,
    )
    if settings.processing_mode == "async":
        if task_runner is not None:
            task_runner.submit(coroutine, correlation_id=correlation_id)
            return
        logger.warning(
            "webhook_task_runner_unavailable",
            extra={"correlation_id": correlation_id, "fallback_mode": "inline"},
        )
    await coroutine

