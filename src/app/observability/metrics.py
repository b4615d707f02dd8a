"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente pelo sistema de logs da plataforma.

Métricas suportadas:
- Latência: tempo de processamento de cada entrega de webhook
- Outcome: counter de desfechos do pipeline (transferred, no_op, duplicate...)
- Transfer: valor movimentado por destino (round-up ou sweep)

Uso:
    from app.observability.metrics import record_latency, record_outcome

    start = time.perf_counter()
    # ... operação ...
    latency_ms = (time.perf_counter() - start) * 1000
    record_latency("feed_item_pipeline", "execute", latency_ms, correlation_id)
    record_outcome("no_op", reason="below_threshold", correlation_id=correlation_id)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "feed_item_pipeline")
        operation: Nome da operação (ex: "execute")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_outcome(
    outcome: str,
    reason: str | None = None,
    correlation_id: str | None = None,
) -> None:
    """Registra desfecho terminal do processamento de uma entrega.

    Args:
        outcome: Desfecho (duplicate, ignored, no_op, transferred, dry_run, failed)
        reason: Motivo curto (ex: "below_threshold") — sem PII
        correlation_id: ID de correlação para rastreamento
    """
    extra: dict[str, object] = {
        "metric_type": "outcome",
        "component": "feed_item_pipeline",
        "outcome": outcome,
        "correlation_id": correlation_id,
    }
    if reason:
        extra["reason"] = reason

    logger.info("metric_outcome", extra=extra)


def record_transfer(
    kind: str,
    minor_units: int,
    currency: str,
    correlation_id: str | None = None,
) -> None:
    """Registra valor transferido para um savings goal.

    Args:
        kind: Tipo de movimentação ("round_up" ou "sweep")
        minor_units: Valor em unidades menores
        currency: Código ISO da moeda
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_transfer",
        extra={
            "metric_type": "transfer",
            "component": "transfer_dispatcher",
            "kind": kind,
            "minor_units": minor_units,
            "currency": currency,
            "correlation_id": correlation_id,
        },
    )
