"""Endpoint de webhook de feed items da Starling.

Endpoint:
- POST /feed-item: recebimento de notificações de transação

Segurança:
- Assinatura (RSA ou legado) verificada sobre o corpo bruto antes do parse
- Resposta 200 para qualquer entrega lida (evita retry da Starling), exceto
  assinatura inválida com REJECT_INVALID_SIGNATURE=true (401)
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.connectors.starling.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)
from api.routes.starling.webhook_runtime import dispatch_feed_item_processing
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from config.settings import WebhookSettings

logger = logging.getLogger(__name__)

router = APIRouter()

CORRELATION_HEADER = "x-correlation-id"
DRY_RUN_PARAMS = ("dry-run", "dryrun")


def _is_dry_run(request: Request) -> bool:
    return any(param in request.query_params for param in DRY_RUN_PARAMS)


def _received(correlation_id: str) -> JSONResponse:
    return JSONResponse(content={"status": "received", "correlation_id": correlation_id})


@router.post("")
async def receive_feed_item(request: Request) -> JSONResponse:
    """Recebe uma notificação de feed item.

    Fluxo:
    1. Lê corpo bruto (vazio → 200 sem processamento)
    2. Verifica assinatura e parseia JSON
    3. Despacha o pipeline (inline ou async)
    """
    token = set_correlation_id(request.headers.get(CORRELATION_HEADER))
    correlation_id = get_correlation_id()
    try:
        settings: WebhookSettings = getattr(
            request.app.state, "webhook_settings", None
        ) or WebhookSettings()
        raw_body = await request.body()

        if not raw_body:
            logger.info("webhook_empty_body", extra={"correlation_id": correlation_id})
            return _received(correlation_id)

        try:
            payload, signature = parse_webhook_request(raw_body, request.headers, settings)
        except InvalidSignatureError as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={
                    "correlation_id": correlation_id,
                    "error": str(exc),
                    "rejected": settings.reject_invalid_signature,
                },
            )
            if settings.reject_invalid_signature:
                return JSONResponse(
                    content={"status": "unauthorized", "correlation_id": correlation_id},
                    status_code=401,
                )
            return _received(correlation_id)
        except InvalidJsonError as exc:
            logger.warning(
                "webhook_json_invalid",
                extra={"correlation_id": correlation_id, "error": str(exc)},
            )
            return _received(correlation_id)

        dry_run = _is_dry_run(request)
        logger.info(
            "webhook_received",
            extra={
                "correlation_id": correlation_id,
                "signature_scheme": signature.scheme,
                "signature_skipped": signature.skipped,
                "dry_run": dry_run,
            },
        )
        await dispatch_feed_item_processing(
            payload=payload,
            correlation_id=correlation_id,
            use_case=getattr(request.app.state, "feed_item_use_case", None),
            settings=settings,
            task_runner=getattr(request.app.state, "task_runner", None),
            dry_run=dry_run,
        )
        return _received(correlation_id)
    finally:
        reset_correlation_id(token)
