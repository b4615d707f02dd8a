"""Parse e validação inicial do webhook (sem logar payload)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from ..signature import SignatureError, SignatureResult, verify_starling_signature

if TYPE_CHECKING:
    from collections.abc import Mapping

    from config.settings import WebhookSettings


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError, SignatureError):
    """Assinatura inválida do webhook."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    settings: WebhookSettings,
) -> tuple[dict[str, Any], SignatureResult]:
    """Valida assinatura e parseia JSON do webhook.

    A assinatura é verificada sobre o corpo bruto antes de qualquer parse.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos (chaves em minúsculas)
        settings: WebhookSettings

    Raises:
        InvalidSignatureError: Se assinatura for inválida
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto

    Returns:
        (payload dict, SignatureResult)
    """
    signature_result = verify_starling_signature(raw_body, headers, settings)
    if not signature_result.valid:
        raise InvalidSignatureError(signature_result.error or "invalid_signature")

    try:
        payload = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    return payload, signature_result
