"""Recepção de webhooks Starling (assinatura + JSON)."""

from .receive import (
    InvalidJsonError,
    InvalidSignatureError,
    WebhookRequestError,
    parse_webhook_request,
)

__all__ = [
    "InvalidJsonError",
    "InvalidSignatureError",
    "WebhookRequestError",
    "parse_webhook_request",
]
