"""Connector Starling — assinatura e contrato do webhook de feed items."""

from .models import FeedItemContent, FeedItemWebhookPayload, WebhookAmount
from .signature import (
    SignatureError,
    SignatureResult,
    load_public_key,
    verify_legacy_signature,
    verify_rsa_signature,
    verify_starling_signature,
)

__all__ = [
    "FeedItemContent",
    "FeedItemWebhookPayload",
    "SignatureError",
    "SignatureResult",
    "WebhookAmount",
    "load_public_key",
    "verify_legacy_signature",
    "verify_rsa_signature",
    "verify_starling_signature",
]
