"""Verificação de assinatura dos webhooks Starling.

Dois esquemas suportados, sempre sobre o corpo bruto (nunca re-serializado):

- RSA (atual): header `X-Hook-Signature` = base64(RSA-PKCS1v15(SHA-512(body))),
  verificado com a chave pública da conta (DER SubjectPublicKeyInfo em base64).
- Legado (shared secret): header = base64(SHA-512(secret || body)), comparado
  em tempo constante.

O bypass (`skip_signature_verification`) existe apenas para ambientes de
teste e é sempre logado.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from config.settings.webhook import SIGNATURE_HEADER

if TYPE_CHECKING:
    from collections.abc import Mapping

    from config.settings import WebhookSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da verificação de assinatura."""

    valid: bool
    skipped: bool = False
    scheme: str | None = None
    error: str | None = None


class SignatureError(ValueError):
    """Material de chave ou assinatura inválidos."""


def load_public_key(public_key_b64: str) -> rsa.RSAPublicKey:
    """Carrega chave pública RSA a partir de DER em base64.

    Raises:
        SignatureError: Se base64/DER inválidos ou a chave não for RSA.
    """
    try:
        der = base64.b64decode(public_key_b64, validate=True)
        key = serialization.load_der_public_key(der)
    except (ValueError, binascii.Error, UnsupportedAlgorithm) as exc:
        raise SignatureError("invalid_public_key") from exc

    if not isinstance(key, rsa.RSAPublicKey):
        raise SignatureError("invalid_public_key")
    return key


def _decode_signature(signature: str) -> bytes:
    try:
        return base64.b64decode(signature.strip(), validate=True)
    except (ValueError, binascii.Error) as exc:
        raise SignatureError("invalid_base64") from exc


def verify_rsa_signature(raw_body: bytes, signature: str, public_key_b64: str) -> None:
    """Verifica RSA PKCS#1 v1.5 com SHA-512.

    Raises:
        SignatureError: Em qualquer falha (chave, base64 ou assinatura).
    """
    public_key = load_public_key(public_key_b64)
    signature_bytes = _decode_signature(signature)
    try:
        public_key.verify(signature_bytes, raw_body, padding.PKCS1v15(), hashes.SHA512())
    except InvalidSignature as exc:
        raise SignatureError("signature_mismatch") from exc


def verify_legacy_signature(raw_body: bytes, signature: str, secret: str) -> None:
    """Verifica o esquema legado base64(sha512(secret || body)).

    Raises:
        SignatureError: Se base64 inválido ou digest divergente.
    """
    provided = _decode_signature(signature)
    expected = hashlib.sha512(secret.encode("utf-8") + raw_body).digest()
    if not hmac.compare_digest(expected, provided):
        raise SignatureError("signature_mismatch")


def verify_starling_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    settings: WebhookSettings,
) -> SignatureResult:
    """Verifica a assinatura de uma entrega de webhook.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos (chaves em minúsculas)
        settings: WebhookSettings com chave pública/secret e flag de bypass

    Returns:
        SignatureResult (nunca levanta exceção)
    """
    if settings.skip_signature_verification:
        logger.warning("signature_verification_skipped")
        return SignatureResult(valid=True, skipped=True)

    signature = headers.get(SIGNATURE_HEADER, "")
    if not signature:
        return SignatureResult(valid=False, error="missing_signature")

    if not settings.has_key_material:
        return SignatureResult(valid=False, error="missing_key_material")

    scheme = "rsa_sha512" if settings.public_key else "legacy_sha512"
    try:
        if settings.public_key:
            verify_rsa_signature(raw_body, signature, settings.public_key)
        else:
            verify_legacy_signature(raw_body, signature, settings.webhook_secret)
    except SignatureError as exc:
        return SignatureResult(valid=False, scheme=scheme, error=str(exc))
    return SignatureResult(valid=True, scheme=scheme)
