"""Settings do webhook de feed items da Starling.

Material de verificação de assinatura e modo de processamento.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

ProcessingMode = Literal["inline", "async"]

SIGNATURE_HEADER = "x-hook-signature"


def _env_flag(name: str, default: str = "") -> bool:
    return os.getenv(name, default).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class WebhookSettings:
    """Configurações do endpoint de webhook.

    Attributes:
        public_key: Chave pública RSA (DER SubjectPublicKeyInfo em base64)
        webhook_secret: Shared secret do esquema legado (sha512(secret + body))
        skip_signature_verification: Bypass da verificação — apenas testes
        reject_invalid_signature: Responde 401 (em vez de 200) a assinatura inválida
        processing_mode: inline (processa dentro do request) ou async (background)
        processing_timeout_seconds: Limite total do pipeline por entrega
        max_concurrent_tasks: Teto de entregas processadas em paralelo (modo async)
    """

    public_key: str = ""
    webhook_secret: str = ""
    skip_signature_verification: bool = False
    reject_invalid_signature: bool = False
    processing_mode: ProcessingMode = "inline"
    processing_timeout_seconds: float = 30.0
    max_concurrent_tasks: int = 100

    @property
    def has_key_material(self) -> bool:
        return bool(self.public_key or self.webhook_secret)

    def validate(self, *, is_production: bool = False) -> list[str]:
        """Valida configurações do webhook."""
        errors: list[str] = []

        if not self.skip_signature_verification and not self.has_key_material:
            errors.append("PUBLIC_KEY ou WEBHOOK_SECRET não configurado")

        if self.skip_signature_verification and is_production:
            errors.append("SKIP_SIGNATURE_VERIFICATION proibido em production")

        if self.processing_mode not in ("inline", "async"):
            errors.append("WEBHOOK_PROCESSING_MODE deve ser 'inline' ou 'async'")

        if self.processing_timeout_seconds <= 0:
            errors.append("WEBHOOK_PROCESSING_TIMEOUT_SECONDS deve ser > 0")

        if self.max_concurrent_tasks <= 0:
            errors.append("WEBHOOK_MAX_CONCURRENT_TASKS deve ser > 0")

        return errors


def _load_from_env() -> WebhookSettings:
    """Carrega WebhookSettings a partir de variáveis de ambiente."""
    mode = os.getenv("WEBHOOK_PROCESSING_MODE", "inline").strip().lower()
    return WebhookSettings(
        public_key=os.getenv("PUBLIC_KEY", "").strip(),
        webhook_secret=os.getenv("WEBHOOK_SECRET", ""),
        skip_signature_verification=_env_flag("SKIP_SIGNATURE_VERIFICATION"),
        reject_invalid_signature=_env_flag("REJECT_INVALID_SIGNATURE"),
        processing_mode=mode,  # type: ignore[arg-type]
        processing_timeout_seconds=float(
            os.getenv("WEBHOOK_PROCESSING_TIMEOUT_SECONDS", "30")
        ),
        max_concurrent_tasks=int(os.getenv("WEBHOOK_MAX_CONCURRENT_TASKS", "100")),
    )


@lru_cache(maxsize=1)
def get_webhook_settings() -> WebhookSettings:
    """Retorna instância cacheada de WebhookSettings."""
    return _load_from_env()
