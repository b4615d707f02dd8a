"""Settings da Starling Bank API.

Credenciais e endpoint da API pública v2 usada para ler saldo e mover
dinheiro para savings goals.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

STARLING_PROD_URL: str = "https://api.starlingbank.com"
STARLING_API_PREFIX: str = "/api/v2"


@dataclass(frozen=True)
class StarlingSettings:
    """Configurações de acesso à Starling API.

    Attributes:
        access_token: Personal access token (Bearer)
        account_uid: UID da conta monitorada
        api_base_url: URL base da API (produção ou sandbox)
        request_timeout_seconds: Timeout para cada chamada HTTP
    """

    access_token: str = ""
    account_uid: str = ""
    api_base_url: str = STARLING_PROD_URL
    request_timeout_seconds: float = 10.0

    @property
    def api_endpoint(self) -> str:
        """URL base completa com prefixo de versão."""
        return f"{self.api_base_url.rstrip('/')}{STARLING_API_PREFIX}"

    def validate(self) -> list[str]:
        """Valida configurações mínimas da Starling API."""
        errors: list[str] = []

        if not self.access_token:
            errors.append("PERSONAL_ACCESS_TOKEN não configurado")

        if not self.account_uid:
            errors.append("ACCOUNT_UID não configurado")

        if not self.api_base_url.startswith(("https://", "http://")):
            errors.append("STARLING_API_BASE_URL deve ser uma URL http(s)")

        if self.request_timeout_seconds <= 0:
            errors.append("STARLING_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> StarlingSettings:
    """Carrega StarlingSettings a partir de variáveis de ambiente."""
    return StarlingSettings(
        access_token=os.getenv("PERSONAL_ACCESS_TOKEN", ""),
        account_uid=os.getenv("ACCOUNT_UID", ""),
        api_base_url=os.getenv("STARLING_API_BASE_URL", STARLING_PROD_URL),
        request_timeout_seconds=float(os.getenv("STARLING_REQUEST_TIMEOUT_SECONDS", "10")),
    )


@lru_cache(maxsize=1)
def get_starling_settings() -> StarlingSettings:
    """Retorna instância cacheada de StarlingSettings."""
    return _load_from_env()
