"""Infra da Starling Bank API (cliente HTTP, contratos e erros)."""

from app.infra.starling.client import StarlingClient, build_http_client
from app.infra.starling.errors import StarlingApiError

__all__ = [
    "StarlingApiError",
    "StarlingClient",
    "build_http_client",
]
