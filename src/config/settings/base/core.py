"""Settings base do serviço.

Configurações comuns: ambiente, nome do serviço, porta e versão.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version
from typing import Literal

Environment = Literal["development", "staging", "production"]

DISTRIBUTION_NAME = "starling-sweep"
DEFAULT_PORT = 8080


@dataclass(frozen=True)
class BaseSettings:
    """Configurações base do sistema.

    Attributes:
        environment: Ambiente de execução (development|staging|production)
        service_name: Nome do serviço para logs
        log_level: Nível de log raiz
        port: Porta HTTP do servidor
        app_version: Versão reportada no header do /_ping
        redis_url: URL de conexão Redis
    """

    environment: Environment = "development"
    service_name: str = "starling_sweep"
    log_level: str = "INFO"
    port: int = DEFAULT_PORT
    app_version: str = "devel"
    redis_url: str = ""

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate(self) -> list[str]:
        """Valida configurações base.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if self.environment not in {"development", "staging", "production"}:
            errors.append(f"ENVIRONMENT inválido: {self.environment}")

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if not 0 < self.port < 65536:
            errors.append(f"PORT inválida: {self.port}")

        return errors


def _parse_environment(env_str: str) -> Environment:
    """Converte string de ambiente para tipo Environment."""
    env_lower = env_str.lower()
    if env_lower in ("production", "prod"):
        return "production"
    if env_lower in ("staging", "stage"):
        return "staging"
    return "development"


def _resolve_version() -> str:
    """Versão do deploy: APP_VERSION (ex.: git SHA) ou versão do pacote."""
    explicit = os.getenv("APP_VERSION", "")
    if explicit:
        return explicit
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "devel"


def _resolve_port() -> int:
    # Azure Functions custom handler injeta a porta nesta variável
    raw = os.getenv("FUNCTIONS_CUSTOMHANDLER_PORT") or os.getenv("PORT") or str(DEFAULT_PORT)
    return int(raw)


def _load_base_from_env() -> BaseSettings:
    """Carrega BaseSettings de variáveis de ambiente."""
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "starling_sweep"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        port=_resolve_port(),
        app_version=_resolve_version(),
        redis_url=os.getenv("REDIS_URL", ""),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
