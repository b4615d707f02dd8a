"""Bootstrap da aplicação — inicialização e wiring.

Composition root: carrega settings uma única vez, configura logging e
valida a configuração antes de aceitar requests.

Uso:
    from app.bootstrap import initialize_app, load_service_settings

    settings = load_service_settings()
    initialize_app(settings)
    validate_runtime_settings(settings)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    BaseSettings,
    DedupeSettings,
    PolicySettings,
    StarlingSettings,
    WebhookSettings,
    get_base_settings,
    get_dedupe_settings,
    get_policy_settings,
    get_starling_settings,
    get_webhook_settings,
)

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceSettings:
    """Todas as settings do processo, construídas uma vez no startup."""

    base: BaseSettings
    dedupe: DedupeSettings
    policy: PolicySettings
    starling: StarlingSettings
    webhook: WebhookSettings


def load_service_settings() -> ServiceSettings:
    """Lê as settings do ambiente (cacheadas por getter)."""
    return ServiceSettings(
        base=get_base_settings(),
        dedupe=get_dedupe_settings(),
        policy=get_policy_settings(),
        starling=get_starling_settings(),
        webhook=get_webhook_settings(),
    )


def initialize_app(settings: ServiceSettings) -> None:
    """Configura logging JSON estruturado com correlation_id."""
    configure_logging(
        level=settings.base.log_level,
        service_name=settings.base.service_name,
        correlation_id_getter=get_correlation_id,
        environment=settings.base.environment,
    )


def collect_settings_errors(settings: ServiceSettings) -> list[str]:
    """Agrega erros de validação de todas as settings."""
    errors: list[str] = []
    errors.extend(f"base: {error}" for error in settings.base.validate())
    errors.extend(f"dedupe: {error}" for error in settings.dedupe.validate(settings.base))
    errors.extend(f"policy: {error}" for error in settings.policy.validate())
    errors.extend(f"starling: {error}" for error in settings.starling.validate())
    errors.extend(
        f"webhook: {error}"
        for error in settings.webhook.validate(is_production=settings.base.is_production)
    )
    return errors


def validate_runtime_settings(settings: ServiceSettings) -> None:
    """Valida settings obrigatórias no startup.

    Sem nenhum savings goal o serviço nunca faria nada: falha em qualquer
    ambiente. Demais erros falham em staging/production e só alertam em
    development.

    Raises:
        RuntimeError: Se a configuração for inválida para o ambiente.
    """
    environment = settings.base.environment
    policy = settings.policy
    if not policy.roundup_goal_uid and not policy.sweep_goal_uid:
        raise RuntimeError("No savings goal set (ROUNDUP_GOAL ou SWEEP_GOAL)")

    errors = collect_settings_errors(settings)
    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if environment in STRICT_VALIDATION_ENVS:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


__all__ = [
    "ServiceSettings",
    "collect_settings_errors",
    "initialize_app",
    "load_service_settings",
    "validate_runtime_settings",
]
