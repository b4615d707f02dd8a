"""Agregador de settings do starling-sweep.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    LAST_EVENT_KEY,
    BaseSettings,
    DedupeBackend,
    DedupeSettings,
    Environment,
    get_base_settings,
    get_dedupe_settings,
)

# Política de movimentação
from config.settings.policy import PolicySettings, get_policy_settings

# Starling API
from config.settings.starling import (
    STARLING_PROD_URL,
    StarlingSettings,
    get_starling_settings,
)

# Webhook
from config.settings.webhook import (
    SIGNATURE_HEADER,
    ProcessingMode,
    WebhookSettings,
    get_webhook_settings,
)

__all__ = [
    # Constants
    "LAST_EVENT_KEY",
    "SIGNATURE_HEADER",
    "STARLING_PROD_URL",
    # Base
    "BaseSettings",
    "DedupeBackend",
    "DedupeSettings",
    "Environment",
    # Domain
    "PolicySettings",
    "ProcessingMode",
    "StarlingSettings",
    "WebhookSettings",
    # Getters
    "get_base_settings",
    "get_dedupe_settings",
    "get_policy_settings",
    "get_starling_settings",
    "get_webhook_settings",
]
