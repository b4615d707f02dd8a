"""Configuração de logging estruturado.

Re-exporta funções e classes para configuração de logging JSON.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="starling_sweep")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("sweep_nothing_to_transfer", extra={"diff_minor_units": 0})

Campos em todo log: asctime, level, logger, message, correlation_id,
service, environment. Sem tokens ou UIDs completos.
"""

from config.logging.config import configure_logging, get_logger, mask_identifier
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "mask_identifier",
]
