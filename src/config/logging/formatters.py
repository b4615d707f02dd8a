"""Formatters de logging estruturado.

Todo log sai como uma linha JSON com os campos:
- asctime, level, logger, message
- correlation_id (entrega de webhook em processamento)
- service e environment

Valores monetários e identificadores vão em `extra`, nunca interpolados na
mensagem; a mensagem é sempre um nome de evento em snake_case.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem fixa para facilitar leitura no console da plataforma
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
    "environment",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-10-19 10:30:00,123",
            "level": "INFO",
            "logger": "app.services.policy_engine",
            "message": "sweep_below_threshold",
            "correlation_id": "abc-123",
            "service": "starling_sweep",
            "environment": "production",
            "amount_minor_units": 50000
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
