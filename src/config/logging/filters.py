"""Filters de logging para injeção de contexto.

Campos injetados em todo record:
- correlation_id: ID da entrega de webhook em processamento
- service: nome do serviço
- environment: ambiente de execução (development|staging|production)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id, service e environment em cada record.

    Nunca adicionar payload bruto do webhook, tokens ou saldos completos
    de conta nos logs.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
        environment: str = "development",
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._environment = environment
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record; nunca descarta.

        Se correlation_id já veio via `extra` (ex.: task em background),
        preserva o valor explícito.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        record.environment = self._environment
        return True
