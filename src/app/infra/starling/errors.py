"""Erros do cliente da Starling API (sem dados sensíveis)."""

from __future__ import annotations


class StarlingApiError(Exception):
    """Falha de chamada à Starling API.

    Attributes:
        status_code: Status HTTP (None para falhas de rede/timeout)
        response_text: Corpo da resposta truncado, para logs
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text[:500]
