"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhook de feed items, health)
- Leitura do corpo bruto e query params
- Delegação para connectors/use_cases
- Respostas HTTP apropriadas

Estrutura:
- routes/starling/: webhook de feed items
- routes/health/: ping e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
