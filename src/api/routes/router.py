"""Agregador de rotas.

Cria o router principal da API e inclui os sub-routers.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.starling.router import router as starling_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks na raiz (/_ping e /ready)
    api_router.include_router(health_router, tags=["health"])

    # Webhook de feed items (/feed-item)
    api_router.include_router(starling_router, tags=["starling"])

    return api_router
