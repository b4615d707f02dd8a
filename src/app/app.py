"""Entrypoint da aplicação starling-sweep.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from api.routes.starling.task_runner import FeedItemTaskRunner
from app.bootstrap import (
    ServiceSettings,
    initialize_app,
    load_service_settings,
    validate_runtime_settings,
)
from app.bootstrap.clients import create_async_redis_client, create_starling_http_client
from app.bootstrap.dependencies import create_dedupe_store, create_process_feed_item
from config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações (sem savings goal → não sobe)
    - Cria clientes Redis e Starling (httpx) e monta o pipeline
    - Cria o runner de tasks do modo async

    Shutdown:
    - Aguarda tasks de processamento pendentes
    - Fecha conexões
    """
    settings: ServiceSettings = app.state.settings
    logger.info("app_starting", extra={"service": settings.base.service_name})
    validate_runtime_settings(settings)

    app.state.redis_client = None
    if settings.dedupe.backend == "redis":
        app.state.redis_client = create_async_redis_client(settings.base.redis_url)

    dedupe_store = create_dedupe_store(settings.dedupe, settings.base, app.state.redis_client)
    app.state.http_client = create_starling_http_client(settings.starling)
    app.state.feed_item_use_case = create_process_feed_item(
        policy=settings.policy,
        starling=settings.starling,
        dedupe=settings.dedupe,
        dedupe_store=dedupe_store,
        http_client=app.state.http_client,
    )
    app.state.task_runner = FeedItemTaskRunner(settings.webhook.max_concurrent_tasks)
    logger.info(
        "app_ready",
        extra={
            "roundup_enabled": settings.policy.roundup_enabled,
            "sweep_enabled": settings.policy.sweep_enabled,
            "processing_mode": settings.webhook.processing_mode,
            "version": settings.base.app_version,
        },
    )

    yield

    logger.info("app_shutting_down", extra={"service": settings.base.service_name})
    await app.state.task_runner.drain(settings.webhook.processing_timeout_seconds)
    await app.state.http_client.aclose()
    redis_client = app.state.redis_client
    if redis_client is not None:
        await redis_client.aclose()


def create_app(settings: ServiceSettings | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        settings: Settings do processo (default: lidas do ambiente)

    Returns:
        Aplicação FastAPI configurada.
    """
    if settings is None:
        settings = load_service_settings()
    initialize_app(settings)

    fastapi_app = FastAPI(
        title="starling-sweep",
        description="Round-up e sweep automáticos para savings goals da Starling",
        version=settings.base.app_version,
        lifespan=lifespan,
        docs_url=None if settings.base.is_production else "/docs",
        redoc_url=None,
        openapi_url=None if settings.base.is_production else "/openapi.json",
    )
    fastapi_app.state.settings = settings
    fastapi_app.state.webhook_settings = settings.webhook

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": settings.base.service_name})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta."""
    import uvicorn

    settings: ServiceSettings = app.state.settings
    logger.info("app_listening", extra={"port": settings.base.port})
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=settings.base.port,
        reload=settings.base.is_development,
    )


if __name__ == "__main__":
    main()
