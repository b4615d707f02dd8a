"""Endpoints de health check — ping com versão e readiness do Redis."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from app.constants.starling import PING_TOKEN, VERSION_HEADER

router = APIRouter()

DEFAULT_VERSION = "devel"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


def _app_version(request: Request) -> str:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        return DEFAULT_VERSION
    return settings.base.app_version


@router.get("/_ping", response_class=PlainTextResponse)
async def ping(request: Request) -> PlainTextResponse:
    """Liveness probe — responde PONG com a versão do serviço no header."""
    return PlainTextResponse(
        content=PING_TOKEN,
        headers={VERSION_HEADER: _app_version(request)},
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe — o dedupe depende do Redis.

    Com backend em memória (dev) não há dependência externa a checar.
    """
    settings = getattr(request.app.state, "settings", None)
    if settings is not None and settings.dedupe.backend == "memory":
        redis_check = DependencyCheck(status="ok")
    else:
        redis_check = await _check_redis(getattr(request.app.state, "redis_client", None))

    ready = redis_check.status == "ok"
    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {"redis": redis_check.as_dict()},
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _check_redis(redis_client: Any | None) -> DependencyCheck:
    if redis_client is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    try:
        await asyncio.wait_for(redis_client.ping(), timeout=2.0)
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))
