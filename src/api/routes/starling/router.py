"""Router Starling — agrega os endpoints do canal."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.starling.webhook import router as webhook_router

router = APIRouter()

# POST /feed-item
router.include_router(webhook_router, prefix="/feed-item")
