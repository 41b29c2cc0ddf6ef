from __future__ import annotations

from fastapi import APIRouter

import server.api.rest.v1.health as health_v1
import server.api.rest.v1.memory as memory_v1
import server.api.rest.v1.static as static_v1

# Canonical API router aggregator. Paths are unprefixed: existing plugin
# manifests and clients call `/write`, `/query`, `/graph` directly.
api_router = APIRouter()
api_router.include_router(memory_v1.router)
api_router.include_router(health_v1.router)
api_router.include_router(static_v1.router)

__all__ = ["api_router"]
