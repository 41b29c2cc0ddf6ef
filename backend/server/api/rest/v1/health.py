from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from application.memory_builder import MemoryGraphService
from server.api.rest.dependencies import get_memory_graph_service

router = APIRouter(tags=["health"])


@router.get("/ping", response_class=PlainTextResponse)
async def ping() -> str:
    return "pong"


@router.get("/health")
def health(service: MemoryGraphService = Depends(get_memory_graph_service)) -> JSONResponse:
    """Neo4j connectivity; failures are reported in the body, not raised."""
    report = service.health()
    status_code = 200 if report.get("status") == "ok" else 500
    return JSONResponse(status_code=status_code, content=report)
