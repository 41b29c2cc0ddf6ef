from __future__ import annotations

from typing import Any, Dict, Union

from fastapi import APIRouter, Depends

from application.memory_builder import MemoryGraphService
from domain.memory import MemoryWrite
from server.api.rest.dependencies import get_memory_graph_service
from server.models.schemas import (
    GraphRequest,
    GraphResponse,
    QueryRequest,
    QueryResponse,
    SkippedResponse,
    WriteRequest,
    WriteResponse,
)

router = APIRouter(tags=["memory-graph"])


@router.post("/write", response_model=Union[WriteResponse, SkippedResponse])
def write_entity(
    request: WriteRequest,
    service: MemoryGraphService = Depends(get_memory_graph_service),
) -> Dict[str, Any]:
    """Create or merge one entity, then its relationships (one statement each)."""
    memory = MemoryWrite.from_payload(
        text=request.text,
        label=request.label,
        context=request.context,
        relationships=[rel.as_descriptor() for rel in request.relationships],
        mode=request.mode,
    )
    return service.write(memory)


@router.post("/query", response_model=QueryResponse)
def run_query(
    request: QueryRequest,
    service: MemoryGraphService = Depends(get_memory_graph_service),
) -> Dict[str, Any]:
    return service.query(
        cypher=request.cypher,
        params=request.params,
        fmt=request.format,
        preset=request.preset,
        limit=request.limit,
    )


@router.post("/graph", response_model=GraphResponse)
def graph_snapshot(
    request: GraphRequest,
    service: MemoryGraphService = Depends(get_memory_graph_service),
) -> Dict[str, Any]:
    return service.snapshot(limit=request.limit, filter_label=request.filterLabel)
