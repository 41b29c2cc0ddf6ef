from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse, PlainTextResponse, Response

from config.settings import STATIC_DIR

logger = logging.getLogger(__name__)

router = APIRouter(tags=["static"])


def _resolve_static(relative: str) -> Path | None:
    root = Path(STATIC_DIR).resolve()
    candidate = (root / relative).resolve()
    # Reject anything that escapes the static root (e.g. `..` segments).
    if root not in candidate.parents:
        return None
    if not candidate.is_file():
        return None
    return candidate


def _serve(relative: str, name: str, media_type: str | None = None) -> Response:
    path = _resolve_static(relative)
    if path is None:
        logger.warning("static file missing: %s", relative)
        return PlainTextResponse(f"{name} not found", status_code=404)
    logger.debug("serving %s", path)
    return FileResponse(path, media_type=media_type)


@router.get("/.well-known/{manifest}")
async def well_known(manifest: str) -> Response:
    """Plugin manifests (e.g. `ai-plugin.json`)."""
    return _serve(f".well-known/{manifest}", manifest)


@router.get("/openapi.yaml")
async def openapi_yaml() -> Response:
    return _serve("openapi.yaml", "openapi.yaml", media_type="text/yaml")
