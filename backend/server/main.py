import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import CORS_ALLOW_ORIGINS, SERVER_LOG_LEVEL, UVICORN_CONFIG
from memory_graph.errors import ClientError, MemoryGraphError
from server.api.rest.dependencies import get_graph_store, shutdown_dependencies
from server.api_router import api_router

logging.basicConfig(
    level=str(SERVER_LOG_LEVEL).upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Neo4j Memory Builder API",
        description="Write memory entities/relationships to Neo4j and query them back as JSON",
        version="0.1.0",
    )

    # Must be registered before the routes are hit (preflight requests).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_methods=["*"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(MemoryGraphError)
    async def _memory_graph_error(_request: Request, exc: MemoryGraphError) -> JSONResponse:
        if isinstance(exc, ClientError):
            logger.warning("rejected request: %s", exc.message)
        else:
            logger.error("graph store error: %s", exc.message, exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def _validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
        )

    @app.on_event("startup")
    async def _startup() -> None:
        store = get_graph_store()
        logger.info("Neo4j URI: %s", getattr(store, "uri", "<injected>"))

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        await shutdown_dependencies()

    app.include_router(api_router)
    return app


app = create_app()


def run() -> None:
    logger.info("Neo4j Memory Builder API running on port %s", UVICORN_CONFIG["port"])
    uvicorn.run("server.main:app", **UVICORN_CONFIG)


if __name__ == "__main__":
    run()
