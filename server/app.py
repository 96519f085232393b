"""FastAPI application entry point for the Death Cap Saute sheet server."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from deathcap.errors import EngineError
from server.config import settings
from server.routes.sheets import router as sheets_router
from server.store import close_engine, get_engine, init_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level.upper())
    logger.info("Starting Death Cap Saute server")
    engine = init_engine(in_memory=settings.in_memory)
    logger.info("Server ready (game %r)", engine.get_state().name)
    yield
    close_engine()
    logger.info("Engine released, server stopped")


app = FastAPI(
    title="Death Cap Saute",
    description="Restaurant sheets, challenge dice, and hazard tables",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    detail = [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"detail": detail})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Sheet server error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    start = time.monotonic()
    response = await call_next(request)
    duration_ms = (time.monotonic() - start) * 1000
    logger.info(
        "%s %s → %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH"],
    allow_headers=["Content-Type"],
)

app.include_router(sheets_router, tags=["sheets"])


@app.get("/health", tags=["ops"])
async def health_check():
    """Report whether the engine has a loaded game."""
    try:
        state = get_engine().get_state()
        return {"status": "ok", "version": app.version, "restaurants": len(state.restaurants)}
    except (RuntimeError, EngineError):
        return JSONResponse(status_code=503, content={"status": "unavailable"})


def main() -> None:
    import uvicorn

    uvicorn.run("server.app:app", host=settings.host, port=settings.port)
