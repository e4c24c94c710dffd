from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request

from animeav1 import __version__
from animeav1.infrastructure.config import AppConfig
from animeav1.interfaces.app_state import AppState
from animeav1.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def build_app(config: AppConfig) -> FastAPI:
    """Build the FastAPI app. Configuration only; resources are created in lifespan()."""
    app = FastAPI(
        title="animeav1",
        description="Catalog, episode and HLS stream lookup for animeav1.com",
        version=__version__,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    from animeav1.interfaces.api.catalog import router as catalog_router

    app.include_router(catalog_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                query=str(request.url.query),
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
