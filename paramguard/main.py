"""paramguard FastAPI application factory."""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from paramguard import __version__
from paramguard.api.middleware import UnexposedParamsAuditMiddleware
from paramguard.config.settings import Settings, settings as default_settings
from paramguard.security.errors import NoExposureError, UnsupportedOperationError


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build a FastAPI app whose handlers receive guarded params.

    The exposure config derived from *settings* is stored on
    ``app.state.paramguard_config`` and picked up by the
    ``guarded_params`` dependency; it is not installed process-wide.
    """
    settings = settings or default_settings

    app = FastAPI(title="paramguard", version=__version__)
    app.state.paramguard_config = settings.to_exposure_config()

    if settings.AUDIT_UNEXPOSED:
        app.add_middleware(UnexposedParamsAuditMiddleware)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "version": __version__}

    # --- Exception handlers ---

    @app.exception_handler(NoExposureError)
    async def no_exposure_handler(request: Request, exc: NoExposureError) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content={"detail": "Request parameters used before any were exposed"},
        )

    @app.exception_handler(UnsupportedOperationError)
    async def unsupported_handler(request: Request, exc: UnsupportedOperationError) -> JSONResponse:
        return JSONResponse(status_code=501, content={"detail": str(exc)})

    return app
