"""Audit middleware for guarded request parameters."""

from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from paramguard.security.guarded_map import GuardedMap

logger = logging.getLogger("paramguard.api")


# ---------------------------------------------------------------------------
# Unexposed parameter audit
# ---------------------------------------------------------------------------


class UnexposedParamsAuditMiddleware(BaseHTTPMiddleware):
    """Log parameters a request carried but its handler never exposed.

    Only requests whose handler built guarded params (via the
    ``guarded_params`` dependency) are audited.  Key names are logged,
    values never are.
    """

    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        state = request.state
        response: Response = await call_next(request)

        params = getattr(state, "params", None)
        if not isinstance(params, GuardedMap):
            return response

        unexposed = params.unexposed_keys()
        if unexposed:
            logger.info(
                "method=%s path=%s unexposed_params=%s",
                request.method,
                request.url.path,
                ",".join(unexposed),
            )
        response.headers["X-Params-Unexposed"] = str(len(unexposed))
        return response
