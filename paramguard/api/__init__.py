"""FastAPI integration -- guarded request params and the unexposed-param audit."""

from paramguard.api.middleware import UnexposedParamsAuditMiddleware
from paramguard.api.params import (
    GuardedParams,
    build_params,
    guarded_params,
    parse_nested_query,
)

__all__ = [
    "GuardedParams",
    "UnexposedParamsAuditMiddleware",
    "build_params",
    "guarded_params",
    "parse_nested_query",
]
