"""Guarded containers -- explicit, per-key disclosure of untrusted data.

Exports the container, its exposure configuration and the error taxonomy.
"""

from paramguard.security.errors import (
    NoExposureError,
    ParamGuardError,
    UnsupportedOperationError,
)
from paramguard.security.exposure import (
    ExposureConfig,
    configure,
    get_default_config,
    log_no_exposure,
    on_no_expose,
    raise_no_exposure,
    reset_default_config,
    resolve_map_factory,
    set_default_config,
)
from paramguard.security.guarded_map import GuardedMap, normalize_key

__all__ = [
    # guarded_map
    "GuardedMap",
    "normalize_key",
    # exposure
    "ExposureConfig",
    "configure",
    "get_default_config",
    "log_no_exposure",
    "on_no_expose",
    "raise_no_exposure",
    "reset_default_config",
    "resolve_map_factory",
    "set_default_config",
    # errors
    "NoExposureError",
    "ParamGuardError",
    "UnsupportedOperationError",
]
