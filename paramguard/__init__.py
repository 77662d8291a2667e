"""paramguard -- opt-in disclosure of untrusted request parameters."""

__version__ = "0.1.0"

from paramguard.security import (  # noqa: E402
    ExposureConfig,
    GuardedMap,
    NoExposureError,
    ParamGuardError,
    UnsupportedOperationError,
    configure,
)

__all__ = [
    "__version__",
    "ExposureConfig",
    "GuardedMap",
    "NoExposureError",
    "ParamGuardError",
    "UnsupportedOperationError",
    "configure",
]
