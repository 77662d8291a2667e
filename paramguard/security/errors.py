"""Exceptions raised by guarded containers."""

from __future__ import annotations

from typing import List, Optional


class ParamGuardError(Exception):
    """Base class for paramguard failures."""


class NoExposureError(ParamGuardError):
    """Raised when a non-empty container is enumerated before anything was exposed."""

    def __init__(self, unexposed_keys: Optional[List[str]] = None) -> None:
        self.unexposed_keys: List[str] = list(unexposed_keys or [])
        super().__init__(
            "Enumerated a guarded container before exposing any keys "
            f"(available: {', '.join(self.unexposed_keys) or 'none'})"
        )


class UnsupportedOperationError(ParamGuardError, NotImplementedError):
    """Raised for mapping operations a guarded container refuses to perform."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} is not supported on guarded containers")


__all__ = [
    "ParamGuardError",
    "NoExposureError",
    "UnsupportedOperationError",
]
