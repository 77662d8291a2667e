"""Exposure configuration shared by guarded containers.

An :class:`ExposureConfig` bundles the two process-level knobs a guarded
container reads: the factory that builds plain output maps, and the hook
fired when a non-empty container is enumerated before anything was
exposed.  A default config is installed once at startup and read by every
container that is not handed one explicitly.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Callable, MutableMapping, Optional

from paramguard.security.errors import NoExposureError

if TYPE_CHECKING:
    from paramguard.security.guarded_map import GuardedMap

logger = logging.getLogger(__name__)

MapFactory = Callable[[], MutableMapping[str, Any]]
NoExposeHook = Callable[["GuardedMap"], None]


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ExposureConfig:
    """Immutable settings consumed by GuardedMap instances."""

    map_factory: MapFactory = dict
    on_no_expose: Optional[NoExposeHook] = None

    def with_hook(self, hook: Optional[NoExposeHook]) -> ExposureConfig:
        return replace(self, on_no_expose=hook)

    def with_map_factory(self, factory: MapFactory) -> ExposureConfig:
        return replace(self, map_factory=factory)


_default_config = ExposureConfig()

_UNSET: Any = object()


def get_default_config() -> ExposureConfig:
    """Return the process-wide default config."""
    return _default_config


def configure(
    *,
    map_factory: MapFactory = _UNSET,
    on_no_expose: Optional[NoExposeHook] = _UNSET,
) -> ExposureConfig:
    """Replace fields of the process-wide default config.

    Call once at startup, before any container is enumerated.  Omitted
    fields keep their current value.

    Returns:
        The newly installed default config.
    """
    global _default_config
    config = _default_config
    if map_factory is not _UNSET:
        config = config.with_map_factory(map_factory)
    if on_no_expose is not _UNSET:
        config = config.with_hook(on_no_expose)
    _default_config = config
    logger.debug(
        "Default exposure config set: map_factory=%r hook=%r",
        config.map_factory,
        config.on_no_expose,
    )
    return config


def set_default_config(config: ExposureConfig) -> ExposureConfig:
    """Install *config* as the process-wide default."""
    global _default_config
    _default_config = config
    return config


def reset_default_config() -> ExposureConfig:
    """Restore the built-in default (plain ``dict``, no hook)."""
    return set_default_config(ExposureConfig())


def on_no_expose(hook: NoExposeHook) -> NoExposeHook:
    """Install *hook* on the default config; usable as a decorator."""
    configure(on_no_expose=hook)
    return hook


# ---------------------------------------------------------------------------
# Built-in hooks
# ---------------------------------------------------------------------------

def log_no_exposure(guarded: GuardedMap) -> None:
    """Log a warning naming the keys nobody exposed.  Values are never logged."""
    logger.warning(
        "Guarded container enumerated with nothing exposed; available keys: %s",
        ", ".join(guarded.unexposed_keys()),
    )


def raise_no_exposure(guarded: GuardedMap) -> None:
    """Fail loudly: enumeration before exposure is a programming error."""
    raise NoExposureError(guarded.unexposed_keys())


# ---------------------------------------------------------------------------
# Factory resolution
# ---------------------------------------------------------------------------

def resolve_map_factory(path: str) -> MapFactory:
    """Import a map factory from a dotted path such as ``collections.OrderedDict``.

    Raises:
        ValueError: if the path is malformed or does not name a callable.
    """
    module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise ValueError(f"Map factory path must be 'module.attr', got {path!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ValueError(f"Cannot import module {module_name!r}: {exc}") from exc
    factory = getattr(module, attr, None)
    if not callable(factory):
        raise ValueError(f"{path!r} is not a callable map factory")
    return factory
