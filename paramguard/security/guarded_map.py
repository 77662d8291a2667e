"""Exposure-tracking container for untrusted key/value data.

A :class:`GuardedMap` wraps data that came from outside the process (request
parameters, webhook payloads) and only discloses keys that calling code
explicitly exposed.  Reading a value by key is always allowed; enumeration
and conversion to a plain map only ever include exposed keys.  This guards
against mass-assignment bugs where every incoming field is forwarded
somewhere nobody intended.

Example::

    params = GuardedMap({"name": "bob", "admin": "1"})
    params.expose("name")
    params.to_dict()        # {"name": "bob"}
    params.unexposed_keys() # ["admin"]
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from paramguard.security.errors import UnsupportedOperationError
from paramguard.security.exposure import ExposureConfig, MapFactory, get_default_config

logger = logging.getLogger(__name__)

Source = Union[Mapping, Iterable[Tuple[Any, Any]], "GuardedMap", None]


def normalize_key(key: Any) -> str:
    """Coerce *key* to the string form used for storage and lookup."""
    if isinstance(key, Enum):
        return normalize_key(key.value)
    if isinstance(key, str):
        return str.__str__(key)
    if isinstance(key, bytes):
        return key.decode("utf-8")
    return str(key)


class GuardedMap:
    """Key/value container that only discloses explicitly exposed keys.

    Args:
        source: Initial data.  A mapping, an iterable of pairs, or another
            GuardedMap (only its exposed pairs are copied).  Keys are
            normalized with :func:`normalize_key`; values are copied shallowly.
        map_factory: Builds the plain maps returned by :meth:`to_dict`.
            Defaults to the factory of *config*.
        config: Exposure config supplying the map factory and no-exposure
            hook.  When omitted the process default is read on each use.
    """

    def __init__(
        self,
        source: Source = None,
        map_factory: Optional[MapFactory] = None,
        *,
        config: Optional[ExposureConfig] = None,
    ) -> None:
        self._config = config
        self._map_factory = map_factory
        self._data: Dict[str, Any] = {}
        # dict keeps exposure order; values are unused
        self._exposed: Dict[str, None] = {}
        self._exposed_nothing = True

        if source is not None:
            pairs = source.items() if hasattr(source, "items") else source
            for key, value in pairs:
                self._data[normalize_key(key)] = value

    # -- configuration ------------------------------------------------------

    @property
    def config(self) -> ExposureConfig:
        return self._config if self._config is not None else get_default_config()

    @property
    def map_factory(self) -> MapFactory:
        return self._map_factory if self._map_factory is not None else self.config.map_factory

    def _spawn(self, source: Source = None) -> GuardedMap:
        """New empty-state container sharing this one's class and config."""
        return type(self)(source, self._map_factory, config=self._config)

    def _wrap(self, value: Any) -> Any:
        if isinstance(value, Mapping) and not isinstance(value, GuardedMap):
            return self._spawn(value)
        return value

    # -- exposure -----------------------------------------------------------

    def expose(self, *keys: Any) -> GuardedMap:
        """Approve *keys* for enumeration.  Keys absent from the data are ignored."""
        self._exposed_nothing = False
        for key in keys:
            key = normalize_key(key)
            if key in self._data:
                # materialize nested wrappers so exposure and reads agree
                self.get(key)
                self._exposed[key] = None
        return self

    def expose_all(self) -> GuardedMap:
        return self.expose(*self._data)

    def is_exposed(self, key: Any) -> bool:
        """True iff *key* is present AND exposed."""
        return normalize_key(key) in self._exposed

    __contains__ = is_exposed

    def unexposed_keys(self) -> List[str]:
        """Keys present in the data that nobody has exposed."""
        return [key for key in self._data if key not in self._exposed]

    # -- reads --------------------------------------------------------------

    def get(self, key: Any) -> Any:
        """Return the value for *key*, or None when absent.  Does not expose."""
        key = normalize_key(key)
        if key not in self._data:
            return None
        value = self._data[key]
        wrapped = self._wrap(value)
        if wrapped is not value:
            self._data[key] = wrapped
        return wrapped

    __getitem__ = get

    def fetch(self, key: Any, default: Any = None) -> Any:
        """Like :meth:`get` but returns *default* when the key is absent."""
        if normalize_key(key) not in self._data:
            return default
        return self.get(key)

    def values_at(self, *keys: Any) -> List[Any]:
        return [self.get(key) for key in keys]

    # -- writes -------------------------------------------------------------

    def set(self, key: Any, value: Any) -> None:
        """Store *value* under *key*.  Writing a key exposes it."""
        key = normalize_key(key)
        self._data[key] = self._wrap(value)
        self._exposed[key] = None
        self._exposed_nothing = False

    __setitem__ = set

    def delete(self, key: Any) -> Any:
        """Remove *key* entirely and return its previous value (None if absent)."""
        key = normalize_key(key)
        self._exposed.pop(key, None)
        return self._data.pop(key, None)

    __delitem__ = delete

    def update(self, other: Source = None, **kwargs: Any) -> GuardedMap:
        """Write every entry of *other* and *kwargs*; all of them become exposed."""
        if other is not None:
            pairs = other.items() if hasattr(other, "items") else other
            for key, value in pairs:
                self.set(key, value)
        for key, value in kwargs.items():
            self.set(key, value)
        return self

    def merge(self, other: Source = None, **kwargs: Any) -> GuardedMap:
        """Non-mutating :meth:`update`: returns an updated duplicate."""
        return self.duplicate().update(other, **kwargs)

    # -- derived containers -------------------------------------------------

    def duplicate(self) -> GuardedMap:
        """Shallow copy with independent data and exposure state.

        Nested containers already wrapped are shared with the copy.
        """
        clone = self._spawn()
        clone._data = dict(self._data)
        clone._exposed = dict(self._exposed)
        clone._exposed_nothing = self._exposed_nothing
        return clone

    __copy__ = duplicate

    def slice(self, *keys: Any) -> GuardedMap:
        """New container holding only the requested keys that exist, all exposed."""
        picked = {}
        for key in keys:
            key = normalize_key(key)
            if key in self._data:
                picked[key] = self.get(key)
        return self._spawn(picked).expose(*picked)

    # -- enumeration --------------------------------------------------------

    def _check_exposure(self) -> None:
        if self._exposed_nothing and self._data:
            hook = self.config.on_no_expose
            if hook is not None:
                logger.debug("No keys exposed on %r; running no-exposure hook", self)
                hook(self)

    def items(self) -> List[Tuple[str, Any]]:
        """Exposed (key, value) pairs in exposure order."""
        self._check_exposure()
        return [(key, self.get(key)) for key in self._exposed]

    def keys(self) -> List[str]:
        self._check_exposure()
        return list(self._exposed)

    def values(self) -> List[Any]:
        return [value for _, value in self.items()]

    def each(self, callback: Callable[[str, Any], Any]) -> None:
        for key, value in self.items():
            callback(key, value)

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self.items())

    def __len__(self) -> int:
        return len(self._exposed)

    def to_dict(self) -> Any:
        """Plain map of the exposed keys; nested containers are converted too."""
        self._check_exposure()
        out = self.map_factory()
        for key in self._exposed:
            value = self.get(key)
            out[key] = value.to_dict() if isinstance(value, GuardedMap) else value
        return out

    # -- refused operations -------------------------------------------------

    def slice_inplace(self, *keys: Any) -> None:
        raise UnsupportedOperationError("slice_inplace")

    def popitem(self) -> None:
        raise UnsupportedOperationError("popitem")

    def setdefault(self, key: Any, default: Any = None) -> None:
        raise UnsupportedOperationError("setdefault")

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} exposed={list(self._exposed)!r} "
            f"unexposed={len(self._data) - len(self._exposed)}>"
        )
