"""Request parameters as guarded containers for FastAPI.

Builds a :class:`GuardedParams` from an incoming request (path params,
bracket-notation query string, JSON-object or urlencoded body) without
exposing anything.  Route handlers receive it through the
:func:`guarded_params` dependency and expose exactly the fields they trust::

    @app.post("/users")
    async def create_user(params: GuardedParams = Depends(guarded_params)):
        user = params.get("user").expose("name", "email")
        return user.to_dict()
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple
from urllib.parse import parse_qsl, urlencode

from fastapi import HTTPException, Request

from paramguard.security.exposure import ExposureConfig
from paramguard.security.guarded_map import GuardedMap

logger = logging.getLogger("paramguard.api")

_NAME_RE = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")
_PART_RE = re.compile(r"\[([^\[\]]*)\]")


# ---------------------------------------------------------------------------
# Bracket-notation query strings
# ---------------------------------------------------------------------------

def _split_name(name: str) -> List[str]:
    match = _NAME_RE.match(name)
    if not match:
        return [name]
    parts = [match.group(1)] + _PART_RE.findall(match.group(2))
    # "[]" is only understood as the final segment
    if "" in parts[1:-1]:
        return [name]
    return parts


def _assign(target: Dict[str, Any], parts: List[str], value: Any) -> None:
    key, rest = parts[0], parts[1:]
    if not rest:
        target[key] = value
    elif rest == [""]:
        existing = target.get(key)
        if not isinstance(existing, list):
            existing = target[key] = []
        existing.append(value)
    else:
        child = target.get(key)
        if not isinstance(child, dict):
            child = target[key] = {}
        _assign(child, rest, value)


def parse_nested_query(pairs: Iterable[Tuple[str, Any]]) -> Dict[str, Any]:
    """Fold ``a[b]=1`` / ``c[]=2`` style pairs into nested dicts and lists.

    Plain repeated names keep the last value.  A later scalar and a later
    nested assignment to the same name replace each other.
    """
    result: Dict[str, Any] = {}
    for name, value in pairs:
        _assign(result, _split_name(name), value)
    return result


def _flatten(value: Any, prefix: str) -> Iterator[Tuple[str, str]]:
    if isinstance(value, Mapping):
        for key in sorted(value):
            yield from _flatten(value[key], f"{prefix}[{key}]" if prefix else key)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _flatten(item, f"{prefix}[]")
    else:
        yield prefix, "" if value is None else str(value)


# ---------------------------------------------------------------------------
# GuardedParams
# ---------------------------------------------------------------------------

class GuardedParams(GuardedMap):
    """GuardedMap with helpers for request parameters."""

    def is_blank(self) -> bool:
        """True when the request carried no parameters at all."""
        return not self._data

    def is_present(self) -> bool:
        return not self.is_blank()

    def to_query(self, prefix: Optional[str] = None) -> str:
        """Encode the exposed data as a bracket-notation query string.

        Keys are sorted at every level.  With *prefix*, every key is nested
        under it (``prefix[key]=value``).
        """
        data = self.to_dict()
        if prefix and data:
            data = {prefix: data}
        return urlencode(list(_flatten(data, "")))


# ---------------------------------------------------------------------------
# Request adapter
# ---------------------------------------------------------------------------

async def _read_body(request: Request) -> Dict[str, Any]:
    content_type = request.headers.get("content-type", "")
    body = await request.body()
    if not body:
        return {}

    if "application/json" in content_type:
        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail="Malformed JSON body") from exc
        if not isinstance(payload, dict):
            logger.debug("Ignoring non-object JSON body on %s", request.url.path)
            return {}
        return payload

    if "application/x-www-form-urlencoded" in content_type:
        text = body.decode("utf-8", errors="replace")
        return parse_nested_query(parse_qsl(text, keep_blank_values=True))

    return {}


async def build_params(
    request: Request,
    config: Optional[ExposureConfig] = None,
) -> GuardedParams:
    """Collect every parameter of *request* into an unexposed GuardedParams.

    Precedence (later wins): query string, body, path params.
    """
    data: Dict[str, Any] = parse_nested_query(request.query_params.multi_items())
    data.update(await _read_body(request))
    data.update(request.path_params)
    return GuardedParams(data, config=config)


async def guarded_params(request: Request) -> GuardedParams:
    """FastAPI dependency returning the request's GuardedParams.

    Built once per request and cached on ``request.state.params``.  Uses
    the config installed on ``app.state.paramguard_config`` when present.
    """
    params = getattr(request.state, "params", None)
    if params is None:
        config = getattr(request.app.state, "paramguard_config", None)
        params = await build_params(request, config=config)
        request.state.params = params
    return params
