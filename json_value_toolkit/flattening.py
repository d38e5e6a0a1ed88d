from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Dict, Optional

from .json_types import JsonKind, JsonObject, kind_of
from .paths import DEFAULT_SEP, escape_key, split_path

_LOG = logging.getLogger(__name__)


def _flatten_into(out: Dict[str, Any], obj: Any, prefix: Optional[str], sep: str, escape: bool) -> None:
    for key, value in obj.items():
        segment = escape_key(key, sep) if escape else str(key)
        # An empty key still takes a separator once it has a parent.
        new_key = segment if prefix is None else f"{prefix}{sep}{segment}"
        if kind_of(value) is JsonKind.OBJECT:
            _flatten_into(out, value, new_key, sep, escape)
        else:
            out[new_key] = deepcopy(value)


def flatten(obj: Any, prefix: str = '', sep: str = DEFAULT_SEP, escape: bool = False) -> JsonObject:
    """Flatten nested mappings into one level of dot-joined keys.

    {'a': {'b': 1, 'c': {'d': 2}}} becomes {'a.b': 1, 'a.c.d': 2}. Arrays are
    kept whole as leaf values and empty nested mappings leave no entry. With
    `escape=True` separators inside keys are escaped so unflatten can undo it.
    Non-mapping input gives {}.
    """
    if kind_of(obj) is not JsonKind.OBJECT:
        return {}

    out: Dict[str, Any] = {}
    try:
        _flatten_into(out, obj, prefix or None, sep, escape)
    except Exception as exc:
        _LOG.warning("flatten failed: %s", exc)
        return {}
    return out


def unflatten(flat: Any, sep: str = DEFAULT_SEP) -> JsonObject:
    """Rebuild nested mappings from dot-joined keys.

    Keys are split on unescaped separators. When one key is both a leaf and a
    branch (e.g. 'a' and 'a.b'), the entry that comes later wins.
    """
    if kind_of(flat) is not JsonKind.OBJECT:
        return {}

    data: JsonObject = {}
    for key, value in flat.items():
        parts = split_path(str(key), sep) or ['']
        current = data
        for part in parts[:-1]:
            nxt = current.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                current[part] = nxt
            current = nxt
        try:
            current[parts[-1]] = deepcopy(value)
        except (TypeError, ValueError, RecursionError) as exc:
            _LOG.warning("unflatten could not copy the value at %r: %s", key, exc)
            return {}
    return data
