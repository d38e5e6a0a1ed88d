from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any

from .json_types import ABSENT, JsonKind, KeyPath, kind_of
from .paths import DEFAULT_SEP, to_key_path

_LOG = logging.getLogger(__name__)

_COPY_ERRORS = (TypeError, ValueError, RecursionError)


def _copy_found(value: Any, operation: str) -> Any:
    # A match that cannot be copied is reported as missing.
    try:
        return deepcopy(value)
    except _COPY_ERRORS as exc:
        _LOG.warning("%s could not copy its result: %s", operation, exc)
        return ABSENT


def _find(obj: Any, key: str) -> Any:
    if kind_of(obj) is not JsonKind.OBJECT:
        return ABSENT
    if key in obj:
        return obj[key]

    for value in obj.values():
        if kind_of(value) is JsonKind.OBJECT:
            found = _find(value, key)
            if found is not ABSENT:
                return found
    return ABSENT


def find_first_by_key(obj: Any, key: str) -> Any:
    """Depth-first search for the first member named `key`.

    A direct member wins; otherwise nested mappings are searched in iteration
    order. Arrays are not searched. Returns a copy of the match, or ABSENT
    when nothing matches.
    """
    found = _find(obj, key)
    if found is ABSENT:
        return ABSENT
    return _copy_found(found, 'find_first_by_key')


def safe_find_first_by_key(obj: Any, key: str) -> Any:
    """Like find_first_by_key, but any fault during the search yields ABSENT."""
    try:
        return find_first_by_key(obj, key)
    except Exception as exc:
        _LOG.warning("Error during key search for %r: %s", key, exc)
        return ABSENT


def get_by_path(obj: Any, path: KeyPath, sep: str = DEFAULT_SEP) -> Any:
    """Retrieve a copy of the value at a key path (list of keys or dot-path string).

    Returns ABSENT on the first missing key or non-mapping step. An empty path
    returns `obj` itself.
    """
    keys = to_key_path(path, sep)
    if keys is None:
        _LOG.warning("get_by_path got an unusable path: %r", path)
        return ABSENT
    if not keys:
        return obj

    val = obj
    for key in keys:
        if kind_of(val) is not JsonKind.OBJECT or key not in val:
            return ABSENT
        val = val[key]
    return _copy_found(val, 'get_by_path')


def set_by_path(obj: Any, path: KeyPath, value: Any, sep: str = DEFAULT_SEP) -> Any:
    """Return a copy of `obj` with `value` placed at `path`.

    Missing or non-mapping intermediates are replaced by new mappings. An empty
    path returns `value`; a non-mapping `obj` is treated as an empty mapping.
    """
    keys = to_key_path(path, sep)
    if keys is None:
        _LOG.warning("set_by_path got an unusable path: %r", path)
        return obj
    try:
        new_value = deepcopy(value)
        data = deepcopy(dict(obj)) if kind_of(obj) is JsonKind.OBJECT else {}
    except Exception as exc:
        _LOG.warning("set_by_path could not copy its input: %s", exc)
        return obj
    if not keys:
        return new_value

    current = data
    for part in keys[:-1]:
        nxt = current.get(part)
        if kind_of(nxt) is not JsonKind.OBJECT:
            nxt = {}
        elif not isinstance(nxt, dict):
            nxt = dict(nxt)
        current[part] = nxt
        current = nxt
    current[keys[-1]] = new_value
    return data
