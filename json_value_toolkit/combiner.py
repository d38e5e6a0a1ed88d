from __future__ import annotations

import logging
from typing import Any, Dict, Iterable

from .codec import clone, drop_callables
from .json_types import JsonObject, is_failure, is_object

_LOG = logging.getLogger(__name__)


def shallow_combine(target: Any, source: Any) -> Any:
    """Combine two mappings at the top level only.

    A key present in both takes the value from `source` as a whole, even when
    both values are nested mappings. Returns `target` unchanged when either
    operand is not a mapping or cannot be serialized.
    """
    if not is_object(target) or not is_object(source):
        _LOG.warning("shallow_combine requires two mappings")
        return target

    target_copy = clone(target)
    source_copy = clone(source)
    if is_failure(target_copy) or is_failure(source_copy):
        _LOG.warning("shallow_combine could not copy its operands")
        return target

    combined: JsonObject = dict(target_copy)
    combined.update(source_copy)
    return combined


def _combine_into(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in updates.items():
        existing = base.get(key)
        if is_object(value):
            base[key] = _combine_into(existing if is_object(existing) else {}, value)
        else:
            base[key] = value
    return base


def recursive_combine(target: Any, updates: Any) -> Any:
    """Apply `updates` to a copy of `target`, descending into nested mappings.

    Keys only present in `target` survive; anything that is not a mapping on
    the incoming side replaces what was there. Callable members of `updates`
    are dropped. Returns `target` unchanged on malformed input.
    """
    if not is_object(target) or not is_object(updates):
        _LOG.warning("recursive_combine requires two mappings")
        return target

    base = clone(target)
    incoming = clone(updates, drop_callables)
    if is_failure(base) or is_failure(incoming):
        _LOG.warning("recursive_combine could not copy its operands")
        return target

    return _combine_into(base, incoming)


merge = recursive_combine


def filter_keys(obj: Any, allowed_keys: Iterable[str]) -> JsonObject:
    """Keep only the members of `obj` named in `allowed_keys`.

    Output order follows `obj`, not `allowed_keys`.
    """
    if not is_object(obj):
        _LOG.warning("filter_keys requires a mapping")
        return {}

    if isinstance(allowed_keys, str):
        _LOG.warning("filter_keys expects a collection of keys, not a single string")
        return {}

    try:
        allowed = set(allowed_keys)
    except TypeError as exc:
        _LOG.warning("filter_keys got unusable allowed_keys: %s", exc)
        return {}

    copied = clone(obj, drop_callables)
    if is_failure(copied):
        return {}
    return {k: v for k, v in copied.items() if k in allowed}


def remove_absent(obj: Any) -> Any:
    """Drop ABSENT members at every depth; returns `obj` itself if it cannot be copied."""
    copied = clone(obj)
    if is_failure(copied):
        return obj
    return copied
