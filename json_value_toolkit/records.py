from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from copy import deepcopy
from typing import Any, Dict, List

from .comparator import structural_equal
from .json_types import ABSENT, JsonKind, JsonObject, is_finite_number, kind_of

_LOG = logging.getLogger(__name__)

_COPY_ERRORS = (TypeError, ValueError, RecursionError)


def _contains(values: List[Any], candidate: Any) -> bool:
    return any(structural_equal(v, candidate) for v in values)


def merge_unique_by_key(lists: Any, key: str) -> List[JsonObject]:
    """Flatten a list of record lists, keeping the first record per value of `key`.

    Records without `key` are skipped. Non-list input gives [].
    """
    if kind_of(lists) is not JsonKind.ARRAY or not isinstance(key, str):
        return []

    records: List[Any] = []
    for entry in lists:
        if kind_of(entry) is JsonKind.ARRAY:
            records.extend(entry)
        else:
            records.append(entry)

    merged: List[JsonObject] = []
    seen: List[Any] = []
    for record in records:
        if kind_of(record) is not JsonKind.OBJECT or key not in record:
            continue
        if _contains(seen, record[key]):
            continue
        seen.append(record[key])
        try:
            merged.append(deepcopy(record))
        except _COPY_ERRORS as exc:
            _LOG.warning("merge_unique_by_key could not copy a record: %s", exc)
            return []
    return merged


def unique_values_by_key(items: Any, key: str) -> List[Any]:
    """Collect the distinct values found at `key`, in first-seen order.

    Items lacking `key` (or that are not mappings) contribute ABSENT once.
    """
    if kind_of(items) is not JsonKind.ARRAY or not isinstance(key, str):
        return []

    values: List[Any] = []
    for item in items:
        if kind_of(item) is JsonKind.OBJECT and key in item:
            value = item[key]
        else:
            value = ABSENT
        if value is ABSENT:
            if ABSENT not in values:
                values.append(ABSENT)
        elif not _contains(values, value):
            try:
                values.append(deepcopy(value))
            except _COPY_ERRORS as exc:
                _LOG.warning("unique_values_by_key could not copy a value: %s", exc)
                return []
    return values


def remove_empty_values(obj: Any) -> JsonObject:
    """Drop top-level members that are None, '' or ABSENT."""
    if kind_of(obj) is not JsonKind.OBJECT:
        return {}
    try:
        return {
            k: deepcopy(v)
            for k, v in obj.items()
            if v is not None and v is not ABSENT and v != ''
        }
    except _COPY_ERRORS as exc:
        _LOG.warning("remove_empty_values could not copy its input: %s", exc)
        return {}


def to_map(obj: Any) -> Dict[str, Any]:
    """Copy the members of a JSON object into a fresh associative map."""
    if kind_of(obj) is not JsonKind.OBJECT:
        return {}
    try:
        return {k: deepcopy(v) for k, v in obj.items()}
    except Exception as exc:
        _LOG.warning("Error during JSON to map conversion: %s", exc)
        return {}


def _stringify_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, bool):
        return json.dumps(key)
    if isinstance(key, float) and is_finite_number(key):
        return repr(key)
    return str(key)


def from_map(mapping: Any) -> JsonObject:
    """Build a JSON object from a mapping or an iterable of key/value pairs.

    Non-string keys are spelled the way JSON text would spell them: None is
    'null', True is 'true' and 2.0 is '2.0', matching serialize.
    """
    try:
        if isinstance(mapping, Mapping):
            pairs = list(mapping.items())
        elif isinstance(mapping, Iterable) and not isinstance(mapping, (str, bytes)):
            pairs = [tuple(pair) for pair in mapping]
        else:
            return {}
        return {_stringify_key(k): deepcopy(v) for k, v in pairs}
    except Exception as exc:
        _LOG.warning("Error during map to JSON conversion: %s", exc)
        return {}
