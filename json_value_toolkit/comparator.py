from __future__ import annotations

import logging
from typing import Any

from .codec import serialize
from .json_types import JsonKind, is_failure, kind_of

_LOG = logging.getLogger(__name__)


def serialized_equal(a: Any, b: Any) -> bool:
    """Compare two values by their compact JSON text.

    Cheap but sensitive to key insertion order: {'a': 1, 'b': 2} and
    {'b': 2, 'a': 1} are not equal here. Use structural_equal for that.
    """
    left = serialize(a)
    right = serialize(b)
    if is_failure(left) or is_failure(right):
        _LOG.warning("serialized_equal could not serialize both operands")
        return False
    return left == right


def _equal(a: Any, b: Any) -> bool:
    if a is b:
        return True

    kind = kind_of(a)
    if kind is not kind_of(b):
        return False

    if kind is JsonKind.ARRAY:
        if len(a) != len(b):
            return False
        for x, y in zip(a, b):
            if not _equal(x, y):
                return False
        return True

    if kind is JsonKind.OBJECT:
        if len(a) != len(b):
            return False
        for key, value in a.items():
            if key not in b or not _equal(value, b[key]):
                return False
        return True

    if kind is JsonKind.UNKNOWN:
        return False

    return a == b


def structural_equal(a: Any, b: Any) -> bool:
    """Decide whether two values denote the same JSON value.

    Mapping key order is ignored; array order is not. Booleans never equal
    numbers, and values outside the JSON domain are equal only to themselves.
    """
    try:
        return _equal(a, b)
    except RecursionError:
        _LOG.warning("structural_equal exceeded the recursion limit")
        return False
