from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Sequence, Union

JsonPrimitive = Union[str, int, float, bool, None]
JsonArray = List[Any]
JsonObject = Dict[str, Any]
JsonValue = Union[JsonPrimitive, JsonArray, JsonObject]
KeyPath = Union[Sequence[str], str]


class JsonKind(Enum):
    NULL = 'null'
    BOOLEAN = 'boolean'
    NUMBER = 'number'
    STRING = 'string'
    ARRAY = 'array'
    OBJECT = 'object'
    UNKNOWN = 'unknown'


def kind_of(value: Any) -> JsonKind:
    """Classify a value into its JSON variant.

    bool is checked before int because bool subclasses int. Tuples count as
    arrays and any Mapping counts as an object; everything else is UNKNOWN.
    """
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, Mapping):
        return JsonKind.OBJECT
    return JsonKind.UNKNOWN


def is_object(value: Any) -> bool:
    return kind_of(value) is JsonKind.OBJECT


def is_array(value: Any) -> bool:
    return kind_of(value) is JsonKind.ARRAY


def is_finite_number(value: Any) -> bool:
    if kind_of(value) is not JsonKind.NUMBER:
        return False
    # math.isfinite overflows on ints beyond float range.
    return isinstance(value, int) or math.isfinite(value)


class Absent:
    """Marker for "no value at this location", distinct from None."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'ABSENT'

    def __reduce__(self):
        return (Absent, ())


class Omit:
    """Returned from a serialization transform to drop the current member."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'OMIT'

    def __reduce__(self):
        return (Omit, ())


ABSENT = Absent()
OMIT = Omit()


class FailureKind(Enum):
    MALFORMED_INPUT = 'malformed-input'
    NON_REPRESENTABLE = 'non-representable'


@dataclass(frozen=True)
class Failure:
    """A falsy result standing in for a value that could not be produced."""

    kind: FailureKind
    reason: str = ''

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.reason}" if self.reason else self.kind.value


def is_failure(value: Any) -> bool:
    return isinstance(value, Failure)
