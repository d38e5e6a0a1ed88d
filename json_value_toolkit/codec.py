from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any, Dict, List, Optional, Union

from .json_types import (
    ABSENT,
    OMIT,
    Failure,
    FailureKind,
    JsonKind,
    JsonValue,
    is_failure,
    is_finite_number,
    kind_of,
)

_LOG = logging.getLogger(__name__)

Transform = Callable[[str, Any], Any]

_COMPACT_SEPARATORS = (',', ':')


class _NotRepresentable(ValueError):
    pass


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _json_key(key: Any) -> str:
    # Same coercions json.dumps applies to dict keys.
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, bool):
        return json.dumps(key)
    if isinstance(key, int):
        return str(key)
    if isinstance(key, float) and is_finite_number(key):
        return repr(key)
    raise _NotRepresentable(f"keys must be str, int, float, bool or None, not {type(key).__name__}")


def _prepare(value: Any, key: str, transform: Optional[Transform], ancestors: List[int]) -> Any:
    """Walk `value` pre-order and build a plain tree json.dumps can render.

    Returns OMIT when the node should be dropped from its parent.
    """
    if transform is not None:
        value = transform(key, value)
    if value is OMIT or value is ABSENT:
        return OMIT

    kind = kind_of(value)
    if kind is JsonKind.NUMBER:
        if not is_finite_number(value):
            raise _NotRepresentable(f"non-finite number {value!r} at {key!r}")
        return value
    if kind in (JsonKind.NULL, JsonKind.BOOLEAN, JsonKind.STRING):
        return value
    if kind is JsonKind.UNKNOWN:
        raise _NotRepresentable(f"{type(value).__name__} at {key!r} is not a JSON value")

    marker = id(value)
    if marker in ancestors:
        raise _NotRepresentable(f"circular reference at {key!r}")
    ancestors.append(marker)
    try:
        if kind is JsonKind.ARRAY:
            items: List[Any] = []
            for idx, item in enumerate(value):
                prepared = _prepare(item, str(idx), transform, ancestors)
                items.append(None if prepared is OMIT else prepared)
            return items

        members: Dict[str, Any] = {}
        for k, v in value.items():
            prepared = _prepare(v, _json_key(k), transform, ancestors)
            if prepared is not OMIT:
                members[_json_key(k)] = prepared
        return members
    finally:
        ancestors.pop()


def serialize(
    value: Any,
    transform: Optional[Transform] = None,
    indent: Optional[int] = None,
) -> Union[str, Failure]:
    """Render a JSON value to text, or return a NON_REPRESENTABLE Failure.

    `transform(key, value)` sees every node before it is rendered; returning
    OMIT drops a mapping member (array slots become null). ABSENT members are
    dropped the same way. `indent=None` gives compact output.
    """
    try:
        prepared = _prepare(value, '', transform, [])
        if prepared is OMIT:
            raise _NotRepresentable('the root value was omitted')
        separators = _COMPACT_SEPARATORS if indent is None else None
        return json.dumps(
            prepared,
            indent=indent,
            separators=separators,
            ensure_ascii=False,
            allow_nan=False,
        )
    except Exception as exc:
        _LOG.warning("serialize failed: %s", exc)
        return Failure(FailureKind.NON_REPRESENTABLE, str(exc))


def parse_result(text: Any) -> Union[JsonValue, Failure]:
    """Parse JSON text, reporting a MALFORMED_INPUT Failure instead of raising."""
    if text is None:
        return Failure(FailureKind.MALFORMED_INPUT, 'empty input')
    if not isinstance(text, (str, bytes, bytearray)):
        return Failure(FailureKind.MALFORMED_INPUT, f"expected text, got {type(text).__name__}")
    if not text:
        return Failure(FailureKind.MALFORMED_INPUT, 'empty input')
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        return Failure(FailureKind.MALFORMED_INPUT, str(exc))


def deserialize(text: Any, fallback: Any = None) -> Any:
    result = parse_result(text)
    if is_failure(result):
        _LOG.warning("deserialize fell back to default: %s", result.reason)
        return fallback
    return result


def is_well_formed(text: Any) -> bool:
    result = parse_result(text)
    if is_failure(result):
        _LOG.debug("ill-formed JSON text: %s", result.reason)
        return False
    return True


def clone(value: Any, transform: Optional[Transform] = None) -> Union[JsonValue, Failure]:
    """Deep copy a JSON value by round-tripping it through text.

    Anything outside the JSON domain (callables, cycles, NaN) makes the whole
    copy fail rather than producing a partial one.
    """
    text = serialize(value, transform)
    if is_failure(text):
        return text
    return parse_result(text)


def drop_callables(key: str, value: Any) -> Any:
    """Serialization transform that silently drops callable members."""
    if callable(value):
        return OMIT
    return value


def read_json_text(file_obj) -> str:
    """Read JSON text from an uploaded file object, a path or raw bytes."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if isinstance(file_obj, (bytes, bytearray)):
        return bytes(file_obj).decode('utf-8')

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return content

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()
