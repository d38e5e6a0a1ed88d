from __future__ import annotations

from typing import Any, List, Optional

DEFAULT_SEP = '.'


def escape_key(key: Any, sep: str = DEFAULT_SEP) -> str:
    """Escape one mapping key so it survives as a single dot-path segment.

    The separator becomes '\\' + sep and a backslash becomes a doubled backslash,
    so keys like 'gpt-3.5-turbo' split back into one segment.
    """
    if not isinstance(key, str):
        key = str(key)
    return key.replace('\\', '\\\\').replace(sep, '\\' + sep)


def join_path(parts: List[str], sep: str = DEFAULT_SEP) -> str:
    return sep.join(escape_key(p, sep) for p in parts)


def split_path(path: str, sep: str = DEFAULT_SEP) -> List[str]:
    """Split a dot path on unescaped separators.

    Empty segments are kept, so 'a..b' is ['a', '', 'b'] and '' is [].
    """
    if not path:
        return []

    parts: List[str] = []
    buf: List[str] = []
    escaping = False

    for ch in path:
        if escaping:
            buf.append(ch)
            escaping = False
        elif ch == '\\':
            escaping = True
        elif ch == sep:
            parts.append(''.join(buf))
            buf = []
        else:
            buf.append(ch)

    if escaping:
        # Trailing backslash; treat as literal.
        buf.append('\\')

    parts.append(''.join(buf))
    return parts


def to_key_path(path: Any, sep: str = DEFAULT_SEP) -> Optional[List[str]]:
    """Normalize a dot-path string or a sequence of keys into a list of keys.

    Returns None when `path` is neither, so callers can report a miss.
    """
    if isinstance(path, str):
        return split_path(path, sep)
    if isinstance(path, (list, tuple)):
        if all(isinstance(p, str) for p in path):
            return list(path)
    return None
