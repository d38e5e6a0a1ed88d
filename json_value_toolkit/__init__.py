"""Safe, stateless helpers for values in the JSON domain.

The gradio showcase lives in `app.py`. This package contains pure functions that:
- serialize, parse and clone JSON values without raising
- compare values by text or by structure
- combine mappings shallowly or recursively
- navigate, flatten and deduplicate nested data
"""

import logging

from .accessors import find_first_by_key, get_by_path, safe_find_first_by_key, set_by_path
from .codec import clone, deserialize, is_well_formed, parse_result, serialize
from .combiner import filter_keys, merge, recursive_combine, remove_absent, shallow_combine
from .comparator import serialized_equal, structural_equal
from .flattening import flatten, unflatten
from .json_types import (
    ABSENT,
    OMIT,
    Absent,
    Failure,
    FailureKind,
    JsonKind,
    is_failure,
    kind_of,
)
from .records import (
    from_map,
    merge_unique_by_key,
    remove_empty_values,
    to_map,
    unique_values_by_key,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ABSENT",
    "OMIT",
    "Absent",
    "Failure",
    "FailureKind",
    "JsonKind",
    "clone",
    "deserialize",
    "filter_keys",
    "find_first_by_key",
    "flatten",
    "from_map",
    "get_by_path",
    "is_failure",
    "is_well_formed",
    "kind_of",
    "merge",
    "merge_unique_by_key",
    "parse_result",
    "recursive_combine",
    "remove_absent",
    "remove_empty_values",
    "safe_find_first_by_key",
    "serialize",
    "serialized_equal",
    "set_by_path",
    "shallow_combine",
    "structural_equal",
    "to_map",
    "unflatten",
    "unique_values_by_key",
]
