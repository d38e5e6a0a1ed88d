from __future__ import annotations

import logging
from typing import Optional, Tuple

from .accessors import find_first_by_key, get_by_path
from .codec import is_well_formed, parse_result, read_json_text, serialize
from .combiner import recursive_combine, shallow_combine
from .comparator import serialized_equal, structural_equal
from .flattening import flatten
from .json_types import ABSENT, is_failure, is_object
from .records import merge_unique_by_key, remove_empty_values, unique_values_by_key

_LOG = logging.getLogger(__name__)

PRETTY_INDENT = 2


def _parse(text: Optional[str], label: str):
    """Parse one text box; returns (value, None) or (None, error message)."""
    result = parse_result(text)
    if is_failure(result):
        return None, f"{label}: invalid JSON ({result.reason})."
    return result, None


def load_json_upload(file_obj) -> Tuple[str, str]:
    if file_obj is None:
        return "", "No file uploaded."
    try:
        text = read_json_text(file_obj)
    except (OSError, ValueError) as exc:
        return "", f"Error reading file: {str(exc)}"
    if not is_well_formed(text):
        return text, "Loaded file, but it is not valid JSON."
    return text, "Successfully loaded."


def format_json_handler(text: Optional[str], indent: Optional[int] = PRETTY_INDENT) -> Tuple[str, str]:
    value, error = _parse(text, "Input")
    if error:
        return "", error
    indent = int(indent) if indent else None
    rendered = serialize(value, indent=indent)
    if is_failure(rendered):
        return "", f"Error during formatting: {rendered.reason}"
    return rendered, "Compact output." if indent is None else f"Indented by {indent}."


def validate_json_handler(text: Optional[str]) -> str:
    if is_well_formed(text):
        return "Valid JSON."
    return "Invalid JSON."


def compare_json_handler(left_text: Optional[str], right_text: Optional[str]) -> str:
    left, error = _parse(left_text, "Left")
    if error:
        return error
    right, error = _parse(right_text, "Right")
    if error:
        return error
    return (
        f"Serialized equal: {serialized_equal(left, right)} | "
        f"Structurally equal: {structural_equal(left, right)}"
    )


def combine_json_handler(target_text: Optional[str], source_text: Optional[str], mode: str = "Recursive"):
    target, error = _parse(target_text, "Target")
    if error:
        return None, error
    source, error = _parse(source_text, "Source")
    if error:
        return None, error
    if not is_object(target) or not is_object(source):
        return None, "Both documents must be JSON objects."

    if mode == "Shallow":
        return shallow_combine(target, source), "Top-level keys from the source replaced the target's."
    return recursive_combine(target, source), "Nested objects were combined key by key."


def navigate_json_handler(text: Optional[str], path: Optional[str], key: Optional[str]):
    data, error = _parse(text, "Document")
    if error:
        return None, error

    if key:
        found = find_first_by_key(data, key)
        if found is ABSENT:
            return None, f"No member named '{key}'."
        return found, f"First member named '{key}'."

    found = get_by_path(data, path or "")
    if found is ABSENT:
        return None, f"Nothing at path '{path}'."
    return found, f"Value at path '{path or '(root)'}'."


def flatten_json_handler(text: Optional[str], drop_empty: bool = False):
    data, error = _parse(text, "Document")
    if error:
        return None, error
    if not is_object(data):
        return None, "Only JSON objects can be flattened."
    flat = flatten(data)
    if drop_empty:
        flat = remove_empty_values(flat)
    return flat, f"Flattened into {len(flat)} fields."


def dedupe_records_handler(text: Optional[str], key: Optional[str]):
    data, error = _parse(text, "Records")
    if error:
        return None, None, error
    if not key:
        return None, None, "Enter a key to deduplicate on."
    if not isinstance(data, list):
        return None, None, "Records must be a JSON array of arrays of objects."

    lists = data if all(isinstance(entry, list) for entry in data) else [data]
    merged = merge_unique_by_key(lists, key)
    records = [rec for entry in lists for rec in entry]
    distinct = [None if v is ABSENT else v for v in unique_values_by_key(records, key)]
    _LOG.info("deduplicated %d records into %d on %r", len(records), len(merged), key)
    return merged, distinct, f"Kept {len(merged)} of {len(records)} records."
