import io
import json
import logging
from typing import TYPE_CHECKING

import pytest

from json_value_toolkit.codec import (
    clone,
    deserialize,
    drop_callables,
    is_well_formed,
    parse_result,
    read_json_text,
    serialize,
)
from json_value_toolkit.json_types import ABSENT, OMIT, FailureKind, is_failure

if TYPE_CHECKING:
    from pathlib import Path


class TestSerialize:
    def test_compact_by_default(self) -> None:
        assert serialize({"a": 1, "b": [1, 2], "c": None}) == '{"a":1,"b":[1,2],"c":null}'

    def test_indent_pretty_prints(self) -> None:
        value = {"a": 1, "b": [True, "x"]}
        assert serialize(value, indent=2) == json.dumps(value, indent=2)

    def test_preserves_insertion_order(self) -> None:
        assert serialize({"b": 1, "a": 2}) == '{"b":1,"a":2}'

    def test_emits_non_ascii_literally(self) -> None:
        assert serialize("é") == '"é"'

    def test_tuples_render_as_arrays(self) -> None:
        assert serialize((1, 2)) == "[1,2]"

    def test_non_string_keys_are_coerced(self) -> None:
        assert serialize({1: "x", None: "y", 2.5: "z"}) == '{"1":"x","null":"y","2.5":"z"}'
        assert serialize({False: 0}) == '{"false":0}'

    def test_huge_integers(self) -> None:
        assert serialize([10**400]) == "[" + str(10**400) + "]"

    def test_shared_references_are_not_cycles(self) -> None:
        shared = [1]
        assert serialize({"a": shared, "b": shared}) == '{"a":[1],"b":[1]}'

    def test_absent_members_are_omitted(self) -> None:
        assert serialize({"a": ABSENT, "b": 1}) == '{"b":1}'

    def test_absent_array_elements_become_null(self) -> None:
        assert serialize([1, ABSENT]) == "[1,null]"

    @pytest.mark.parametrize(
        "value",
        [
            {"f": lambda: 1},
            [float("nan")],
            {"x": float("inf")},
            {1, 2},
            b"bytes",
            {(1, 2): "tuple key"},
            ABSENT,
        ],
        ids=["callable", "nan", "infinity", "set", "bytes", "tuple_key", "absent_root"],
    )
    def test_non_representable_values_fail(self, value: object) -> None:
        result = serialize(value)
        assert is_failure(result)
        assert result.kind is FailureKind.NON_REPRESENTABLE

    def test_cycles_fail(self) -> None:
        value: dict = {}
        value["self"] = value
        result = serialize(value)
        assert is_failure(result)
        assert "circular" in result.reason

    def test_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="json_value_toolkit.codec"):
            serialize({"f": print})
        assert "serialize failed" in caplog.text


class TestSerializeTransform:
    def test_transform_can_omit_members(self) -> None:
        def hide_secret(key, value):
            return OMIT if key == "secret" else value

        assert serialize({"a": 1, "secret": 2}, hide_secret) == '{"a":1}'

    def test_transform_omitting_array_element_gives_null(self) -> None:
        def drop_twos(key, value):
            return OMIT if value == 2 else value

        assert serialize([1, 2, 3], drop_twos) == "[1,null,3]"

    def test_transform_rewrites_values(self) -> None:
        def scale(key, value):
            if isinstance(value, int) and not isinstance(value, bool):
                return value * 10
            return value

        assert serialize({"a": 1, "b": [2]}, scale) == '{"a":10,"b":[20]}'

    def test_transform_sees_nodes_pre_order(self) -> None:
        seen = []

        def record(key, value):
            seen.append(key)
            return value

        serialize({"a": 1, "b": [2]}, record)
        assert seen == ["", "a", "b", "0"]

    def test_transform_errors_become_failures(self) -> None:
        def explode(key, value):
            raise RuntimeError("boom")

        assert is_failure(serialize({"a": 1}, explode))

    def test_drop_callables(self) -> None:
        assert serialize({"a": 1, "f": print}, drop_callables) == '{"a":1}'


class TestDeserialize:
    def test_parses_text(self) -> None:
        assert deserialize('{"a": [1, 2.5, "x", null, true]}') == {"a": [1, 2.5, "x", None, True]}

    def test_parses_bytes(self) -> None:
        assert deserialize(b"[1]") == [1]

    def test_malformed_returns_fallback(self) -> None:
        assert deserialize("{not json", {}) == {}

    def test_fallback_defaults_to_none(self) -> None:
        assert deserialize("{not json") is None

    def test_null_is_not_a_fallback(self) -> None:
        assert deserialize("null", fallback=5) is None

    @pytest.mark.parametrize(
        "text",
        ["NaN", "[Infinity]", "-Infinity", "", None, 123, '{"a":}', "[1,]"],
        ids=["nan", "infinity", "negative_infinity", "empty", "none", "not_text", "missing_value", "trailing_comma"],
    )
    def test_invalid_input_returns_fallback(self, text: object) -> None:
        assert deserialize(text, fallback="fallback") == "fallback"

    def test_fallback_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="json_value_toolkit.codec"):
            deserialize("{bad")
        assert "deserialize fell back" in caplog.text


class TestParseResult:
    def test_success(self) -> None:
        assert parse_result('{"a":1}') == {"a": 1}

    def test_failure_kind(self) -> None:
        result = parse_result("{bad")
        assert is_failure(result)
        assert result.kind is FailureKind.MALFORMED_INPUT


class TestIsWellFormed:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("{}", True),
            ("[]", True),
            ('"text"', True),
            ("0", True),
            ("null", True),
            ("", False),
            (None, False),
            ("   ", False),
            ('{"a":}', False),
            ("Infinity", False),
            ("{'a': 1}", False),
        ],
    )
    def test_is_well_formed(self, text: object, expected: bool) -> None:
        assert is_well_formed(text) is expected


class TestClone:
    def test_clone_is_equal_but_independent(self) -> None:
        original = {"a": {"b": [1, 2]}, "c": "x"}
        copied = clone(original)
        assert copied == original
        copied["a"]["b"].append(3)
        assert original == {"a": {"b": [1, 2]}, "c": "x"}

    def test_clone_converts_tuples(self) -> None:
        assert clone({"t": (1, 2)}) == {"t": [1, 2]}

    def test_clone_drops_absent_members(self) -> None:
        assert clone({"a": ABSENT, "b": 2}) == {"b": 2}

    def test_clone_fails_on_callables(self) -> None:
        result = clone({"f": lambda: 1})
        assert is_failure(result)
        assert result.kind is FailureKind.NON_REPRESENTABLE

    def test_clone_fails_on_cycles(self) -> None:
        value: list = []
        value.append(value)
        assert is_failure(clone(value))


class TestReadJsonText:
    def test_reads_bytes(self) -> None:
        assert read_json_text(b'{"a":1}') == '{"a":1}'

    def test_reads_text_stream(self) -> None:
        stream = io.StringIO('{"a":1}')
        stream.read()
        assert read_json_text(stream) == '{"a":1}'

    def test_reads_binary_stream(self) -> None:
        assert read_json_text(io.BytesIO(b"[1]")) == "[1]"

    def test_reads_path(self, tmp_path: "Path") -> None:
        path = tmp_path / "data.json"
        path.write_text('{"é": 1}', encoding="utf-8")
        assert read_json_text(str(path)) == '{"é": 1}'

    def test_reads_object_with_name(self, tmp_path: "Path") -> None:
        path = tmp_path / "upload.json"
        path.write_text("[]", encoding="utf-8")

        class Upload:
            name = str(path)

        assert read_json_text(Upload()) == "[]"

    def test_none_raises(self) -> None:
        with pytest.raises(ValueError, match="No file uploaded"):
            read_json_text(None)
