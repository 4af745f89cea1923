"""Tests for YAMLValue navigation, scalar extraction and classification."""

import datetime

import pytest

from confbridge.adapters.base import Kind, Value
from confbridge.errors import CoercionError, ConfigError, ParseError
from confbridge.yaml.value import YAMLValue, new_value, parse

SAMPLE = b"a: 1\nb: [2,3]\nc: {d: 4}\n"


class TestLookup:
    """Tests for YAMLValue.lookup."""

    def test_sample_document(self):
        """Keys and nested keys resolve; absent keys return None."""
        root = parse(SAMPLE)
        b = root.lookup("b")
        assert b is not None
        assert [(label, v.int64()) for label, v in b.list()] == [("0", 2), ("1", 3)]
        assert root.lookup("c", "d").int64() == 4
        assert root.lookup("z") is None

    def test_returns_value_instances(self):
        root = parse(SAMPLE)
        assert isinstance(root, Value)
        assert isinstance(root.lookup("a"), YAMLValue)

    def test_empty_path_returns_same_node(self):
        root = parse(SAMPLE)
        assert root.lookup().interface() == root.interface()

    def test_list_index_as_string_or_int(self):
        root = parse(SAMPLE)
        assert root.lookup("b", "1").int64() == 3
        assert root.lookup("b", 0).int64() == 2

    def test_out_of_range_and_negative_indices_are_absent(self):
        root = parse(SAMPLE)
        assert root.lookup("b", 2) is None
        assert root.lookup("b", -1) is None
        assert root.lookup("b", "x") is None

    def test_non_ascii_digits_are_not_indices(self):
        root = parse(b"[1, 2]")
        assert root.lookup("\u00b2") is None
        assert root.lookup("\u0661") is None

    def test_descending_through_scalar_is_absent(self):
        root = parse(SAMPLE)
        assert root.lookup("a", "deeper") is None

    def test_integer_key_on_mapping(self):
        """Integer segments match stringified mapping keys."""
        root = parse(b"ports:\n  80: http\n")
        assert root.lookup("ports", 80).string() == "http"
        assert root.lookup("ports", "80").string() == "http"

    def test_null_value_is_found(self):
        """A key holding null is present, not absent."""
        root = parse(b"a: ~\n")
        found = root.lookup("a")
        assert found is not None
        assert found.kind() is Kind.NULL

    def test_wildcard_maps_rest_of_path_over_list(self):
        root = parse(
            b"servers:\n"
            b"  - name: a\n"
            b"    port: 1\n"
            b"  - name: b\n"
        )
        assert root.lookup("servers", "*", "name").interface() == ["a", "b"]
        assert root.lookup("servers", "*", "port").interface() == [1]
        assert root.lookup("servers", "*", "missing") is None


class TestScalars:
    """Tests for typed scalar extraction."""

    def test_string(self):
        assert parse(b"x: hello\n").lookup("x").string() == "hello"

    def test_number_as_string(self):
        assert parse(b"x: 8080\n").lookup("x").string() == "8080"

    def test_string_list(self):
        root = parse(b"hosts: [a, b, 3]\n")
        assert root.lookup("hosts").string_list() == ["a", "b", "3"]

    def test_bytes(self):
        root = parse(b"blob: !!binary aGVsbG8=\ntext: hi\n")
        assert root.lookup("blob").bytes() == b"hello"
        assert root.lookup("text").bytes() == b"hi"

    def test_bool(self):
        root = parse(b"enabled: true\nquoted: 'false'\n")
        assert root.lookup("enabled").bool() is True
        assert root.lookup("quoted").bool() is False

    def test_float64(self):
        root = parse(b"ratio: 0.25\nwhole: 2\n")
        assert root.lookup("ratio").float64() == 0.25
        assert root.lookup("whole").float64() == 2.0

    def test_int64_and_uint64(self):
        root = parse(b"n: -5\nbig: 18446744073709551615\n")
        assert root.lookup("n").int64() == -5
        assert root.lookup("big").uint64() == 2**64 - 1
        with pytest.raises(CoercionError):
            root.lookup("big").int64()

    def test_int64_on_mapping_raises(self):
        """Requesting an integer from a mapping is a coercion error."""
        root = parse(SAMPLE)
        with pytest.raises(CoercionError):
            root.lookup("c").int64()

    def test_interface_returns_parsed_structure(self):
        assert parse(SAMPLE).interface() == {"a": 1, "b": [2, 3], "c": {"d": 4}}


class TestKind:
    """Tests for YAMLValue.kind classification."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            (b"x: ~\n", Kind.NULL),
            (b"x: hello\n", Kind.STRING),
            (b"x: 2024-01-31\n", Kind.STRING),
            (b"x: true\n", Kind.BOOL),
            (b"x: 42\n", Kind.NUMBER),
            (b"x: 4.2\n", Kind.DECIMAL),
            (b"x: {a: 1}\n", Kind.STRUCT),
            (b"x: [1]\n", Kind.LIST),
            (b"x: !!binary aGVsbG8=\n", Kind.BYTES),
        ],
    )
    def test_parsed_kinds(self, source, expected):
        assert parse(source).lookup("x").kind() is expected

    def test_huge_integer_is_decimal(self):
        """Integers beyond 64 bits classify as decimals and convert to float."""
        value = new_value(2**70)
        assert value.kind() is Kind.DECIMAL
        assert value.float64() == float(2**70)

    def test_unknown_types_are_undefined(self):
        assert new_value(object()).kind() is Kind.UNDEFINED
        assert new_value(datetime.date(2024, 1, 31)).kind() is Kind.UNDEFINED

    def test_number_kind_converts_to_integer(self):
        """NUMBER nodes always convert to int64 or uint64."""
        for number in (0, -(2**63), 2**63 - 1, 2**64 - 1):
            value = new_value(number)
            assert value.kind() is Kind.NUMBER
            try:
                value.int64()
            except CoercionError:
                value.uint64()

    def test_list_kind_iterates_as_list_only(self):
        value = parse(SAMPLE).lookup("b")
        assert value.kind() is Kind.LIST
        value.list()
        with pytest.raises(CoercionError):
            value.struct()

    def test_kind_is_pure(self):
        value = parse(SAMPLE)
        assert value.kind() is value.kind() is Kind.STRUCT
        assert value.interface() == {"a": 1, "b": [2, 3], "c": {"d": 4}}


class TestPlaceholders:
    """Tests for ref() and file()."""

    def test_ref_is_unsupported(self):
        assert parse(SAMPLE).ref() == "unsupported operation"

    def test_file_is_placeholder(self):
        assert parse(SAMPLE).lookup("a").file() == "/tmp"


class TestMarshal:
    """Tests for YAMLValue.marshal."""

    def test_marshal_then_parse_round_trips(self):
        root = parse(SAMPLE)
        assert parse(root.marshal()).interface() == root.interface()

    def test_marshal_subtree(self):
        root = parse(SAMPLE)
        assert parse(root.lookup("c").marshal()).interface() == {"d": 4}

    def test_marshal_unrepresentable_data_raises(self):
        with pytest.raises(ConfigError, match="cannot marshal"):
            new_value({"x": object()}).marshal()


class TestParse:
    """Tests for the module-level parse helper."""

    def test_parse_error(self):
        with pytest.raises(ParseError):
            parse(b"a: b: c\n")

    def test_empty_document_is_null(self):
        assert parse(b"").kind() is Kind.NULL
