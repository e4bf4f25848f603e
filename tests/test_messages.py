"""
Tests for failure messages and error paths.

The rendered message and the path are a stable, machine-readable
contract. These tests pin their exact text.
"""

import math
from datetime import datetime

import pytest

from shapecheck import (
    Function,
    Integer,
    ObjectIncluding,
    ObjectWithValues,
    OneOf,
    StructuralMismatch,
    Undefined,
    Where,
    check,
    explain,
    matches,
)


def mismatch(value, pattern) -> StructuralMismatch:
    with pytest.raises(StructuralMismatch) as info:
        check(value, pattern)
    assert matches(value, pattern) is False
    return info.value


# ============================================================
# PATHS
# ============================================================

class TestErrorPath:
    """Where the first divergence is reported."""

    @pytest.mark.parametrize("value,pattern,expected_path", [
        ({"foo": [{"bar": 3}, {"bar": "something"}]}, {"foo": [{"bar": float}]}, "foo[1].bar"),
        # arrays, $, whitespace and quotes together
        ([{"$FoO": {"bar baz\n\"'": 3}}], [{"$FoO": {"bar baz\n\"'": str}}],
         '[0].$FoO["bar baz\\n\\"\'"]'),
        # numbers only: no quotes needed
        ({"1231": 123}, {"1231": str}, "[1231]"),
        ({"1234abcd": 123}, {"1234abcd": str}, '["1234abcd"]'),
        ({"$set": {"people": "nice"}}, {"$set": {"people": [str]}}, "$set.people"),
        ({"_underscore": "should work"}, {"_underscore": float}, "_underscore"),
        ([[["something", "here"], []], [["string", 123]]], [[[str]]], "[1][0][1]"),
        ([[[{"foo": "something"}, {"foo": "here"}], [{"foo": "asdf"}]], [[{"foo": 123}]]],
         [[[{"foo": str}]]], "[1][0][0].foo"),
        # reserved words
        ({"return": 0}, {"return": str}, '["return"]'),
        ({"class": 0}, {"class": str}, '["class"]'),
        ({"None": 0}, {"None": str}, '["None"]'),
    ])
    def test_path(self, value, pattern, expected_path):
        assert mismatch(value, pattern).path == expected_path

    def test_root_failure_has_empty_path(self):
        err = mismatch(2, str)
        assert err.path == ""
        assert " in field " not in err.message

    def test_missing_key_reported_at_parent(self):
        err = mismatch({"outer": {}}, {"outer": {"inner": str}})
        assert err.path == "outer"
        assert err.message == "Match error: Missing key 'inner' in field outer"

    def test_unknown_key_path(self):
        err = mismatch({"a": 1, "b": 2}, {"a": float})
        assert err.reason == "Unknown key"
        assert err.path == "b"
        assert err.message == "Match error: Unknown key in field b"

    def test_first_failing_element_wins(self):
        err = mismatch([1, "x", "y"], [float])
        assert err.path == "[1]"

    def test_integer_dict_keys(self):
        err = mismatch({1: "x"}, ObjectWithValues(float))
        assert err.path == "[1]"

    def test_object_with_values_path(self):
        err = mismatch({"x": 1, "y": "2"}, ObjectWithValues(float))
        assert err.path == "y"

    def test_where_failure_nests_under_current_path(self):
        inner = Where(lambda v: check(v, {"x": str}) or True)
        err = mismatch({"outer": {"x": 1}}, {"outer": inner})
        assert err.path == "outer.x"
        assert err.message == "Match error: Expected string, got number in field outer.x"

    def test_where_failure_with_index_path(self):
        inner = Where(lambda v: check(v, [str]) or True)
        err = mismatch({"items": ["a", 2]}, {"items": inner})
        assert err.path == "items[1]"


# ============================================================
# MESSAGES
# ============================================================

class Child:
    pass


class Parent:
    def __init__(self, child):
        child._parent = self
        self.child = child


class TestErrorMessage:
    @pytest.mark.parametrize("value,pattern,expected", [
        (2, str, "Expected string, got number"),
        ({"key": 0}, float, "Expected number, got object"),
        (None, bool, "Expected boolean, got null"),
        ("string", Undefined, "Expected undefined, got string"),
        (True, None, "Expected null, got true"),
        ({}, ObjectIncluding({"bar": str}), "Missing key 'bar'"),
        (None, object, "Expected object, got null"),
        (None, Function, "Expected function, got null"),
        ("bar", "foo", 'Expected foo, got "bar"'),
        (3.14, Integer, "Expected Integer, got 3.14"),
        (False, [bool], "Expected array, got false"),
        ([None, None], [str], "Expected string, got null in field [0]"),
        (2, {"key": 2}, "Expected object, got number"),
        (None, {"key": 2}, "Expected object, got null"),
        (datetime(2024, 1, 1), {"key": 2}, "Expected plain object"),
    ])
    def test_message(self, value, pattern, expected):
        assert mismatch(value, pattern).message == "Match error: " + expected

    def test_str_of_error_is_message(self):
        err = mismatch(2, str)
        assert str(err) == "Match error: Expected string, got number"

    def test_literal_messages(self):
        assert mismatch(1, True).reason == "Expected true, got 1"
        assert mismatch("1", 1).reason == 'Expected 1, got "1"'
        assert mismatch(Undefined, "x").reason == "Expected x, got undefined"
        assert mismatch([1, 2], "x").reason == "Expected x, got [1, 2]"

    def test_integer_messages(self):
        assert mismatch(math.nan, Integer).reason == "Expected Integer, got NaN"
        assert mismatch(math.inf, Integer).reason == "Expected Integer, got Infinity"
        assert mismatch("3", Integer).reason == "Expected Integer, got string"
        assert mismatch([], Integer).reason == "Expected Integer, got array"

    def test_array_category_reported(self):
        assert mismatch([], object).reason == "Expected object, got array"
        assert mismatch([1], str).reason == "Expected string, got array"

    def test_arrays_against_shapes_are_not_plain(self):
        assert mismatch([], {"key": 2}).reason == "Expected plain object"
        assert mismatch((1,), ObjectIncluding({})).reason == "Expected plain object"
        assert mismatch([1], ObjectWithValues(float)).reason == "Expected plain object"
        assert mismatch(len, {"key": 2}).reason == "Expected object, got function"

    def test_nominal_class_message(self):
        child = Child()
        Parent(child)
        assert mismatch(child, Parent).message == "Match error: Expected Parent"

    def test_nominal_class_without_name(self):
        class Anonymous:
            pass
        Anonymous.__name__ = ""
        assert mismatch(1, Anonymous).reason == "Expected particular constructor"

    def test_date_and_regexp_messages(self):
        import re
        assert mismatch("x", datetime).reason == "Expected datetime"
        assert mismatch("x", re.Pattern).reason == "Expected Pattern"

    def test_cyclic_value_renders_as_category(self):
        circle_foo = {}
        circle_bar = {"foo": circle_foo}
        circle_foo["bar"] = circle_bar
        assert mismatch(circle_foo, None).message == "Match error: Expected null, got object"

    def test_unserializable_value_renders_as_category(self):
        assert mismatch({1, 2}, None).reason == "Expected null, got object"

    def test_one_of_message_is_generic(self):
        err = mismatch(True, OneOf(str, float))
        assert err.reason == "Failed OneOf validation"
        err_reversed = mismatch(True, OneOf(float, str))
        assert err_reversed.reason == err.reason

    def test_where_messages(self):
        assert mismatch(3, Where(lambda v: v > 5)).reason == "Failed Where validation"

        def strict(value):
            check(value, str)
            return True
        assert mismatch(3, Where(strict)).reason == "Expected string, got number"

    def test_optional_delegates_to_inner_message(self):
        from shapecheck import Optional
        assert mismatch(None, Optional(str)).reason == "Expected string, got null"


# ============================================================
# SCENARIOS
# ============================================================

class TestScenarios:
    """End-to-end verdicts through every public entry point."""

    def test_nested_array_path(self):
        err = mismatch({"foo": [{"bar": 3}, {"bar": "x"}]}, {"foo": [{"bar": float}]})
        assert err.path == "foo[1].bar"

    def test_numeric_key_path(self):
        assert mismatch({"1231": 123}, {"1231": str}).path == "[1231]"

    def test_reserved_key_path(self):
        assert mismatch({"return": 0}, {"return": str}).path == '["return"]'

    def test_non_integer(self):
        assert matches(3.14, Integer) is False
        assert explain(3.14, Integer).message == "Match error: Expected Integer, got 3.14"

    def test_missing_key(self):
        assert matches({}, ObjectIncluding({"bar": str})) is False
        assert explain({}, ObjectIncluding({"bar": str})).message == "Match error: Missing key 'bar'"

    def test_date_against_shape(self):
        assert matches(datetime.now(), {"key": 2}) is False
        assert explain(datetime.now(), {"key": 2}).message == "Match error: Expected plain object"
