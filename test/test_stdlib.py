"""
Value model and value function tests for htmlisp
"""

import math
import pytest
from environment import Closure
from error_handling import (
    ArityError, EmptyCollection, IndexOutOfBounds, InvalidArgument, KeyNotFound, TypeMismatch
)
from stdlib import (
    truthy, strict_equals, stringify, to_name, fold_left,
    hl_add, hl_sub, hl_div, hl_mod, hl_pow, hl_and, hl_or,
    hl_compare_all, hl_eq, hl_ne, hl_length, hl_append, hl_first, hl_last,
    hl_slice, hl_split, list_index, char_at, hl_make_object, hl_get_key, hl_has_key
)
from utilities import parse_number, resolve_literal, parse_int_prefix, parse_float_prefix, format_number, type_name


class TestLiterals:
  """Test literal resolution and number formatting"""

  def test_numeric_text_becomes_number(self):
    assert resolve_literal(" 42 ") == 42.0
    assert resolve_literal("-3.5e2") == -350.0
    assert resolve_literal("0x10") == 16.0

  def test_non_numeric_text_stays_untrimmed(self):
    assert resolve_literal("  hello ") == "  hello "
    assert resolve_literal("4 2") == "4 2"

  def test_blank_text_stays_string(self):
    assert resolve_literal("") == ""
    assert resolve_literal("   ") == "   "

  def test_parse_number(self):
    assert parse_number("Infinity") == math.inf
    assert parse_number("0b101") == 5.0
    assert parse_number(".5") == 0.5
    assert parse_number("abc") is None

  def test_oversized_integers_become_infinity(self):
    assert parse_number("0x" + "f" * 300) == math.inf
    assert parse_int_prefix("-0x" + "f" * 300) == -math.inf
    assert parse_int_prefix("9" * 5000) == math.inf

  def test_prefix_parsing(self):
    assert parse_int_prefix("42.9abc") == 42.0
    assert parse_int_prefix("-0x1f") == -31.0
    assert math.isnan(parse_int_prefix("abc"))
    assert parse_float_prefix("3.5kg") == 3.5
    assert parse_float_prefix("-Infinity") == -math.inf
    assert math.isnan(parse_float_prefix("kg"))

  def test_format_number(self):
    assert format_number(3.0) == "3"
    assert format_number(-0.25) == "-0.25"
    assert format_number(math.nan) == "NaN"
    assert format_number(-math.inf) == "-Infinity"


class TestValueModel:
  """Test truthiness, equality and stringification"""

  @pytest.mark.parametrize("value,expected", [
      (None, False), (True, True), (False, False),
      (0.0, False), (2.0, True), (math.nan, False),
      ("", False), ("0", True), ([], False), ([None], True),
      ({}, False), ({"a": 1.0}, True), (Closure((), None), True),
  ])
  def test_truthy(self, value, expected):
    assert truthy(value) is expected

  def test_strict_equality_does_not_coerce(self):
    assert strict_equals(1.0, 1.0)
    assert not strict_equals(1.0, "1")
    assert not strict_equals(True, 1.0)
    assert not strict_equals(math.nan, math.nan)
    assert strict_equals(None, None)

  def test_containers_compare_by_identity(self):
    xs = [1.0]
    assert strict_equals(xs, xs)
    assert not strict_equals(xs, [1.0])

  def test_stringify(self):
    assert stringify(None) == "null"
    assert stringify(True) == "true"
    assert stringify(7.0) == "7"
    assert stringify("as is ") == "as is "
    assert stringify([1.0, "a", None, [True]]) == '[1,"a",null,[true]]'
    assert stringify({"k": 2.5}) == '{"k":2.5}'
    assert stringify(Closure(("x",), None)) == "<function(x)>"
    assert stringify([Closure((), None)]) == "[null]"

  def test_stringify_large_numbers_in_structures(self):
    assert stringify([1e300]) == "[1e+300]"
    assert stringify({"n": 1e21}) == '{"n":1e+21}'
    assert stringify([1e20]) == "[100000000000000000000]"

  def test_stringify_cycle(self):
    xs = []
    xs.append(xs)
    with pytest.raises(TypeMismatch):
      stringify(xs)

  def test_to_name(self):
    assert to_name("x") == "x"
    assert to_name(1.0) == "1"

  def test_type_name(self):
    assert type_name(True) == "Bool"
    assert type_name(1.0) == "Number"
    assert type_name({}) == "Object"


class TestArithmetic:
  """Test IEEE arithmetic and folds"""

  def test_add_numbers_strings_lists(self):
    assert hl_add(1.0, 2.0) == 3.0
    assert hl_add("a", "b") == "ab"
    assert hl_add([1.0], [2.0]) == [1.0, 2.0]

  def test_add_mixed_fails(self):
    with pytest.raises(TypeMismatch) as exc_info:
      hl_add(1.0, "a")
    assert exc_info.value.message == "Cannot add Number and String"

  def test_sub_rejects_strings(self):
    with pytest.raises(TypeMismatch):
      hl_sub("a", 1.0)

  def test_division_by_zero(self):
    assert hl_div(1.0, 0.0) == math.inf
    assert hl_div(-1.0, 0.0) == -math.inf
    assert math.isnan(hl_div(0.0, 0.0))

  def test_remainder_takes_dividend_sign(self):
    assert hl_mod(-7.0, 3.0) == -1.0
    assert hl_mod(7.0, -3.0) == 1.0
    assert math.isnan(hl_mod(1.0, 0.0))

  def test_power_edge_cases(self):
    assert hl_pow(2.0, 10.0) == 1024.0
    assert hl_pow(10.0, 400.0) == math.inf
    assert math.isnan(hl_pow(-8.0, 1 / 3))
    assert hl_pow(0.0, -1.0) == math.inf

  def test_fold_left(self):
    assert fold_left("sub", [10.0, 1.0, 2.0], hl_sub) == 7.0
    assert fold_left("add", [5.0], hl_add) == 5.0

  def test_fold_left_needs_an_operand(self):
    with pytest.raises(ArityError):
      fold_left("add", [], hl_add)


class TestLogicAndComparison:
  """Test boolean combination and orderings"""

  def test_and_or_return_operands(self):
    assert hl_and(1.0, "x") == "x"
    assert hl_and(0.0, "x") == 0.0
    assert hl_or("", "y") == "y"
    assert hl_or("a", "y") == "a"

  def test_compare_first_against_all(self):
    assert hl_compare_all("gt", [5.0, 1.0, 2.0])
    assert not hl_compare_all("gt", [5.0, 1.0, 7.0])
    assert hl_compare_all("lte", ["a", "a", "b"])

  def test_ordering_mixed_kinds_fails(self):
    with pytest.raises(TypeMismatch):
      hl_compare_all("lt", [1.0, "2"])

  def test_eq_ne(self):
    assert hl_eq([1.0, 1.0, 1.0])
    assert not hl_eq([1.0, 1.0, 2.0])
    assert hl_ne([1.0, 2.0, 3.0])
    assert not hl_ne([1.0, 2.0, 1.0])


class TestCollections:
  """Test list, string and object functions"""

  def test_length(self):
    assert hl_length("abc") == 3.0
    assert hl_length([1.0]) == 1.0
    with pytest.raises(TypeMismatch):
      hl_length(5.0)

  def test_append_returns_new_list(self):
    xs = [1.0]
    ys = hl_append(xs, 2.0)
    assert ys == [1.0, 2.0]
    assert xs == [1.0]

  def test_first_last(self):
    assert hl_first([1.0, 2.0]) == 1.0
    assert hl_last("abc") == "c"
    with pytest.raises(EmptyCollection):
      hl_first([])
    with pytest.raises(EmptyCollection):
      hl_last("")

  def test_slice(self):
    assert hl_slice([1.0, 2.0, 3.0], 1.0, 3.0) == [2.0, 3.0]
    assert hl_slice("hello", 0.0, -1.0) == "hell"
    with pytest.raises(TypeMismatch):
      hl_slice(5.0, 0.0, 1.0)

  def test_split(self):
    assert hl_split("a,b,c", ",") == ["a", "b", "c"]
    assert hl_split("abc", "") == ["a", "b", "c"]

  def test_indexing(self):
    assert list_index([1.0, 2.0], 1.0) == 1
    assert char_at("abc", 2.0) == "c"
    with pytest.raises(IndexOutOfBounds):
      list_index([1.0], 1.0)
    with pytest.raises(IndexOutOfBounds):
      char_at("abc", 3.0)
    with pytest.raises(IndexOutOfBounds):
      list_index([1.0], 0.5)

  def test_objects(self):
    obj = hl_make_object([["a", 1.0], [2.0, "two"]])
    assert obj == {"a": 1.0, "2": "two"}
    assert hl_get_key(obj, 2.0) == "two"
    assert hl_has_key(obj, "a")
    with pytest.raises(KeyNotFound):
      hl_get_key(obj, "b")

  def test_object_needs_tuples(self):
    with pytest.raises(InvalidArgument):
      hl_make_object([["a", 1.0, 2.0]])
    with pytest.raises(TypeMismatch):
      hl_has_key([], "a")
