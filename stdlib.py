"""
htmlisp Standard Library
Value model and the pure value-level functions behind the built-in operations
"""

from typing import Any, Callable, Dict, List
from functools import reduce
import json
import math
import operator

from environment import Closure
from error_handling import (
  ArityError,
  EmptyCollection,
  IndexOutOfBounds,
  InvalidArgument,
  KeyNotFound,
  TypeMismatch,
)
from utilities import (
  format_number,
  is_number,
  operation_error,
  to_index,
  type_mismatch_error,
  type_name,
)


# ============================================================================
# VALUE MODEL
# ============================================================================
#
# Null -> None, Bool -> bool, Number -> float, String -> str,
# List -> list, Object -> dict, Function -> Closure.
# Lists and dicts are shared by reference between bindings.

def truthy(value: Any) -> bool:
  """Truthiness: empty strings, lists and objects, zero, NaN and Null are false"""
  if value is None:
    return False
  if isinstance(value, bool):
    return value
  if is_number(value):
    return value != 0 and not math.isnan(value)
  if isinstance(value, (str, list, dict)):
    return len(value) > 0
  return True


def strict_equals(x: Any, y: Any) -> bool:
  """Equality without coercion; containers and functions compare by identity"""
  if isinstance(x, (list, dict, Closure)) or isinstance(y, (list, dict, Closure)):
    return x is y
  if type_name(x) != type_name(y):
    return False
  return x == y


def to_json_compatible(value: Any, seen: Any = None) -> Any:
  """Convert a value to plain JSON data: integral numbers become ints, NaN and functions null"""
  if seen is None:
    seen = set()
  if isinstance(value, bool) or value is None or isinstance(value, str):
    return value
  if is_number(value):
    if math.isnan(value) or math.isinf(value):
      return None
    if value == int(value) and abs(value) < 1e21:
      return int(value)
    return float(value)
  if isinstance(value, (list, dict)):
    if id(value) in seen:
      raise TypeMismatch("Cannot stringify a cyclic structure")
    seen = seen | {id(value)}
    if isinstance(value, list):
      return [to_json_compatible(item, seen) for item in value]
    return {str(k): to_json_compatible(v, seen) for k, v in value.items() if not isinstance(v, Closure)}
  return None


def stringify(value: Any) -> str:
  """
  Text form of a value: scalars as printed, lists and objects as compact JSON

  Examples:
    stringify(3.0) -> "3"
    stringify([1.0, "a"]) -> '[1,"a"]'
    stringify(None) -> "null"
  """
  if value is None:
    return "null"
  if isinstance(value, bool):
    return "true" if value else "false"
  if is_number(value):
    return format_number(value)
  if isinstance(value, str):
    return value
  if isinstance(value, (list, dict)):
    return json.dumps(to_json_compatible(value), separators=(',', ':'), ensure_ascii=False)
  return str(value)


def to_name(value: Any) -> str:
  """Variable names, object keys and parameter names are strings"""
  return value if isinstance(value, str) else stringify(value)


# ============================================================================
# ARITHMETIC FUNCTIONS
# ============================================================================

def _numeric(x: Any) -> bool:
  return isinstance(x, (int, float))


def hl_add(x: Any, y: Any) -> Any:
  """Addition for numbers, concatenation for two strings or two lists"""
  if _numeric(x) and _numeric(y):
    return float(x + y)
  if isinstance(x, str) and isinstance(y, str):
    return x + y
  if isinstance(x, list) and isinstance(y, list):
    return x + y
  raise operation_error("add", x, y)


def _binary_numeric_op(op: Callable[[float, float], float], op_name: str) -> Callable[[Any, Any], float]:
  """Factory for arithmetic that only accepts numbers"""
  def arithmetic(x: Any, y: Any) -> float:
    if not (_numeric(x) and _numeric(y)):
      raise operation_error(op_name, x, y)
    return float(op(float(x), float(y)))

  return arithmetic


def _divide(x: float, y: float) -> float:
  if y == 0:
    if x == 0 or math.isnan(x):
      return math.nan
    return math.copysign(math.inf, x) * math.copysign(1.0, y)
  return x / y


def _remainder(x: float, y: float) -> float:
  # Sign of the dividend, as with IEEE-754 fmod
  if y == 0 or math.isinf(x) or math.isnan(x) or math.isnan(y):
    return math.nan
  return math.fmod(x, y)


def _power(base: float, exponent: float) -> float:
  if math.isinf(exponent) and abs(base) == 1:
    return math.nan
  try:
    return math.pow(base, exponent)
  except OverflowError:
    negative = base < 0 and exponent == int(exponent) and int(exponent) % 2 == 1
    return -math.inf if negative else math.inf
  except ValueError:
    if base == 0:
      return math.inf
    return math.nan


hl_sub = _binary_numeric_op(operator.sub, "subtract")
hl_mul = _binary_numeric_op(operator.mul, "multiply")
hl_div = _binary_numeric_op(_divide, "divide")
hl_mod = _binary_numeric_op(_remainder, "take the remainder of")
hl_pow = _binary_numeric_op(_power, "raise")


def fold_left(op_name: str, values: List[Any], op: Callable[[Any, Any], Any]) -> Any:
  """Left fold without a seed, so at least one operand is required"""
  if not values:
    raise ArityError(f"{op_name.upper()} requires at least 1 child element(s), got 0")
  return reduce(op, values)


# ============================================================================
# BOOLEAN FUNCTIONS
# ============================================================================

def hl_and(x: Any, y: Any) -> Any:
  """First falsy operand wins, returned as is"""
  return y if truthy(x) else x


def hl_or(x: Any, y: Any) -> Any:
  """First truthy operand wins, returned as is"""
  return x if truthy(x) else y


# ============================================================================
# COMPARISON FUNCTIONS
# ============================================================================

def _orderable(x: Any, y: Any) -> bool:
  return (_numeric(x) and _numeric(y)) or (isinstance(x, str) and isinstance(y, str))


def _binary_comparison_op(op: Callable[[Any, Any], bool], op_name: str) -> Callable[[Any, Any], bool]:
  """Factory for orderings between two numbers or two strings"""
  def comparison(x: Any, y: Any) -> bool:
    if not _orderable(x, y):
      raise operation_error(op_name, x, y)
    return op(x, y)

  return comparison


COMPARISONS: Dict[str, Callable[[Any, Any], bool]] = {
    "gt": _binary_comparison_op(operator.gt, "compare"),
    "gte": _binary_comparison_op(operator.ge, "compare"),
    "lt": _binary_comparison_op(operator.lt, "compare"),
    "lte": _binary_comparison_op(operator.le, "compare"),
}


def hl_compare_all(op_name: str, values: List[Any]) -> bool:
  """True when the first value stands in the relation to every other value"""
  compare = COMPARISONS[op_name]
  first = values[0]
  for other in values[1:]:
    if not compare(first, other):
      return False
  return True


def hl_eq(values: List[Any]) -> bool:
  """True when every value strictly equals the first"""
  first = values[0]
  return all(strict_equals(first, other) for other in values[1:])


def hl_ne(values: List[Any]) -> bool:
  """True when no other value strictly equals the first"""
  first = values[0]
  return not any(strict_equals(first, other) for other in values[1:])


# ============================================================================
# LIST AND STRING FUNCTIONS
# ============================================================================

def hl_length(value: Any) -> float:
  """Length of a string or list"""
  if isinstance(value, (str, list)):
    return float(len(value))
  raise type_mismatch_error("len", "a String or List", value)


def hl_append(lst: Any, value: Any) -> List[Any]:
  """New list with value pushed; the source list is left alone"""
  if not isinstance(lst, list):
    raise type_mismatch_error("append", "a List", lst)
  return lst + [value]


def hl_first(value: Any) -> Any:
  """First element of a list, first character of a string"""
  if not isinstance(value, (str, list)):
    raise type_mismatch_error("fst", "a String or List", value)
  if not value:
    raise EmptyCollection("Trying to get first element of an empty iterable")
  return value[0]


def hl_last(value: Any) -> Any:
  """Last element of a list, last character of a string"""
  if not isinstance(value, (str, list)):
    raise type_mismatch_error("lst", "a String or List", value)
  if not value:
    raise EmptyCollection("Trying to get last element of an empty iterable")
  return value[-1]


def hl_slice(value: Any, start: Any, stop: Any) -> Any:
  """Sub-range of a list or string"""
  if not isinstance(value, (str, list)):
    raise type_mismatch_error("slice", "a String or List", value)
  return value[to_index(start, "slice"):to_index(stop, "slice")]


def hl_split(value: Any, separator: Any) -> List[str]:
  """Split a string; an empty separator splits into characters"""
  if not isinstance(value, str):
    raise type_mismatch_error("split", "a String", value)
  sep = to_name(separator)
  if sep == "":
    return list(value)
  return value.split(sep)


def list_index(lst: List[Any], index: Any) -> int:
  """Validate an index into a list"""
  i = to_index(index, "idx")
  if not 0 <= i < len(lst):
    raise IndexOutOfBounds(f"Index out of bounds: {format_number(index)}")
  return i


def char_at(value: str, index: Any) -> str:
  """Single character of a string"""
  i = to_index(index, "idx")
  if not 0 <= i < len(value):
    raise IndexOutOfBounds(f"Index out of bounds: {format_number(index)}")
  return value[i]


# ============================================================================
# OBJECT FUNCTIONS
# ============================================================================

def hl_make_object(pairs: Any) -> Dict[str, Any]:
  """Object from a list of two-element lists"""
  if not isinstance(pairs, list):
    raise type_mismatch_error("obj", "a List of tuples", pairs)
  result = {}
  for pair in pairs:
    if not isinstance(pair, list) or len(pair) != 2:
      raise InvalidArgument("OBJ requires a list of tuples")
    result[to_name(pair[0])] = pair[1]
  return result


def require_object(op_name: str, value: Any) -> Dict[str, Any]:
  if not isinstance(value, dict):
    raise type_mismatch_error(op_name, "an Object", value)
  return value


def hl_get_key(obj: Dict[str, Any], key: Any) -> Any:
  """Value stored under key"""
  name = to_name(key)
  if name not in obj:
    raise KeyNotFound(f"Key not found: {name}")
  return obj[name]


def hl_has_key(obj: Any, key: Any) -> bool:
  """Presence test"""
  return to_name(key) in require_object("has-key", obj)
