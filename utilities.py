"""
Utilities module for the htmlisp interpreter
Contains common helper functions to reduce code duplication
"""

from typing import Any, Optional
import math
import re

from error_handling import ArityError, TypeMismatch, IndexOutOfBounds
from environment import Closure


# ==================== TYPE NAMES ====================

def type_name(value: Any) -> str:
  """
  Name of a runtime value's variant, for error messages

  Examples:
    type_name(None) -> "Null"
    type_name(2.0) -> "Number"
    type_name([1.0]) -> "List"
  """
  if value is None:
    return "Null"
  if isinstance(value, bool):
    return "Bool"
  if isinstance(value, (int, float)):
    return "Number"
  if isinstance(value, str):
    return "String"
  if isinstance(value, list):
    return "List"
  if isinstance(value, dict):
    return "Object"
  if isinstance(value, Closure):
    return "Function"
  return type(value).__name__


def is_number(value: Any) -> bool:
  """Numbers are floats; bools are excluded even though Python counts them as ints"""
  return isinstance(value, (int, float)) and not isinstance(value, bool)


# ==================== ARITY ====================

def require_children_count(node: Any, count: int = 1, exact: bool = False) -> None:
  """
  Fail with ArityError when a node has the wrong number of child nodes

  Args:
    node: The node being evaluated
    count: Required number of children
    exact: Require exactly count children instead of at least count

  Raises:
    ArityError naming the tag and the requirement
  """
  got = len(node.children)
  tag = node.tag.upper()
  if exact and got != count:
    raise ArityError(f"{tag} requires exactly {count} child element(s), got {got}", node)
  if got < count:
    raise ArityError(f"{tag} requires at least {count} child element(s), got {got}", node)


# ==================== ERROR MESSAGE BUILDERS ====================

def type_mismatch_error(op_name: str, expected: str, actual: Any, node: Any = None) -> TypeMismatch:
  """
  Generate type mismatch error

  Args:
    op_name: Operation name
    expected: Description of the accepted operand kinds
    actual: The offending value
    node: Node being evaluated

  Returns:
    TypeMismatch with formatted message
  """
  return TypeMismatch(f"{op_name.upper()} requires {expected}, got {type_name(actual)}", node)


def operation_error(op_name: str, left: Any, right: Any, node: Any = None) -> TypeMismatch:
  """Generate error for a binary operation on unsupported operands"""
  return TypeMismatch(
    f"Cannot {op_name} {type_name(left)} and {type_name(right)}", node
  )


def to_index(value: Any, op_name: str, node: Any = None) -> int:
  """Convert an index operand to int; it must be an integral Number"""
  if not is_number(value):
    raise type_mismatch_error(op_name, "a Number index", value, node)
  if math.isnan(value) or math.isinf(value) or value != int(value):
    raise IndexOutOfBounds(f"Index out of bounds: {format_number(value)}", node)
  return int(value)


# ==================== NUMBERS ====================

_DECIMAL_LITERAL = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
_RADIX_LITERAL = re.compile(r'0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)')
_INFINITY_LITERAL = re.compile(r'[+-]?Infinity')

_INT_PREFIX = re.compile(r'([+-]?)(?:0[xX]([0-9a-fA-F]+)|(\d+))')
_FLOAT_PREFIX = re.compile(r'[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')


def int_to_number(value: int) -> float:
  """Integer as a Number; values past the float range become Infinity"""
  try:
    return float(value)
  except OverflowError:
    return -math.inf if value < 0 else math.inf


def parse_number(text: str) -> Optional[float]:
  """
  Parse a whole string as a numeric literal, ignoring surrounding whitespace

  Returns:
    The number, or None when the text is not a numeric literal

  Examples:
    parse_number(" 42 ") -> 42.0
    parse_number("0x1F") -> 31.0
    parse_number("4 2") -> None
  """
  stripped = text.strip()
  if _DECIMAL_LITERAL.fullmatch(stripped):
    return float(stripped)
  if _RADIX_LITERAL.fullmatch(stripped):
    return int_to_number(int(stripped, 0))
  if _INFINITY_LITERAL.fullmatch(stripped):
    return -math.inf if stripped.startswith('-') else math.inf
  return None


def resolve_literal(text: str) -> Any:
  """
  Resolve a leaf node's text: blank or non-numeric text stays the
  original untrimmed string, anything else becomes a Number
  """
  if text.strip() == "":
    return text
  number = parse_number(text)
  return text if number is None else number


def parse_int_prefix(text: str) -> float:
  """Integer value of the longest integer prefix of text, NaN if there is none"""
  match = _INT_PREFIX.match(text.lstrip())
  if not match:
    return math.nan
  sign, hex_digits, digits = match.groups()
  if hex_digits is None:
    value = float(digits)
  else:
    value = int_to_number(int(hex_digits, 16))
  return -value if sign == '-' else value


def parse_float_prefix(text: str) -> float:
  """Float value of the longest float prefix of text, NaN if there is none"""
  match = _FLOAT_PREFIX.match(text.lstrip())
  if not match:
    return math.nan
  literal = match.group(0)
  if literal.lstrip('+-') == "Infinity":
    return -math.inf if literal.startswith('-') else math.inf
  return float(literal)


def format_number(value: float) -> str:
  """
  Render a Number the way it is printed: integral values without a
  fractional part, NaN and Infinity by name

  Examples:
    format_number(3.0) -> "3"
    format_number(0.5) -> "0.5"
    format_number(float('-inf')) -> "-Infinity"
  """
  if math.isnan(value):
    return "NaN"
  if math.isinf(value):
    return "-Infinity" if value < 0 else "Infinity"
  if value == int(value) and abs(value) < 1e21:
    return str(int(value))
  return repr(float(value))
