"""
htmlisp Interpreter
Tree-walking evaluator: every node is dispatched by tag to a built-in operation,
and every operation calls back into the evaluator for the values of its children
"""

from typing import Any, Callable, Dict, List, Optional, Sequence
from dataclasses import dataclass, field

from parsing import Node, Document
from environment import Environment, Closure, create_root_environment
from error_handling import HtmLispError, UnknownOperation, InvalidArgument, EmptyCollection, TypeMismatch
from utilities import (
  require_children_count,
  resolve_literal,
  parse_int_prefix,
  parse_float_prefix,
  type_mismatch_error,
  is_number,
)
from stdlib import (
  truthy,
  stringify,
  to_name,
  fold_left,
  hl_add,
  hl_sub,
  hl_mul,
  hl_div,
  hl_mod,
  hl_pow,
  hl_and,
  hl_or,
  hl_eq,
  hl_ne,
  hl_compare_all,
  COMPARISONS,
  hl_length,
  hl_append,
  hl_first,
  hl_last,
  hl_slice,
  hl_split,
  list_index,
  char_at,
  hl_make_object,
  require_object,
  hl_get_key,
  hl_has_key,
)
from console import ConsoleIO, OutputStyle, style_from_attributes


Handler = Callable[[Node, Environment, Dict], Any]


# ============================================================================
# DATA STRUCTURES
# ============================================================================

def make_execution_context(io: Any = None, style: Optional[OutputStyle] = None, debug: bool = False) -> Dict:
  """Create the per-run context every operation receives"""
  return {
      'io': io if io is not None else ConsoleIO(),
      'style': style or OutputStyle(),
      'debug': debug,
      'depth': 0
  }


def make_builtin_operation(name: str, handler: Handler, min_children: int = 0,
                           exact: bool = False, signature: str = "") -> Dict:
  """Create a catalog entry; the child count is checked before the handler runs"""
  return {
      'name': name,
      'handler': handler,
      'min_children': min_children,
      'exact': exact,
      'signature': signature
  }


@dataclass
class RunResult:
  """Outcome of evaluating a sequence of root nodes"""
  environment: Environment
  values: List[Any] = field(default_factory=list)
  errors: List[HtmLispError] = field(default_factory=list)

  @property
  def ok(self) -> bool:
    return not self.errors


# ============================================================================
# EVALUATION FUNCTIONS
# ============================================================================

def evaluate(node: Node, env: Environment, context: Dict) -> Any:
  """Produce the value of a node by running the operation its tag names"""
  tag = node.tag.lower()
  operation = BUILTIN_OPERATIONS.get(tag)
  if operation is None:
    raise UnknownOperation(f"Undefined tag: {node.tag}", node)

  if context['debug']:
    print(f"{'  ' * context['depth']}Evaluating: <{tag}>")

  if operation['min_children'] or operation['exact']:
    require_children_count(node, operation['min_children'], operation['exact'])

  context['depth'] += 1
  try:
    return operation['handler'](node, env, context)
  except HtmLispError as e:
    # Failures raised by value functions get the innermost node
    if e.node is None:
      e.node = node
    raise
  finally:
    context['depth'] -= 1


def evaluate_all(node: Node, env: Environment, context: Dict, limit: int = 0) -> List[Any]:
  """Evaluate children in order, stopping after limit values when limit is set"""
  result = []
  for child in node.children:
    result.append(evaluate(child, env, context))
    if limit and len(result) == limit:
      break
  return result


def inner_text(node: Node) -> Any:
  """The resolved literal of a leaf node"""
  return resolve_literal(node.text or "")


def derived_value(node: Node, env: Environment, context: Dict) -> Any:
  """Evaluate every child, keep the last value"""
  value = None
  for child in node.children:
    value = evaluate(child, env, context)
  return value


def node_value(node: Node, env: Environment, context: Dict) -> Any:
  """Derived value of a node with children, literal text otherwise"""
  if node.children:
    return derived_value(node, env, context)
  return inner_text(node)


def call_closure(closure: Closure, env: Environment, args: Sequence[Any], context: Dict) -> Any:
  """Run a closure body in the caller's environment extended with its parameters"""
  call_env = env.derive()
  for i, param in enumerate(closure.params):
    call_env.define(param, args[i] if i < len(args) else None)
  return evaluate(closure.body, call_env, context)


# ============================================================================
# VARIABLES
# ============================================================================

def op_def(node: Node, env: Environment, context: Dict) -> Any:
  """(def name value) => value"""
  name, value = evaluate_all(node, env.derive(), context, 2)
  return env.define(to_name(name), value)


def op_mut(node: Node, env: Environment, context: Dict) -> Any:
  """(mut name value) => value"""
  name, value = evaluate_all(node, env.derive(), context, 2)
  return env.assign(to_name(name), value, node)


def op_var(node: Node, env: Environment, context: Dict) -> Any:
  """(var name) => value"""
  name = node_value(node, env.derive(), context)
  return env.lookup(to_name(name), node)


def op_inc(node: Node, env: Environment, context: Dict) -> Any:
  """(inc name delta) => value"""
  name, delta = evaluate_all(node, env.derive(), context, 2)
  name = to_name(name)
  return env.assign(name, hl_add(env.lookup(name, node), delta), node)


def op_dec(node: Node, env: Environment, context: Dict) -> Any:
  """(dec name delta) => value"""
  name, delta = evaluate_all(node, env.derive(), context, 2)
  name = to_name(name)
  return env.assign(name, hl_sub(env.lookup(name, node), delta), node)


# ============================================================================
# CONTROL FLOW
# ============================================================================

def op_block(node: Node, env: Environment, context: Dict) -> Any:
  """(block op...) => last value"""
  return node_value(node, env.derive(), context)


def op_noop(node: Node, env: Environment, context: Dict) -> Any:
  """(noop) => null"""
  return None


def op_if(node: Node, env: Environment, context: Dict) -> Any:
  """(if condition thenOp elseOp?) => any"""
  condition, then_op = node.children[0], node.children[1]
  if truthy(evaluate(condition, env.derive(), context)):
    return evaluate(then_op, env.derive(), context)
  if len(node.children) > 2:
    return evaluate(node.children[2], env.derive(), context)
  return None


def op_while(node: Node, env: Environment, context: Dict) -> List[Any]:
  """(while condition body) => list"""
  condition, body = node.children
  loop_env = env.derive()
  result = []
  while truthy(evaluate(condition, loop_env, context)):
    value = evaluate(body, loop_env, context)
    if value is not None and value is not False:
      result.append(value)
  return result


def op_for(node: Node, env: Environment, context: Dict) -> List[Any]:
  """(for varName start stop step body) => list

  The counter cell lives in the current environment, not a child one,
  and is removed when the loop ends.
  """
  name, start, stop, step = evaluate_all(node, env.derive(), context, 4)
  body = node.children[4]
  for bound in (start, stop, step):
    if not is_number(bound):
      raise type_mismatch_error("for", "Number bounds", bound, node)

  name = to_name(name)
  result = []
  env.define(name, start)
  counter = env.local[name]
  at_most = COMPARISONS["lte"]
  try:
    while at_most(counter.value, stop):
      value = evaluate(body, env.derive(), context)
      if value is not None:
        result.append(value)
      counter.value = hl_add(counter.value, step)
  finally:
    env.forget(name)
  return result


def op_map(node: Node, env: Environment, context: Dict) -> List[Any]:
  """(map list varName body) => list"""
  iterable, name = evaluate_all(node, env.derive(), context, 2)
  if not isinstance(iterable, list):
    raise type_mismatch_error("map", "a List", iterable, node)
  body = node.children[2]
  name = to_name(name)
  loop_env = env.derive()
  result = []
  for item in iterable:
    loop_env.define(name, item)
    result.append(evaluate(body, loop_env, context))
  return result


def op_filter(node: Node, env: Environment, context: Dict) -> List[Any]:
  """(filter list varName body) => list"""
  iterable, name = evaluate_all(node, env.derive(), context, 2)
  if not isinstance(iterable, list):
    raise type_mismatch_error("filter", "a List", iterable, node)
  body = node.children[2]
  name = to_name(name)
  loop_env = env.derive()
  result = []
  for item in iterable:
    loop_env.define(name, item)
    if truthy(evaluate(body, loop_env, context)):
      result.append(item)
  return result


def op_reduce(node: Node, env: Environment, context: Dict) -> Any:
  """(reduce list accName elemName body) => any"""
  iterable, acc_name, elem_name = evaluate_all(node, env.derive(), context, 3)
  if not isinstance(iterable, list):
    raise type_mismatch_error("reduce", "a List", iterable, node)
  if not iterable:
    raise EmptyCollection("Reduce of an empty list with no initial value", node)
  body = node.children[3]
  acc_name, elem_name = to_name(acc_name), to_name(elem_name)
  loop_env = env.derive()
  acc = iterable[0]
  for item in iterable[1:]:
    loop_env.define(acc_name, acc)
    loop_env.define(elem_name, item)
    acc = evaluate(body, loop_env, context)
  return acc


# ============================================================================
# I/O
# ============================================================================

def op_print(node: Node, env: Environment, context: Dict) -> str:
  """(print value...) => line"""
  sep = node.attributes.get('sep')
  if node.children:
    values = evaluate_all(node, env.derive(), context)
    line = (" " if sep is None else sep).join(stringify(v) for v in values)
  else:
    line = stringify(inner_text(node))
  context['io'].emit(line, context['style'])
  return line


def op_read(node: Node, env: Environment, context: Dict) -> Any:
  """(read promptMessage defaultValue) => string"""
  message, default = evaluate_all(node, env.derive(), context, 2)
  return context['io'].request(stringify(message), stringify(default))


# ============================================================================
# TYPES
# ============================================================================

def op_l(node: Node, env: Environment, context: Dict) -> Any:
  """(l) => literal text"""
  return inner_text(node)


def op_int(node: Node, env: Environment, context: Dict) -> float:
  """(int value) => number"""
  value = node_value(node, env.derive(), context)
  if isinstance(value, str):
    value = value.replace(" ", "")
  return parse_int_prefix(stringify(value))


def op_float(node: Node, env: Environment, context: Dict) -> float:
  """(float value) => number"""
  value = node_value(node, env.derive(), context)
  if isinstance(value, str):
    value = value.replace(" ", "")
  return parse_float_prefix(stringify(value))


def op_str(node: Node, env: Environment, context: Dict) -> str:
  """(str value) => string"""
  value = node_value(node, env.derive(), context)
  if value is None:
    raise TypeMismatch("STR cannot convert Null to a string", node)
  return stringify(value)


def op_list(node: Node, env: Environment, context: Dict) -> List[Any]:
  """(list value...) => list"""
  return evaluate_all(node, env.derive(), context)


# ============================================================================
# BOOLEAN OPERATIONS
# ============================================================================

def op_bool(node: Node, env: Environment, context: Dict) -> bool:
  """(bool value) => bool"""
  return truthy(node_value(node, env.derive(), context))


def _matches_literal(node: Node, env: Environment, context: Dict, literal: bool) -> bool:
  if node.children:
    return truthy(node_value(node, env.derive(), context)) is literal
  text = node.text or ""
  if text == "":
    return literal
  return truthy(resolve_literal(text)) is literal


def op_true(node: Node, env: Environment, context: Dict) -> bool:
  """(true value?) => bool"""
  return _matches_literal(node, env, context, True)


def op_false(node: Node, env: Environment, context: Dict) -> bool:
  """(false value?) => bool"""
  return _matches_literal(node, env, context, False)


def op_and(node: Node, env: Environment, context: Dict) -> Any:
  """(and value...) => first falsy value, or the last"""
  return fold_left("and", evaluate_all(node, env.derive(), context), hl_and)


def op_or(node: Node, env: Environment, context: Dict) -> Any:
  """(or value...) => first truthy value, or the last"""
  return fold_left("or", evaluate_all(node, env.derive(), context), hl_or)


def op_not(node: Node, env: Environment, context: Dict) -> bool:
  """(not value) => bool"""
  return not truthy(derived_value(node, env.derive(), context))


# ============================================================================
# MATH AND COMPARISON
# ============================================================================

def _arithmetic(op_name: str, op: Callable[[Any, Any], Any]) -> Handler:
  def handler(node: Node, env: Environment, context: Dict) -> Any:
    return fold_left(op_name, evaluate_all(node, env.derive(), context), op)
  handler.__name__ = f"op_{op_name}"
  handler.__doc__ = f"({op_name} value...) => number"
  return handler


def _ordering(op_name: str) -> Handler:
  def handler(node: Node, env: Environment, context: Dict) -> bool:
    return hl_compare_all(op_name, evaluate_all(node, env.derive(), context))
  handler.__name__ = f"op_{op_name}"
  handler.__doc__ = f"({op_name} first other...) => bool"
  return handler


def op_eq(node: Node, env: Environment, context: Dict) -> bool:
  """(eq first other...) => bool"""
  return hl_eq(evaluate_all(node, env.derive(), context))


def op_ne(node: Node, env: Environment, context: Dict) -> bool:
  """(ne first other...) => bool"""
  return hl_ne(evaluate_all(node, env.derive(), context))


# ============================================================================
# STRING AND LIST OPERATIONS
# ============================================================================

def op_concat(node: Node, env: Environment, context: Dict) -> str:
  """(concat value value...) => string"""
  values = evaluate_all(node, env.derive(), context)
  return "".join("" if v is None else stringify(v) for v in values)


def op_split(node: Node, env: Environment, context: Dict) -> List[str]:
  """(split string sep) => list"""
  value, sep = evaluate_all(node, env.derive(), context, 2)
  return hl_split(value, sep)


def op_len(node: Node, env: Environment, context: Dict) -> float:
  """(len iterable) => number"""
  return hl_length(node_value(node, env.derive(), context))


def op_append(node: Node, env: Environment, context: Dict) -> List[Any]:
  """(append list value) => new list"""
  lst, value = evaluate_all(node, env.derive(), context, 2)
  return hl_append(lst, value)


def op_fst(node: Node, env: Environment, context: Dict) -> Any:
  """(fst iterable) => any"""
  return hl_first(evaluate(node.children[0], env.derive(), context))


def op_lst(node: Node, env: Environment, context: Dict) -> Any:
  """(lst iterable) => any"""
  return hl_last(evaluate(node.children[0], env.derive(), context))


def op_slice(node: Node, env: Environment, context: Dict) -> Any:
  """(slice iterable start stop) => sliced iterable"""
  value, start, stop = evaluate_all(node, env.derive(), context)
  return hl_slice(value, start, stop)


def op_idx(node: Node, env: Environment, context: Dict) -> Any:
  """(idx iterable index newValue?) => any

  Setting only happens on lists, and the new value is evaluated only
  once the index is known to be valid.
  """
  iterable, index = evaluate_all(node, env.derive(), context, 2)
  if isinstance(iterable, list):
    i = list_index(iterable, index)
    if len(node.children) > 2:
      iterable[i] = evaluate(node.children[2], env.derive(), context)
    return iterable[i]
  if isinstance(iterable, str):
    return char_at(iterable, index)
  raise type_mismatch_error("idx", "a List or String", iterable, node)


def op_tuple(node: Node, env: Environment, context: Dict) -> List[Any]:
  """(tuple first second) => list"""
  return evaluate_all(node, env.derive(), context, 2)


# ============================================================================
# OBJECTS
# ============================================================================

def op_obj(node: Node, env: Environment, context: Dict) -> Dict[str, Any]:
  """(obj listOfTuples) => object"""
  return hl_make_object(node_value(node, env.derive(), context))


def op_key(node: Node, env: Environment, context: Dict) -> Any:
  """(key object key newValue?) => value"""
  obj, key = evaluate_all(node, env.derive(), context, 2)
  obj = require_object("key", obj)
  if len(node.children) > 2:
    obj[to_name(key)] = evaluate(node.children[2], env.derive(), context)
  return hl_get_key(obj, key)


def op_has_key(node: Node, env: Environment, context: Dict) -> bool:
  """(has-key object key) => bool"""
  obj, key = evaluate_all(node, env.derive(), context, 2)
  return hl_has_key(obj, key)


# ============================================================================
# FUNCTIONS
# ============================================================================

def op_func(node: Node, env: Environment, context: Dict) -> Closure:
  """(func paramNameList body) => function"""
  params = evaluate(node.children[0], env.derive(), context)
  if not isinstance(params, list):
    raise InvalidArgument("FUNC requires a list of parameter names", node)
  return Closure(tuple(to_name(p) for p in params), node.children[1])


def op_call(node: Node, env: Environment, context: Dict) -> Any:
  """(call function argList?) => any"""
  func = evaluate(node.children[0], env.derive(), context)
  args: List[Any] = []
  if len(node.children) > 1:
    value = evaluate(node.children[1], env.derive(), context)
    if not isinstance(value, list):
      raise InvalidArgument("The second argument to CALL must be a list", node)
    args = value
  if not isinstance(func, Closure):
    raise type_mismatch_error("call", "a Function", func, node)
  return call_closure(func, env, args, context)


# ============================================================================
# BUILT-IN OPERATION CATALOG
# ============================================================================

BUILTIN_OPERATIONS: Dict[str, Dict] = {
    # Variables
    "def": make_builtin_operation("def", op_def, 2, False, "(def name value) => value"),
    "mut": make_builtin_operation("mut", op_mut, 2, False, "(mut name value) => value"),
    "var": make_builtin_operation("var", op_var, 0, False, "(var name) => value"),
    "inc": make_builtin_operation("inc", op_inc, 2, True, "(inc name delta) => value"),
    "dec": make_builtin_operation("dec", op_dec, 2, True, "(dec name delta) => value"),

    # Control flow
    "block": make_builtin_operation("block", op_block, 0, False, "(block op...) => any"),
    "noop": make_builtin_operation("noop", op_noop, 0, True, "(noop) => null"),
    "if": make_builtin_operation("if", op_if, 2, False, "(if condition thenOp elseOp?) => any"),
    "while": make_builtin_operation("while", op_while, 2, True, "(while condition body) => list"),
    "for": make_builtin_operation("for", op_for, 5, True, "(for varName start stop step body) => list"),
    "map": make_builtin_operation("map", op_map, 3, True, "(map list varName body) => list"),
    "filter": make_builtin_operation("filter", op_filter, 3, True, "(filter list varName body) => list"),
    "reduce": make_builtin_operation("reduce", op_reduce, 4, True, "(reduce list accName elemName body) => any"),

    # I/O
    "print": make_builtin_operation("print", op_print, 0, False, "(print value...) => string"),
    "read": make_builtin_operation("read", op_read, 2, True, "(read promptMessage defaultValue) => string"),

    # Types
    "l": make_builtin_operation("l", op_l, 0, True, "(l) => literal"),
    "int": make_builtin_operation("int", op_int, 0, False, "(int value) => number"),
    "float": make_builtin_operation("float", op_float, 0, False, "(float value) => number"),
    "str": make_builtin_operation("str", op_str, 0, False, "(str value) => string"),
    "list": make_builtin_operation("list", op_list, 0, False, "(list value...) => list"),

    # Boolean
    "bool": make_builtin_operation("bool", op_bool, 0, False, "(bool value) => bool"),
    "true": make_builtin_operation("true", op_true, 0, False, "(true value?) => bool"),
    "false": make_builtin_operation("false", op_false, 0, False, "(false value?) => bool"),
    "and": make_builtin_operation("and", op_and, 0, False, "(and value...) => any"),
    "or": make_builtin_operation("or", op_or, 0, False, "(or value...) => any"),
    "not": make_builtin_operation("not", op_not, 1, True, "(not value) => bool"),

    # Math
    "add": make_builtin_operation("add", _arithmetic("add", hl_add), 0, False, "(add value...) => number"),
    "sub": make_builtin_operation("sub", _arithmetic("sub", hl_sub), 0, False, "(sub value...) => number"),
    "mul": make_builtin_operation("mul", _arithmetic("mul", hl_mul), 0, False, "(mul value...) => number"),
    "div": make_builtin_operation("div", _arithmetic("div", hl_div), 0, False, "(div value...) => number"),
    "mod": make_builtin_operation("mod", _arithmetic("mod", hl_mod), 0, False, "(mod value...) => number"),
    "pow": make_builtin_operation("pow", _arithmetic("pow", hl_pow), 0, False, "(pow value...) => number"),

    # Comparison
    "eq": make_builtin_operation("eq", op_eq, 2, False, "(eq first other...) => bool"),
    "ne": make_builtin_operation("ne", op_ne, 2, False, "(ne first other...) => bool"),
    "gt": make_builtin_operation("gt", _ordering("gt"), 2, False, "(gt first other...) => bool"),
    "gte": make_builtin_operation("gte", _ordering("gte"), 2, False, "(gte first other...) => bool"),
    "lt": make_builtin_operation("lt", _ordering("lt"), 2, False, "(lt first other...) => bool"),
    "lte": make_builtin_operation("lte", _ordering("lte"), 2, False, "(lte first other...) => bool"),

    # Strings and lists
    "concat": make_builtin_operation("concat", op_concat, 2, False, "(concat value value...) => string"),
    "split": make_builtin_operation("split", op_split, 2, True, "(split string sep) => list"),
    "len": make_builtin_operation("len", op_len, 1, True, "(len iterable) => number"),
    "append": make_builtin_operation("append", op_append, 2, True, "(append list value) => list"),
    "fst": make_builtin_operation("fst", op_fst, 1, True, "(fst iterable) => any"),
    "lst": make_builtin_operation("lst", op_lst, 1, True, "(lst iterable) => any"),
    "slice": make_builtin_operation("slice", op_slice, 3, True, "(slice iterable start stop) => iterable"),
    "idx": make_builtin_operation("idx", op_idx, 2, False, "(idx iterable index newValue?) => any"),
    "tuple": make_builtin_operation("tuple", op_tuple, 2, True, "(tuple first second) => list"),

    # Objects
    "obj": make_builtin_operation("obj", op_obj, 1, False, "(obj listOfTuples) => object"),
    "key": make_builtin_operation("key", op_key, 2, False, "(key object key newValue?) => value"),
    "has-key": make_builtin_operation("has-key", op_has_key, 2, False, "(has-key object key) => bool"),

    # Functions
    "func": make_builtin_operation("func", op_func, 2, True, "(func paramNameList body) => function"),
    "call": make_builtin_operation("call", op_call, 1, False, "(call function argList?) => any"),
}


def validate_catalog(catalog: Dict[str, Dict]) -> None:
  """Reject malformed catalog entries at import time"""
  for name, operation in catalog.items():
    if name != name.lower() or name != operation['name']:
      raise RuntimeError(f"Catalog entry {name!r} must be keyed by its lowercase name")
    if not callable(operation['handler']):
      raise RuntimeError(f"Catalog entry {name!r} has no handler")
    if operation['min_children'] < 0:
      raise RuntimeError(f"Catalog entry {name!r} has a negative child count")


validate_catalog(BUILTIN_OPERATIONS)


def list_builtin_operations() -> List[str]:
  """List all available built-in operations"""
  return list(BUILTIN_OPERATIONS.keys())


# ============================================================================
# PROGRAM EVALUATION
# ============================================================================

def run(nodes: Sequence[Node], root_env: Optional[Environment] = None, io: Any = None,
        style: Optional[OutputStyle] = None, debug: bool = False) -> RunResult:
  """
  Evaluate root nodes in order against one root environment.
  A failing node is reported and recorded; the following nodes still run.
  """
  context = make_execution_context(io, style, debug)
  env = root_env if root_env is not None else create_root_environment()
  result = RunResult(env)

  for node in nodes:
    try:
      result.values.append(evaluate(node, env, context))
    except HtmLispError as e:
      result.values.append(None)
      result.errors.append(e)
      context['io'].report(e)
      if debug:
        print(f"Failed: {e}")

  return result


def run_document(document: Document, root_env: Optional[Environment] = None, io: Any = None,
                 debug: bool = False) -> RunResult:
  """Run a parsed document with the output style its root element configures"""
  style = style_from_attributes(document.attributes)
  return run(document.nodes, root_env, io, style, debug)


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================

class Interpreter:
  """Holds one root environment across successive runs"""

  def __init__(self, io: Any = None, debug: bool = False, root_env: Optional[Environment] = None):
    self.io = io if io is not None else ConsoleIO()
    self.debug = debug
    self.global_env = root_env if root_env is not None else create_root_environment()
    self.style = OutputStyle()

  def configure(self, attributes: Dict[str, str]) -> None:
    """Read the output style from root element attributes"""
    self.style = style_from_attributes(attributes)

  def interpret(self, nodes: Sequence[Node]) -> RunResult:
    return run(nodes, self.global_env, self.io, self.style, self.debug)

  def interpret_document(self, document: Document) -> RunResult:
    self.configure(document.attributes)
    return self.interpret(document.nodes)

  def evaluate(self, node: Node) -> Any:
    """Evaluate a single node, letting its failure propagate"""
    context = make_execution_context(self.io, self.style, self.debug)
    return evaluate(node, self.global_env, context)


def create_interpreter(debug: bool = False, io: Any = None) -> Interpreter:
  """Factory function returning an interpreter"""
  return Interpreter(io=io, debug=debug)


def create_debug_interpreter(io: Any = None) -> Interpreter:
  """Factory function returning a debug interpreter"""
  return create_interpreter(debug=True, io=io)
