"""
htmlisp Static Checks - Pure Functional Style
Walks a node tree before evaluation and reports the failures that are
knowable without running it: unknown tags and wrong child counts
"""

from typing import Callable, Dict, List, Optional, Sequence
from parsing import Node
from interpreter import BUILTIN_OPERATIONS


# ============================================================================
# DATA STRUCTURES (Immutable Dictionaries)
# ============================================================================

def make_diagnostic(kind: str, message: str, node: Node, path: Sequence[str]) -> Dict:
  """Create an immutable diagnostic dictionary"""
  return {
      'kind': kind,
      'message': message,
      'tag': node.tag,
      'span': node.span,
      'path': tuple(path)
  }


def format_diagnostic(diagnostic: Dict) -> str:
  """Render a diagnostic the way runtime failures are rendered"""
  location = f" at {diagnostic['span']}" if diagnostic['span'] else ""
  path = "/".join(diagnostic['path'])
  return f"{diagnostic['kind']}: {diagnostic['message']} (in {path}{location})"


# ============================================================================
# NODE CHECKS
# ============================================================================

def check_arity(node: Node, operation: Dict) -> Optional[str]:
  """Describe a child count violation, None when the count is acceptable"""
  count = operation['min_children']
  got = len(node.children)
  tag = node.tag.upper()
  if operation['exact'] and got != count:
    return f"{tag} requires exactly {count} child element(s), got {got}"
  if got < count:
    return f"{tag} requires at least {count} child element(s), got {got}"
  return None


def check_node(node: Node, path: List[str], debug: bool = False) -> List[Dict]:
  """Check a node and everything below it"""
  path = path + [node.tag]
  if debug:
    print(f"Checking {'/'.join(path)}")

  operation = BUILTIN_OPERATIONS.get(node.tag.lower())
  if operation is None:
    diagnostics = [make_diagnostic("UnknownOperation", f"Undefined tag: {node.tag}", node, path)]
  else:
    problem = check_arity(node, operation)
    diagnostics = [make_diagnostic("ArityError", problem, node, path)] if problem else []

  for child in node.children:
    diagnostics.extend(check_node(child, path, debug))
  return diagnostics


def check_program(nodes: Sequence[Node], debug: bool = False) -> List[Dict]:
  """Check every root node; an empty result means nothing was found"""
  diagnostics = []
  for node in nodes:
    diagnostics.extend(check_node(node, [], debug))
  if debug:
    print(f"Checked {len(nodes)} root nodes, {len(diagnostics)} problems")
  return diagnostics


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================

def create_analyzer(debug: bool = False) -> Callable[[Sequence[Node]], List[Dict]]:
  """Create a program checker"""
  def analyzer(nodes: Sequence[Node]) -> List[Dict]:
    return check_program(nodes, debug)

  return analyzer


def create_debug_analyzer() -> Callable[[Sequence[Node]], List[Dict]]:
  """Create a program checker with debug enabled"""
  return create_analyzer(debug=True)
