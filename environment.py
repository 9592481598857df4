"""
Variable storage for the htmlisp interpreter

Variables live in Cells. An Environment maps names to Cells in two
layers: `outer`, the cells visible from enclosing scopes, and `local`,
the cells declared in this scope. Deriving a child environment copies
cell references, never cell contents, so a write through a shared cell
is seen by every scope holding it while a new declaration shadows.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple

from error_handling import UndefinedVariable


# ============================================================================
# DATA STRUCTURES
# ============================================================================

class Cell:
  """A named mutable storage location for one value"""

  __slots__ = ('name', 'value')

  def __init__(self, name: str, value: Any = None):
    self.name = name
    self.value = value

  def __repr__(self) -> str:
    return f"Cell({self.name!r}, {self.value!r})"


@dataclass(frozen=True, eq=False)
class Closure:
  """A callable value: parameter names and an unevaluated body.

  It holds no environment: a call runs the body in an extension of the
  environment active at the call site.
  """
  params: Tuple[str, ...]
  body: Any

  def __str__(self) -> str:
    return f"<function({', '.join(self.params)})>"


class Environment:
  """The pair of name-to-cell mappings visible during one evaluation"""

  def __init__(self, outer: Optional[Dict[str, Cell]] = None, local: Optional[Dict[str, Cell]] = None):
    self.outer: Dict[str, Cell] = outer if outer is not None else {}
    self.local: Dict[str, Cell] = local if local is not None else {}

  # ==========================================================================
  # SCOPE OPERATIONS
  # ==========================================================================

  def derive(self) -> 'Environment':
    """Child environment sharing every visible cell, with an empty local layer"""
    return Environment({**self.outer, **self.local}, {})

  def resolve(self, name: str) -> Optional[Cell]:
    """The cell a name refers to, local first"""
    if name in self.local:
      return self.local[name]
    return self.outer.get(name)

  def define(self, name: str, value: Any) -> Any:
    """Declare name in the local layer; an existing local cell is overwritten in place"""
    cell = self.local.get(name)
    if cell is None:
      self.local[name] = Cell(name, value)
    else:
      cell.value = value
    return value

  def assign(self, name: str, value: Any, node: Any = None) -> Any:
    """Write through the cell a name resolves to"""
    cell = self.resolve(name)
    if cell is None:
      raise UndefinedVariable(f"Undefined variable {name}", node)
    cell.value = value
    return value

  def lookup(self, name: str, node: Any = None) -> Any:
    """Current value of the cell a name resolves to"""
    cell = self.resolve(name)
    if cell is None:
      raise UndefinedVariable(f"Undefined variable {name}", node)
    return cell.value

  def forget(self, name: str) -> None:
    """Drop a local declaration"""
    self.local.pop(name, None)

  # ==========================================================================
  # INSPECTION
  # ==========================================================================

  def __contains__(self, name: str) -> bool:
    return self.resolve(name) is not None

  def names(self) -> Iterator[str]:
    """Every visible name, each once"""
    return iter({**self.outer, **self.local})

  def snapshot(self) -> Dict[str, Any]:
    """Visible names mapped to their current values"""
    return {name: cell.value for name, cell in {**self.outer, **self.local}.items()}

  def __repr__(self) -> str:
    return f"Environment(outer={sorted(self.outer)}, local={sorted(self.local)})"


def create_root_environment() -> Environment:
  """The process-wide environment a host hands to run()"""
  return Environment()
