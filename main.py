"""
htmlisp - Main Entry Point
A Lisp whose programs are written as HTML markup
"""

import sys
import argparse
from pathlib import Path
from typing import Any, List, Optional
import os

# Readline support for history and auto-completion
try:
  import readline
  READLINE_AVAILABLE = True
except ImportError:
  READLINE_AVAILABLE = False

from parsing import create_parser, create_debug_parser, pretty_print_tree
from semantics import create_analyzer, create_debug_analyzer, format_diagnostic
from interpreter import create_interpreter, create_debug_interpreter, list_builtin_operations
from console import ConsoleIO
from environment import Environment
from error_handling import HtmLispParseError, unclosed_tag_count
from stdlib import stringify


VERSION = "htmlisp 0.1.0"


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      prog='htmlisp',
      description='htmlisp - a Lisp written as HTML markup',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s program.html            # Run a program
  %(prog)s -i                      # Interactive mode
  %(prog)s --parse program.html    # Parse and show the node tree
  %(prog)s --check program.html    # Check tags and child counts without running
  %(prog)s --env program.html      # Run, then show the root environment
  %(prog)s --debug program.html    # Run with debug output
        """
  )

  parser.add_argument(
      'script',
      nargs='?',
      help='htm-lisp document to execute'
  )

  parser.add_argument(
      '-i', '--interactive',
      action='store_true',
      help='Start interactive mode'
  )

  parser.add_argument(
      '--parse',
      action='store_true',
      help='Parse file and show the node tree'
  )

  parser.add_argument(
      '--check',
      action='store_true',
      help='Check every tag against the built-in catalog without running'
  )

  parser.add_argument(
      '--env',
      action='store_true',
      help='Show the root environment after the run'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Enable debug output for all stages'
  )

  parser.add_argument(
      '--no-color',
      action='store_true',
      help='Never colour printed lines'
  )

  parser.add_argument(
      '--version',
      action='version',
      version=VERSION
  )

  return parser


def format_binding(name: str, value: Any, width: int = 60) -> str:
  """One environment entry, shortened to fit a line"""
  val_str = stringify(value).replace('\n', ' ')
  if len(val_str) > width:
    val_str = val_str[:width - 3] + "..."
  return f"  {name} = {val_str}"


def show_environment(env: Environment) -> None:
  """Print every visible binding"""
  bindings = env.snapshot()
  print(f"Root environment ({len(bindings)} bindings):")
  if not bindings:
    print("  (no bindings)")
  for name, value in bindings.items():
    print(format_binding(name, value))


def parse_file(script_path: str, debug: bool = False) -> int:
  """Parse an htm-lisp document and show its node tree"""
  parser = create_debug_parser() if debug else create_parser()
  try:
    document = parser.parse_file(script_path)
  except HtmLispParseError as e:
    print(f"Parse error in '{script_path}': {e}")
    return 1

  root = f"<{document.root.tag}>" if document.root else "none"
  print(f"Parsed {len(document.nodes)} program nodes (root: {root})")
  print("=" * 50)
  for i, node in enumerate(document.nodes, 1):
    print(f"\nNode {i}:")
    print(pretty_print_tree(node), end="")
  return 0


def check_file(script_path: str, debug: bool = False) -> int:
  """Check a document against the built-in catalog without running it"""
  parser = create_debug_parser() if debug else create_parser()
  analyzer = create_debug_analyzer() if debug else create_analyzer()
  try:
    document = parser.parse_file(script_path)
  except HtmLispParseError as e:
    print(f"Parse error in '{script_path}': {e}")
    return 1

  diagnostics = analyzer(document.nodes)
  for diagnostic in diagnostics:
    print(format_diagnostic(diagnostic))
  if diagnostics:
    print(f"{len(diagnostics)} problem(s) found in '{script_path}'")
    return 1
  print(f"No problems found in '{script_path}'")
  return 0


def run_script_file(script_path: str, debug: bool = False, show_env: bool = False,
                    no_color: bool = False) -> int:
  """Run an htm-lisp document; failing root nodes are reported and skipped"""
  parser = create_debug_parser() if debug else create_parser()
  io = ConsoleIO(use_color=False if no_color else None)
  interpreter = create_debug_interpreter(io) if debug else create_interpreter(io=io)

  try:
    document = parser.parse_file(script_path)
  except HtmLispParseError as e:
    print(f"Parse error in '{script_path}': {e}", file=sys.stderr)
    return 1

  if debug:
    print(f"Running {len(document.nodes)} program nodes from {script_path}")

  result = interpreter.interpret_document(document)

  if show_env:
    show_environment(result.environment)
  if debug:
    print(f"Finished with {len(result.errors)} failure(s)")
  return 0 if result.ok else 1


# ============================================================================
# INTERACTIVE MODE
# ============================================================================

def needs_more_input(text: str) -> bool:
  """True while some opening tag in text is still unclosed"""
  return unclosed_tag_count(text) > 0


def setup_readline() -> None:
  """Setup readline with history and auto-completion"""
  if not READLINE_AVAILABLE:
    return

  history_file = os.path.expanduser("~/.htmlisp_history")
  try:
    readline.read_history_file(history_file)
  except OSError:
    pass  # No history yet

  readline.set_history_length(1000)

  # Complete tag names after '<' or '</', and REPL commands
  completions = [f"<{name}>" for name in list_builtin_operations()]
  completions += [f"</{name}>" for name in list_builtin_operations()]
  completions += [":parse", ":check", ":env", ":help", ":quit"]

  def completer(text, state):
    options = [cmd for cmd in completions if cmd.startswith(text)]
    if state < len(options):
      return options[state]
    return None

  readline.set_completer_delims(" \t\n")
  readline.set_completer(completer)
  readline.parse_and_bind("tab: complete")

  import atexit
  atexit.register(readline.write_history_file, history_file)


def show_help() -> None:
  print("REPL Commands:")
  print("  :parse <markup>   - Show the parsed node tree")
  print("  :check <markup>   - Check tags and child counts")
  print("  :env              - Show the root environment")
  print("  :help             - Show this help")
  print("  :quit             - Exit REPL")
  print()
  print("Examples:")
  print("  <def><l>x</l><l>5</l></def>")
  print("  <print><add><var>x</var><l>1</l></add></print>")
  print("  <call><func><list><l>n</l></list><mul><var>n</var><l>2</l></mul></func><list><l>4</l></list></call>")


def run_interactive_mode(debug: bool = False, no_color: bool = False) -> None:
  """Run htmlisp interactively; definitions persist across inputs"""
  print(f"{VERSION} - Interactive Mode")
  print("Type ':quit' to exit, ':help' for commands")
  if READLINE_AVAILABLE:
    print("Readline enabled: Use up/down for history, Tab for completion")
  if debug:
    print("Debug mode enabled")
  print()

  setup_readline()

  parser = create_debug_parser() if debug else create_parser()
  analyzer = create_debug_analyzer() if debug else create_analyzer()
  io = ConsoleIO(use_color=False if no_color else None)
  interpreter = create_debug_interpreter(io) if debug else create_interpreter(io=io)

  buffer: List[str] = []
  while True:
    try:
      line = input("... " if buffer else "htmlisp> ")
    except (KeyboardInterrupt, EOFError):
      print("\nGoodbye!")
      break

    code = line.strip()
    if not buffer:
      if code in (":quit", "exit"):
        break
      if not code:
        continue
      if code == ":help":
        show_help()
        continue
      if code == ":env":
        show_environment(interpreter.global_env)
        continue
      if code.startswith(":parse "):
        try:
          for node in parser.parse_fragment(code[len(":parse "):]):
            print(pretty_print_tree(node), end="")
        except HtmLispParseError as e:
          print(e)
        continue
      if code.startswith(":check "):
        try:
          diagnostics = analyzer(parser.parse_fragment(code[len(":check "):]))
        except HtmLispParseError as e:
          print(e)
          continue
        for diagnostic in diagnostics:
          print(format_diagnostic(diagnostic))
        if not diagnostics:
          print("No problems found")
        continue

    buffer.append(line)
    source = "\n".join(buffer)
    if needs_more_input(source):
      continue
    buffer = []

    try:
      nodes = parser.parse_fragment(source, "<stdin>")
    except HtmLispParseError as e:
      print(e)
      continue

    result = interpreter.interpret(nodes)
    for node, value in zip(nodes, result.values):
      if node.tag != "print" and value is not None:
        print(f"=> {stringify(value)}")


def main(argv: Optional[List[str]] = None) -> int:
  """Main entry point for htmlisp"""
  arg_parser = create_arg_parser()
  args = arg_parser.parse_args(argv)

  if args.script:
    if not Path(args.script).exists():
      print(f"Error: Script file '{args.script}' does not exist")
      return 1

    if args.parse:
      return parse_file(args.script, debug=args.debug)
    if args.check:
      return check_file(args.script, debug=args.debug)
    return run_script_file(args.script, debug=args.debug, show_env=args.env,
                           no_color=args.no_color)

  if args.interactive:
    run_interactive_mode(debug=args.debug, no_color=args.no_color)
    return 0

  arg_parser.print_help()
  return 0


if __name__ == "__main__":
  sys.exit(main())
