"""
Console I/O for htmlisp
Output sink, input source and failure reporting used by the interpreter
"""

from typing import Callable, Dict, List, Optional, Sequence, TextIO, Tuple
from dataclasses import dataclass
import re
import sys


DEFAULT_COLOR = "chartreuse"
DEFAULT_FONT_FAMILY = "'Courier New', Lucida Console, monospace"
DEFAULT_FONT_SIZE = "12px"


@dataclass(frozen=True)
class OutputStyle:
  """Presentation of printed lines, read from the root element's attributes"""
  color: str = DEFAULT_COLOR
  font_family: str = DEFAULT_FONT_FAMILY
  font_size: str = DEFAULT_FONT_SIZE


def style_from_attributes(attributes: Dict[str, str]) -> OutputStyle:
  """Missing attributes fall back to the defaults"""
  return OutputStyle(
      color=attributes.get('color', DEFAULT_COLOR),
      font_family=attributes.get('font-family', DEFAULT_FONT_FAMILY),
      font_size=attributes.get('font-size', DEFAULT_FONT_SIZE)
  )


# ============================================================================
# TERMINAL COLOURS
# ============================================================================

NAMED_COLORS: Dict[str, Tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "chartreuse": (127, 255, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "aqua": (0, 255, 255),
    "magenta": (255, 0, 255),
    "fuchsia": (255, 0, 255),
    "orange": (255, 165, 0),
    "purple": (128, 0, 128),
    "pink": (255, 192, 203),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "silver": (192, 192, 192),
}

_HEX_COLOR = re.compile(r'#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})')
ANSI_RESET = "\x1b[0m"


def color_to_rgb(color: str) -> Optional[Tuple[int, int, int]]:
  """
  Resolve a CSS colour name or hex literal

  Examples:
    color_to_rgb("Chartreuse") -> (127, 255, 0)
    color_to_rgb("#f00") -> (255, 0, 0)
    color_to_rgb("papayawhip") -> None
  """
  color = color.strip()
  match = _HEX_COLOR.fullmatch(color)
  if match:
    digits = match.group(1)
    if len(digits) == 3:
      digits = "".join(d * 2 for d in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
  return NAMED_COLORS.get(color.lower())


def colorize(line: str, color: str) -> str:
  """Wrap a line in a 24-bit ANSI foreground colour, if the colour is known"""
  rgb = color_to_rgb(color)
  if rgb is None:
    return line
  r, g, b = rgb
  return f"\x1b[38;2;{r};{g};{b}m{line}{ANSI_RESET}"


# ============================================================================
# I/O CHANNELS
# ============================================================================

class ConsoleIO:
  """Terminal channels: printed lines to stdout, prompts on stdin, failures to stderr"""

  def __init__(self, use_color: Optional[bool] = None, stream: Optional[TextIO] = None,
               error_stream: Optional[TextIO] = None,
               input_func: Callable[[str], str] = input):
    self.stream = stream or sys.stdout
    self.error_stream = error_stream or sys.stderr
    self.input_func = input_func
    if use_color is None:
      use_color = hasattr(self.stream, 'isatty') and self.stream.isatty()
    self.use_color = use_color

  def emit(self, line: str, style: OutputStyle) -> None:
    text = colorize(line, style.color) if self.use_color else line
    print(text, file=self.stream)

  def request(self, message: str, default: str) -> str:
    """Ask for a line; an empty answer or closed input gives the default"""
    prompt = f"{message} [{default}] " if default else f"{message} "
    try:
      answer = self.input_func(prompt)
    except EOFError:
      return default
    return answer if answer else default

  def report(self, error: Exception) -> None:
    print(str(error), file=self.error_stream)


class RecordingIO:
  """In-memory channels for embedding and tests"""

  def __init__(self, responses: Optional[Sequence[Optional[str]]] = None):
    self.lines: List[str] = []
    self.styles: List[OutputStyle] = []
    self.prompts: List[Tuple[str, str]] = []
    self.errors: List[Exception] = []
    self._responses = list(responses or [])

  def emit(self, line: str, style: OutputStyle) -> None:
    self.lines.append(line)
    self.styles.append(style)

  def request(self, message: str, default: str) -> str:
    """Answer from the scripted responses; None or exhaustion means the default"""
    self.prompts.append((message, default))
    if not self._responses:
      return default
    answer = self._responses.pop(0)
    return default if answer is None else answer

  def report(self, error: Exception) -> None:
    self.errors.append(error)

  @property
  def output(self) -> str:
    return "\n".join(self.lines)
