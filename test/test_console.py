"""
Console channel tests for htmlisp
"""

import io
import pytest
from console import (
    ConsoleIO, OutputStyle, RecordingIO, color_to_rgb, colorize, style_from_attributes, ANSI_RESET
)
from error_handling import KeyNotFound


class TestOutputStyle:
  """Test style defaults and colour resolution"""

  def test_defaults(self):
    style = style_from_attributes({})
    assert style == OutputStyle()
    assert style.color == "chartreuse"
    assert style.font_size == "12px"

  def test_attributes_override(self):
    style = style_from_attributes({"color": "#00ff00", "font-family": "serif"})
    assert style.color == "#00ff00"
    assert style.font_family == "serif"

  def test_color_to_rgb(self):
    assert color_to_rgb("Chartreuse") == (127, 255, 0)
    assert color_to_rgb("#f00") == (255, 0, 0)
    assert color_to_rgb("#0080ff") == (0, 128, 255)
    assert color_to_rgb("papayawhip") is None

  def test_colorize(self):
    assert colorize("hi", "red") == f"\x1b[38;2;255;0;0mhi{ANSI_RESET}"
    assert colorize("hi", "nonsense") == "hi"


class TestConsoleIO:
  """Test terminal channels"""

  def test_emit_plain(self):
    out = io.StringIO()
    console = ConsoleIO(use_color=False, stream=out)
    console.emit("hello", OutputStyle())
    assert out.getvalue() == "hello\n"

  def test_emit_coloured(self):
    out = io.StringIO()
    console = ConsoleIO(use_color=True, stream=out)
    console.emit("hello", OutputStyle(color="red"))
    assert out.getvalue() == f"\x1b[38;2;255;0;0mhello{ANSI_RESET}\n"

  def test_colour_off_when_not_a_terminal(self):
    assert ConsoleIO(stream=io.StringIO()).use_color is False

  def test_request(self):
    prompts = []

    def answer(prompt):
      prompts.append(prompt)
      return "Bob"

    console = ConsoleIO(input_func=answer)
    assert console.request("Name?", "anon") == "Bob"
    assert prompts == ["Name? [anon] "]

  def test_request_empty_answer_gives_default(self):
    console = ConsoleIO(input_func=lambda prompt: "")
    assert console.request("Name?", "anon") == "anon"

  def test_request_closed_input_gives_default(self):
    def closed(prompt):
      raise EOFError

    console = ConsoleIO(input_func=closed)
    assert console.request("Name?", "anon") == "anon"

  def test_report(self):
    err = io.StringIO()
    console = ConsoleIO(error_stream=err)
    console.report(KeyNotFound("Key not found: a"))
    assert err.getvalue() == "KeyNotFound: Key not found: a\n"


class TestRecordingIO:
  """Test in-memory channels"""

  def test_records_lines_and_prompts(self):
    recording = RecordingIO(["first", None])
    recording.emit("a", OutputStyle())
    recording.emit("b", OutputStyle())
    assert recording.output == "a\nb"
    assert recording.request("q1", "d1") == "first"
    assert recording.request("q2", "d2") == "d2"
    assert recording.request("q3", "d3") == "d3"
    assert recording.prompts == [("q1", "d1"), ("q2", "d2"), ("q3", "d3")]
