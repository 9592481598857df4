"""
Test configuration for htmlisp tests
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from parsing import create_parser
from console import RecordingIO
from environment import create_root_environment
from interpreter import evaluate, make_execution_context, run


@pytest.fixture
def parser():
  """Provide a fresh parser for each test"""
  return create_parser()


@pytest.fixture
def recording_io():
  return RecordingIO()


@pytest.fixture
def run_markup(parser):
  """Run markup through the top-level loop; returns the run result and its IO"""
  def runner(markup, responses=None, env=None):
    io = RecordingIO(responses)
    result = run(parser.parse_fragment(markup), env, io)
    return result, io

  return runner


@pytest.fixture
def value_of(parser):
  """Evaluate markup directly, letting failures propagate; returns the last value"""
  def evaluate_markup(markup, env=None, io=None):
    env = env if env is not None else create_root_environment()
    context = make_execution_context(io or RecordingIO())
    value = None
    for node in parser.parse_fragment(markup):
      value = evaluate(node, env, context)
    return value

  return evaluate_markup
