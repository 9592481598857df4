"""
Markup parsing tests for htmlisp
Tests elements, text, attributes, root discovery and parse errors
"""

import pytest
from parsing import (
    create_parser, make_node, find_nodes_by_tag, pretty_print_tree, node_to_dict, Node
)
from error_handling import HtmLispParseError


class TestElements:
  """Test element and text parsing"""

  def test_leaf_keeps_untrimmed_text(self, parser):
    nodes = parser.parse_fragment("<l>  42 </l>")
    assert len(nodes) == 1
    assert nodes[0].tag == "l"
    assert nodes[0].text == "  42 "
    assert nodes[0].children == ()

  def test_nested_children_ignore_whitespace(self, parser):
    nodes = parser.parse_fragment("<add>\n  <l>1</l>\n  <l>2</l>\n</add>")
    add = nodes[0]
    assert add.text is None
    assert [child.text for child in add.children] == ["1", "2"]

  def test_self_closing_element(self, parser):
    nodes = parser.parse_fragment("<noop/>")
    assert nodes[0].tag == "noop"
    assert nodes[0].text == ""

  def test_empty_element(self, parser):
    nodes = parser.parse_fragment("<l></l>")
    assert nodes[0].text == ""

  def test_tags_are_lowercased(self, parser):
    nodes = parser.parse_fragment("<ADD><L>1</L><l>2</l></ADD>")
    assert nodes[0].tag == "add"
    assert nodes[0].children[0].tag == "l"

  def test_comments_are_skipped(self, parser):
    nodes = parser.parse_fragment("<!-- start --><block><!-- inner --><l>1</l></block>")
    assert len(nodes) == 1
    assert len(nodes[0].children) == 1

  def test_entities_are_decoded(self, parser):
    nodes = parser.parse_fragment("<l>a &lt; b &amp;&amp; c</l>")
    assert nodes[0].text == "a < b && c"

  def test_span_records_line(self, parser):
    nodes = parser.parse_fragment("<block>\n  <l>1</l>\n</block>", "prog.html")
    child = nodes[0].children[0]
    assert child.span.filename == "prog.html"
    assert child.span.line == 2


class TestAttributes:
  """Test attribute parsing"""

  def test_quoted_attributes(self, parser):
    nodes = parser.parse_fragment('<print sep=", " color=\'red\'><l>a</l></print>')
    assert nodes[0].attributes == {"sep": ", ", "color": "red"}

  def test_unquoted_and_bare_attributes(self, parser):
    nodes = parser.parse_fragment("<print sep=- hidden>x</print>")
    assert nodes[0].attributes == {"sep": "-", "hidden": ""}

  def test_attribute_names_are_lowercased(self, parser):
    nodes = parser.parse_fragment('<htm-lisp Font-Size="14px"></htm-lisp>')
    assert nodes[0].attributes == {"font-size": "14px"}


class TestDocuments:
  """Test root discovery"""

  def test_root_found_depth_first(self, parser):
    text = """<!DOCTYPE html>
<html>
  <body>
    <htm-lisp color="red">
      <print>hi</print>
      <print>there</print>
    </htm-lisp>
  </body>
</html>"""
    document = parser.parse_string(text)
    assert document.root is not None
    assert [node.tag for node in document.nodes] == ["print", "print"]
    assert document.attributes == {"color": "red"}

  def test_without_root_top_level_elements_form_program(self, parser):
    document = parser.parse_string("<print>a</print>\n<print>b</print>")
    assert document.root is None
    assert len(document.nodes) == 2
    assert document.attributes == {}

  def test_parse_file(self, parser, tmp_path):
    path = tmp_path / "prog.html"
    path.write_text("<htm-lisp><print>hi</print></htm-lisp>", encoding="utf-8")
    document = parser.parse_file(str(path))
    assert document.filename == str(path)
    assert document.nodes[0].span.filename == str(path)

  def test_missing_file(self, parser, tmp_path):
    with pytest.raises(HtmLispParseError):
      parser.parse_file(str(tmp_path / "missing.html"))


class TestParseErrors:
  """Test malformed markup"""

  def test_mismatched_closing_tag(self, parser):
    with pytest.raises(HtmLispParseError) as exc_info:
      parser.parse_fragment("<add><l>1</l></sub>")
    assert "</sub>" in str(exc_info.value)
    assert any("matching" in s for s in exc_info.value.suggestions)

  def test_unclosed_element(self, parser):
    with pytest.raises(HtmLispParseError) as exc_info:
      parser.parse_fragment("<add><l>1</l>")
    assert exc_info.value.line == 1
    assert any("never closed" in s for s in exc_info.value.suggestions)

  def test_error_shows_context(self, parser):
    with pytest.raises(HtmLispParseError) as exc_info:
      parser.parse_fragment("<block>\n<l>1</x>\n</block>")
    report = str(exc_info.value)
    assert "2 | <l>1</x>" in report
    assert "^" in report


class TestNodeUtilities:
  """Test node construction and tree helpers"""

  def test_make_node_leaf_gets_text(self):
    node = make_node("l")
    assert node.text == ""
    assert not node.has_children

  def test_node_cannot_have_text_and_children(self):
    with pytest.raises(ValueError):
      Node("add", {}, "1", (make_node("l", text="2"),))

  def test_find_nodes_by_tag(self, parser):
    tree = parser.parse_fragment("<block><l>1</l><add><l>2</l><l>3</l></add></block>")[0]
    assert len(find_nodes_by_tag(tree, "L")) == 3

  def test_pretty_print_tree(self, parser):
    tree = parser.parse_fragment('<print sep="-"><l>a</l></print>')[0]
    assert pretty_print_tree(tree) == "print [sep=\"-\"]\n  l 'a'\n"

  def test_node_to_dict(self, parser):
    tree = parser.parse_fragment("<not><true/></not>")[0]
    data = node_to_dict(tree)
    assert data["tag"] == "not"
    assert data["children"][0]["tag"] == "true"
    assert data["span"]["line"] == 1
