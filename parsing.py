"""
htmlisp markup parser
Turns an htm-lisp document into a tree of Nodes with source spans
"""

from typing import List, Dict, Any, Optional, Tuple, Sequence
from dataclasses import dataclass, field
import html
import re

from pyparsing import (
    Forward, Group, Regex, Suppress, ZeroOrMore, QuotedString,
    Optional as PyParsingOptional, StringEnd, ParserElement,
    ParseBaseException, ParseFatalException, lineno, col
)

from error_handling import HtmLispParseError, parse_error_from_exception

# Enable packrat parsing for performance
ParserElement.enable_packrat()


ROOT_TAG = "htm-lisp"


@dataclass(frozen=True)
class SourceSpan:
    """Source location of a node's opening tag"""
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Node:
    """One element of a program: a tag, its attributes, and text or children"""
    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    text: Optional[str] = None
    children: Tuple['Node', ...] = ()
    span: Optional[SourceSpan] = field(default=None, compare=False)

    def __post_init__(self):
        if self.children and self.text is not None:
            raise ValueError(f"<{self.tag}> cannot have both text and child nodes")

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def __str__(self) -> str:
        if self.children:
            children_str = ", ".join(str(child) for child in self.children)
            return f"{self.tag}([{children_str}])"
        return f"{self.tag}({self.text!r})"


def make_node(
    tag: str,
    attributes: Optional[Dict[str, str]] = None,
    text: Optional[str] = None,
    children: Optional[Sequence[Node]] = None,
    span: Optional[SourceSpan] = None
) -> Node:
    """Build a node; a node without children always carries text"""
    if children:
        if text:
            raise ValueError(f"<{tag}> cannot have both text and child nodes")
        return Node(tag, dict(attributes or {}), None, tuple(children), span)
    return Node(tag, dict(attributes or {}), text or "", (), span)


@dataclass(frozen=True)
class Document:
    """A parsed document: its program nodes plus the root element, if any"""
    nodes: Tuple[Node, ...]
    root: Optional[Node] = None
    filename: str = "<input>"

    @property
    def attributes(self) -> Dict[str, str]:
        return dict(self.root.attributes) if self.root else {}


class HtmLispGrammar:
    """Markup grammar definition using pyparsing"""

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.filename = "<input>"
        self._setup_grammar()

    def _setup_grammar(self):
        """Setup elements, attributes, text runs and the ignorable markup"""

        element = Forward()

        # Tag names directly follow '<' or '</'
        tag_name = Regex(r'[A-Za-z][A-Za-z0-9_:.\-]*').leave_whitespace()

        attr_name = Regex(r'[A-Za-z_:][A-Za-z0-9_:.\-]*')
        attr_value = (
            QuotedString('"', multiline=True) |
            QuotedString("'", multiline=True) |
            Regex(r'[^\s"\'=<>`]+')
        )
        attribute = Group(attr_name + PyParsingOptional(Suppress("=") + attr_value, default=""))
        attributes = Group(ZeroOrMore(attribute))

        # Ignorable markup
        comment = Regex(r'<!--.*?-->', re.DOTALL)
        doctype = Regex(r'<![A-Za-z][^>]*>')
        processing = Regex(r'<\?.*?\?>', re.DOTALL)
        ignorable = Suppress(comment | doctype | processing)

        # Raw text keeps its surrounding whitespace
        text = Regex(r'[^<]+').leave_whitespace()

        empty_element = (
            Suppress("<") + tag_name + attributes + Suppress("/>")
        ).set_parse_action(self._make_empty_element)

        full_element = (
            Suppress("<") + tag_name + attributes + Suppress(">") +
            Group(ZeroOrMore(ignorable | element | text)) +
            Suppress("</") + tag_name + Suppress(">")
        ).set_parse_action(self._make_full_element)

        element <<= empty_element | full_element

        # Stray top-level text is not part of the program
        stray_text = Suppress(Regex(r'[^<]+'))

        self.element = element
        self.fragment = ZeroOrMore(ignorable | element | stray_text) + StringEnd()

    def _span(self, source: str, loc: int) -> SourceSpan:
        return SourceSpan(self.filename, lineno(loc, source), col(loc, source))

    def _attributes(self, tokens: Any) -> Dict[str, str]:
        # HTML attribute names are case-insensitive
        return {str(name).lower(): html.unescape(str(value)) for name, value in tokens}

    def _make_empty_element(self, source: str, loc: int, tokens: Any) -> Node:
        return make_node(
            str(tokens[0]).lower(),
            self._attributes(tokens[1]),
            span=self._span(source, loc)
        )

    def _make_full_element(self, source: str, loc: int, tokens: Any) -> Node:
        open_tag, attrs, content, close_tag = tokens[0], tokens[1], tokens[2], tokens[3]
        if open_tag.lower() != close_tag.lower():
            raise ParseFatalException(
                source, loc,
                f"closing tag </{close_tag}> does not match <{open_tag}>"
            )

        children = [item for item in content if isinstance(item, Node)]
        text = None
        if not children:
            text = html.unescape("".join(item for item in content if isinstance(item, str)))

        if self.debug:
            print(f"Parsed <{open_tag.lower()}> at line {lineno(loc, source)}")

        return make_node(
            open_tag.lower(),
            self._attributes(attrs),
            text=text,
            children=children,
            span=self._span(source, loc)
        )

    def parse_fragment(self, text: str, filename: str = "<input>") -> List[Node]:
        """Parse markup into its top-level nodes"""
        self.filename = filename
        try:
            result = self.fragment.parse_string(text, parse_all=True)
        except ParseBaseException as e:
            raise parse_error_from_exception(e, text, filename) from e
        return [item for item in result if isinstance(item, Node)]


def find_root(nodes: Sequence[Node]) -> Optional[Node]:
    """Find the first htm-lisp element, depth first"""
    for node in nodes:
        if node.tag == ROOT_TAG:
            return node
        found = find_root(node.children)
        if found is not None:
            return found
    return None


class HtmLispParser:
    """Main parser: markup text to Documents"""

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.grammar = HtmLispGrammar(debug)

    def parse_file(self, filepath: str) -> Document:
        """Parse an htm-lisp document file"""
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise HtmLispParseError(f"File not found: {filepath}", filepath)
        except UnicodeDecodeError as e:
            raise HtmLispParseError(f"Cannot decode file {filepath}: {e}", filepath)
        return self.parse_string(content, filepath)

    def parse_string(self, text: str, filename: str = "<input>") -> Document:
        """Parse a document; its program is the root element's children"""
        nodes = self.grammar.parse_fragment(text, filename)
        root = find_root(nodes)
        if self.debug:
            print(f"Parsed {len(nodes)} top-level nodes, root: {'<' + ROOT_TAG + '>' if root else 'none'}")
        if root is None:
            return Document(tuple(nodes), None, filename)
        return Document(root.children, root, filename)

    def parse_fragment(self, text: str, filename: str = "<input>") -> List[Node]:
        """Parse a markup snippet into nodes, without root discovery"""
        return self.grammar.parse_fragment(text, filename)


# Factory functions for creating parsers
def create_parser(debug: bool = False) -> HtmLispParser:
    """Create an htmlisp parser"""
    return HtmLispParser(debug=debug)


def create_debug_parser() -> HtmLispParser:
    """Create an htmlisp parser with debug enabled"""
    return HtmLispParser(debug=True)


# Utility functions for working with node trees
def find_nodes_by_tag(tree: Node, tag: str) -> List[Node]:
    """Find all nodes with a given tag"""
    result = []
    wanted = tag.lower()

    def search(node: Node):
        if node.tag.lower() == wanted:
            result.append(node)
        for child in node.children:
            search(child)

    search(tree)
    return result


def pretty_print_tree(node: Node, indent: int = 0) -> str:
    """Pretty print a node tree for debugging"""
    result = "  " * indent + node.tag
    if node.attributes:
        attrs = " ".join(f'{name}="{value}"' for name, value in node.attributes.items())
        result += f" [{attrs}]"
    if not node.children:
        result += f" {node.text!r}"
    result += "\n"

    for child in node.children:
        result += pretty_print_tree(child, indent + 1)

    return result


def node_to_dict(node: Node) -> Dict[str, Any]:
    """Convert a node tree to dictionary representation"""
    return {
        "tag": node.tag,
        "attributes": dict(node.attributes),
        "text": node.text,
        "span": {
            "filename": node.span.filename,
            "line": node.span.line,
            "column": node.span.column,
        } if node.span else None,
        "children": [node_to_dict(child) for child in node.children]
    }
