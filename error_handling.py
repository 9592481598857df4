"""
Error handling for htmlisp
Flat runtime failure taxonomy plus markup parse errors with source excerpts
"""

from typing import List, Optional, Any, Tuple
from pyparsing import ParseBaseException
import re


# ============================================================================
# RUNTIME FAILURES
# ============================================================================

class HtmLispError(Exception):
    """Base for every failure raised while evaluating a node"""
    kind = "Error"

    def __init__(self, message: str, node: Any = None):
        self.message = message
        self.node = node
        super().__init__(message)

    @property
    def tag(self) -> Optional[str]:
        return getattr(self.node, 'tag', None)

    @property
    def span(self) -> Any:
        return getattr(self.node, 'span', None)

    def __str__(self) -> str:
        return format_runtime_error(self)


class UnknownOperation(HtmLispError):
    kind = "UnknownOperation"


class ArityError(HtmLispError):
    kind = "ArityError"


class UndefinedVariable(HtmLispError):
    kind = "UndefinedVariable"


class IndexOutOfBounds(HtmLispError):
    kind = "IndexOutOfBounds"


class EmptyCollection(HtmLispError):
    kind = "EmptyCollection"


class KeyNotFound(HtmLispError):
    kind = "KeyNotFound"


class TypeMismatch(HtmLispError):
    kind = "TypeMismatch"


class InvalidArgument(HtmLispError):
    kind = "InvalidArgument"


def format_runtime_error(error: HtmLispError) -> str:
    """Format a runtime failure as kind, message and location"""
    result = f"{error.kind}: {error.message}"
    if error.tag:
        result += f" (in <{error.tag.lower()}>"
        if error.span:
            result += f" at {error.span}"
        result += ")"
    return result


# ============================================================================
# MARKUP INSPECTION
# ============================================================================

_OPEN_TAG = re.compile(r'<([A-Za-z][A-Za-z0-9_:.\-]*)(?:\s[^<>]*?)?(/?)>')
_CLOSE_TAG = re.compile(r'</([A-Za-z][A-Za-z0-9_:.\-]*)\s*>')
_IGNORED_MARKUP = re.compile(r'<!--.*?-->|<![A-Za-z][^>]*>|<\?.*?\?>', re.DOTALL)
_TAG_START = re.compile(r'</?[A-Za-z][A-Za-z0-9_:.\-]*')


def count_tags(text: str) -> Tuple[int, int]:
    """Count opening (not self-closing) and closing tags, skipping comments"""
    text = _IGNORED_MARKUP.sub("", text)
    opened = sum(1 for m in _OPEN_TAG.finditer(text) if not m.group(2))
    closed = len(_CLOSE_TAG.findall(text))
    return opened, closed


def unclosed_tag_count(text: str) -> int:
    """How many more opening tags than closing tags the text holds"""
    opened, closed = count_tags(text)
    return max(0, opened - closed)


def describe_found(source_text: str, loc: int) -> str:
    """Name what sits at a position: a tag, a text excerpt or the end of input"""
    rest = source_text[loc:]
    if not rest.strip():
        return "end of input"
    rest = rest.lstrip()
    tag = _TAG_START.match(rest)
    if tag:
        return f"tag {tag.group(0)}>"
    return repr(rest.split("\n", 1)[0][:12])


def source_excerpt(source_text: str, line_num: int, col_num: int, radius: int = 2) -> str:
    """Numbered source lines around a position, with a caret under the column"""
    lines = source_text.split('\n')
    first = max(1, line_num - radius)
    last = min(len(lines), line_num + radius)
    width = len(str(last))

    excerpt = []
    for number in range(first, last + 1):
        excerpt.append(f"  {number:>{width}} | {lines[number - 1]}")
        if number == line_num:
            excerpt.append(f"  {'':>{width}} | {' ' * (col_num - 1)}^")
    return '\n'.join(excerpt)


def suggest_fixes(message: str, found: str, source_text: str) -> List[str]:
    """Hints for the usual markup mistakes"""
    hints = []

    if "does not match" in message:
        hints.append("Every <tag> needs a matching </tag>, closed in the reverse order of opening")

    missing = unclosed_tag_count(source_text)
    if missing:
        hints.append(f"{missing} element(s) never closed; add the closing tag or write it as <tag/>")

    if found.startswith("tag <") and "end of text" in message:
        hints.append("Elements must nest; check for a stray closing tag or a tag missing its '>'")

    if re.search(r'=\s*[^\s"\'<>=]+=', source_text):
        hints.append("Quote attribute values that contain '=', e.g. sep=\"a=b\"")

    return hints


# ============================================================================
# MARKUP PARSE ERRORS
# ============================================================================

class HtmLispParseError(Exception):
    """Markup could not be turned into a node tree"""

    def __init__(self, message: str, filename: str = "<input>", line: int = 0, column: int = 0,
                 found: Optional[str] = None, excerpt: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        self.message = message
        self.filename = filename
        self.line = line
        self.column = column
        self.found = found
        self.excerpt = excerpt
        self.suggestions = suggestions or []
        super().__init__(message)

    def __str__(self) -> str:
        return format_parse_error(self)


def format_parse_error(error: HtmLispParseError) -> str:
    """Location and message, then what was found, the excerpt and any hints"""
    if error.line:
        report = f"{error.filename}:{error.line}:{error.column}: {error.message}"
    else:
        report = error.message
    if error.found:
        report += f"\n  found {error.found}"
    if error.excerpt:
        report += f"\n{error.excerpt}"
    for hint in error.suggestions:
        report += f"\n  hint: {hint}"
    return report


def parse_error_from_exception(exc: ParseBaseException, source_text: str,
                               filename: str = "<input>") -> HtmLispParseError:
    """Convert a pyparsing failure into an HtmLispParseError"""
    message = exc.msg
    found = describe_found(source_text, exc.loc)
    return HtmLispParseError(
        message=message,
        filename=filename,
        line=exc.lineno,
        column=exc.column,
        found=found,
        excerpt=source_excerpt(source_text, exc.lineno, exc.column),
        suggestions=suggest_fixes(message, found, source_text)
    )
