"""TypeScript parsing on top of tree-sitter.

The ``SourceParser`` owns the compiled grammars only. tree-sitter ``Parser``
objects are not safe to share between threads, so one is created for every
``parse`` call; the grammars themselves are immutable and shared.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import PurePath

import structlog
import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser, Tree

from architect_linter.errors import ParseError

logger = structlog.get_logger()

TSX_SUFFIXES = (".tsx",)


@dataclass(frozen=True)
class ParsedSource:
    """A parsed file: the syntax tree plus the bytes it was built from."""

    tree: Tree
    source: bytes
    path: str | None = None

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node | None) -> str:
        """Get the source text of a node."""
        if node is None:
            return ""
        return self.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def position(self, node: Node) -> tuple[int, int]:
        """1-based (line, column) of a node's start.

        tree-sitter reports byte columns; the column returned here counts
        characters so it lines up with what an editor shows.
        """
        row, byte_column = node.start_point
        line_start = node.start_byte - byte_column
        prefix = self.source[line_start:node.start_byte].decode("utf-8", errors="replace")
        return row + 1, len(prefix) + 1

    def end_line(self, node: Node) -> int:
        return node.end_point[0] + 1


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all its descendants in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


class SourceParser:
    """Parses TypeScript (and TSX) source into tree-sitter syntax trees."""

    def __init__(self):
        self._typescript = Language(tstypescript.language_typescript())
        self._tsx = Language(tstypescript.language_tsx())
        self._logger = logger.bind(component="SourceParser")

    def language_for(self, path: str | None) -> Language:
        """Pick the grammar dialect from the file extension."""
        if path and PurePath(path).suffix.lower() in TSX_SUFFIXES:
            return self._tsx
        return self._typescript

    def parse(self, source_text: str, path: str | None = None) -> ParsedSource:
        """Parse source text.

        Args:
            source_text: TypeScript source code
            path: File path, used to select the TSX dialect

        Returns:
            ParsedSource wrapping the syntax tree

        Raises:
            ParseError: If the source contains a syntax error
        """
        source = source_text.encode("utf-8")
        parser = Parser(self.language_for(path))
        parsed = ParsedSource(tree=parser.parse(source), source=source, path=path)

        if parsed.root.has_error:
            error_node = _first_error(parsed.root)
            line, column = parsed.position(error_node)
            description = _describe_error(parsed, error_node)
            self._logger.debug("Syntax error", file=path, line=line, column=column)
            raise ParseError(line, column, description)

        return parsed


def _first_error(root: Node) -> Node:
    """Find the first ERROR or MISSING node in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        stack.extend(reversed([c for c in node.children if c.has_error]))
    return root


def _describe_error(parsed: ParsedSource, node: Node) -> str:
    if node.is_missing:
        return f"Missing '{node.type}'"

    snippet = parsed.text(node).strip().splitlines()
    if not snippet:
        return "Unexpected end of input"
    text = snippet[0]
    if len(text) > 40:
        text = text[:40] + "..."
    return f"Unexpected '{text}'"
