"""Static import extraction.

Only literal string specifiers are recognized. ``import("x")``, template
literals and computed ``require`` arguments are skipped; their
target cannot be known without evaluating the program.
"""

from dataclasses import dataclass
from enum import Enum

from tree_sitter import Node

from architect_linter.audit.parser import ParsedSource, walk


class ImportStyle(str, Enum):
    """Syntactic form of an import."""

    IMPORT = "import"
    IMPORT_REQUIRE = "import_require"
    EXPORT_FROM = "export_from"
    REQUIRE = "require"


@dataclass(frozen=True)
class ImportReference:
    """A module path literal and the 1-based position of its declaration."""

    module_path: str
    line: int
    column: int
    style: ImportStyle = ImportStyle.IMPORT


def extract_imports(parsed: ParsedSource) -> list[ImportReference]:
    """Extract static imports in source order."""
    imports: list[ImportReference] = []

    for node in walk(parsed.root):
        match node.type:
            case "import_statement":
                reference = _from_import_statement(parsed, node)
            case "export_statement":
                reference = _from_source_field(parsed, node, ImportStyle.EXPORT_FROM)
            case "call_expression":
                reference = _from_require_call(parsed, node)
            case _:
                reference = None

        if reference is not None:
            imports.append(reference)

    return imports


def _from_import_statement(parsed: ParsedSource, node: Node) -> ImportReference | None:
    # import x from "y" / import "y"
    reference = _from_source_field(parsed, node, ImportStyle.IMPORT)
    if reference is not None:
        return reference

    # import x = require("y")
    for child in node.named_children:
        if child.type == "import_require_clause":
            source = child.child_by_field_name("source")
            module_path = _string_literal(parsed, source)
            if module_path is not None:
                line, column = parsed.position(node)
                return ImportReference(module_path, line, column, ImportStyle.IMPORT_REQUIRE)
    return None


def _from_source_field(
    parsed: ParsedSource, node: Node, style: ImportStyle
) -> ImportReference | None:
    module_path = _string_literal(parsed, node.child_by_field_name("source"))
    if module_path is None:
        return None
    line, column = parsed.position(node)
    return ImportReference(module_path, line, column, style)


def _from_require_call(parsed: ParsedSource, node: Node) -> ImportReference | None:
    function = node.child_by_field_name("function")
    if function is None or function.type != "identifier" or parsed.text(function) != "require":
        return None

    arguments = node.child_by_field_name("arguments")
    if arguments is None or arguments.named_child_count != 1:
        return None

    module_path = _string_literal(parsed, arguments.named_children[0])
    if module_path is None:
        return None
    line, column = parsed.position(node)
    return ImportReference(module_path, line, column, ImportStyle.REQUIRE)


def _string_literal(parsed: ParsedSource, node: Node | None) -> str | None:
    """Value of a plain string literal node, or None for anything else."""
    if node is None or node.type != "string":
        return None

    parts = []
    for child in node.named_children:
        if child.type == "escape_sequence":
            parts.append(_unescape(parsed.text(child)))
        else:
            parts.append(parsed.text(child))
    return "".join(parts)


_SIMPLE_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0",
}


def _unescape(sequence: str) -> str:
    """Decode one JavaScript escape sequence such as ``\\\\``, ``\\x41`` or ``\\u{1F600}``."""
    body = sequence[1:]
    if body.startswith("u{") and body.endswith("}"):
        return chr(int(body[2:-1], 16))
    if body[:1] in ("x", "u") and len(body) > 1:
        return chr(int(body[1:], 16))
    if body in ("\n", "\r\n", "\r", "\u2028", "\u2029"):
        return ""
    return _SIMPLE_ESCAPES.get(body, body)
