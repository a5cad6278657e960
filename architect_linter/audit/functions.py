"""Function length scanning.

Every function-like construct with a body is measured on its own: a long
callback nested inside a long method yields two findings.
"""

from dataclasses import dataclass

from tree_sitter import Node

from architect_linter.audit.parser import ParsedSource, walk
from architect_linter.models.violation import Violation, ViolationKind

MAX_LINES_RULE_ID = "max-lines-per-function"

FUNCTION_NODE_TYPES = {
    "function_declaration": "function",
    "generator_function_declaration": "function",
    "function_expression": "function",
    "function": "function",  # older grammars
    "generator_function": "function",
    "arrow_function": "arrow",
    "method_definition": "method",
}

# Parent node type -> field holding the name bound to an anonymous function.
_BINDING_FIELDS = {
    "variable_declarator": "name",
    "public_field_definition": "name",
    "pair": "key",
    "assignment_expression": "left",
}

ANONYMOUS = "<anonymous>"


@dataclass(frozen=True)
class FunctionSpan:
    """Line extent of one function-like construct."""

    name: str
    kind: str
    start_line: int
    start_column: int
    end_line: int

    @property
    def span(self) -> int:
        return self.end_line - self.start_line + 1


def scan_functions(parsed: ParsedSource) -> list[FunctionSpan]:
    """Measure every function, method, constructor and arrow function."""
    spans: list[FunctionSpan] = []

    for node in walk(parsed.root):
        kind = FUNCTION_NODE_TYPES.get(node.type)
        if kind is None or not node.is_named:
            continue
        if node.child_by_field_name("body") is None:
            continue

        name = _function_name(parsed, node)
        if kind == "method" and name == "constructor":
            kind = "constructor"

        line, column = parsed.position(node)
        spans.append(FunctionSpan(
            name=name,
            kind=kind,
            start_line=line,
            start_column=column,
            end_line=parsed.end_line(node),
        ))

    return spans


def function_violations(
    file_path: str,
    spans: list[FunctionSpan],
    max_lines: int,
) -> list[Violation]:
    """Flag functions longer than ``max_lines``. Exactly ``max_lines`` is fine."""
    violations = []

    for function in spans:
        if function.span <= max_lines:
            continue
        violations.append(Violation(
            kind=ViolationKind.FUNCTION_TOO_LONG,
            file_path=file_path,
            line=function.start_line,
            column=function.start_column,
            message=(
                f"{function.kind.capitalize()} '{function.name}' is too long "
                f"({function.span} lines). Maximum: {max_lines}."
            ),
            rule_id=MAX_LINES_RULE_ID,
        ))

    return violations


def _function_name(parsed: ParsedSource, node: Node) -> str:
    name_node = node.child_by_field_name("name")
    if name_node is not None:
        return parsed.text(name_node)

    parent = node.parent
    if parent is not None:
        field = _BINDING_FIELDS.get(parent.type)
        if field is not None:
            binding = parent.child_by_field_name(field)
            # Only when the function is the bound value, not the key itself.
            if binding is not None and binding != node:
                return parsed.text(binding)

    return ANONYMOUS
