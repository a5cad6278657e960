"""Tests for the function length scanner."""

import pytest

from architect_linter.audit.functions import ANONYMOUS, function_violations, scan_functions
from architect_linter.audit.parser import SourceParser
from architect_linter.models.violation import ViolationKind


class TestScanFunctions:
    """Tests for scan_functions."""

    def test_span_is_inclusive(self, parser: SourceParser, ts_function):
        spans = scan_functions(parser.parse(ts_function("compute", 5)))

        assert len(spans) == 1
        assert spans[0].name == "compute"
        assert spans[0].kind == "function"
        assert (spans[0].start_line, spans[0].end_line, spans[0].span) == (1, 5, 5)

    def test_single_line_function(self, parser: SourceParser):
        spans = scan_functions(parser.parse("const id = (x: number) => x;\n"))

        assert [(s.name, s.kind, s.span) for s in spans] == [("id", "arrow", 1)]

    def test_class_members(self, parser: SourceParser, sample_controller_code: str):
        spans = scan_functions(parser.parse(sample_controller_code))

        assert [(s.name, s.kind) for s in spans] == [
            ("constructor", "constructor"),
            ("findOne", "method"),
        ]
        assert (spans[0].start_line, spans[0].span) == (7, 1)
        assert spans[1].end_line == 12

    def test_binding_names(self, parser: SourceParser):
        code = '''const handler = function () {
  return 1;
};
class Widget {
  onClick = () => {
    this.render();
  };
}
const routes = {
  home: () => "home",
};
'''
        spans = scan_functions(parser.parse(code))

        assert [s.name for s in spans] == ["handler", "onClick", "home"]

    def test_nested_callbacks_are_scanned(self, parser: SourceParser):
        code = '''export function outer(items: string[]) {
  items.forEach((item) => {
    console.log(item);
  });
}
'''
        spans = scan_functions(parser.parse(code))

        assert [(s.name, s.start_line, s.span) for s in spans] == [
            ("outer", 1, 5),
            (ANONYMOUS, 2, 3),
        ]

    def test_bodyless_signatures_are_ignored(self, parser: SourceParser):
        code = '''interface Repo {
  find(id: string): User;
}
abstract class Base {
  abstract run(): void;
}
declare function external(x: number): void;
function overloaded(a: string): void;
function overloaded(a: number): void;
function overloaded(a: unknown): void {
}
'''
        spans = scan_functions(parser.parse(code))

        assert [(s.name, s.start_line) for s in spans] == [("overloaded", 10)]

    def test_generator_and_getter(self, parser: SourceParser):
        code = '''function* ids() {
  yield 1;
}
class Account {
  get balance(): number {
    return 0;
  }
}
'''
        spans = scan_functions(parser.parse(code))

        assert [(s.name, s.kind) for s in spans] == [("ids", "function"), ("balance", "method")]


class TestFunctionViolations:
    """Tests for the max lines boundary."""

    @pytest.mark.parametrize(
        "lines, expected",
        [(9, 0), (10, 0), (11, 1), (30, 1)],
    )
    def test_limit_boundary(self, parser: SourceParser, ts_function, lines, expected):
        spans = scan_functions(parser.parse(ts_function("work", lines)))

        violations = function_violations("src/work.ts", spans, max_lines=10)

        assert len(violations) == expected

    def test_violation_fields(self, parser: SourceParser, ts_function):
        code = "\n" + ts_function("tooLong", 12)
        spans = scan_functions(parser.parse(code))

        [violation] = function_violations("src/long.ts", spans, max_lines=10)

        assert violation.kind == ViolationKind.FUNCTION_TOO_LONG
        assert violation.file_path == "src/long.ts"
        assert (violation.line, violation.column) == (2, 1)
        assert "tooLong" in violation.message
        assert "12 lines" in violation.message
        assert "Maximum: 10" in violation.message
        assert violation.rule_id == "max-lines-per-function"

    def test_long_outer_and_long_callback_both_reported(self, parser: SourceParser):
        callback_body = "\n".join(f"    step{i}();" for i in range(12))
        code = f'''function outer() {{
  run(() => {{
{callback_body}
  }});
}}
'''
        spans = scan_functions(parser.parse(code))

        violations = function_violations("src/outer.ts", spans, max_lines=10)

        assert [(v.line, v.column) for v in violations] == [(1, 1), (2, 7)]
