"""Tests for static import extraction."""

from architect_linter.audit.imports import ImportStyle, extract_imports
from architect_linter.audit.parser import SourceParser

MIXED_IMPORTS = '''import { A } from "./a";
import type { B } from '../b';
import "./side-effect";
import fs = require("fs");
export { C } from "./c";
export * from "./d";
const e = require("./e");
const lazy = import("./lazy");
const dynamic = require(moduleName);
const templated = require(`./templated`);
export const local = 1;
'''


class TestExtractImports:
    """Tests for extract_imports."""

    def test_static_forms_in_source_order(self, parser: SourceParser):
        imports = extract_imports(parser.parse(MIXED_IMPORTS))

        assert [i.module_path for i in imports] == [
            "./a", "../b", "./side-effect", "fs", "./c", "./d", "./e",
        ]
        assert [i.line for i in imports] == [1, 2, 3, 4, 5, 6, 7]

    def test_import_styles(self, parser: SourceParser):
        imports = extract_imports(parser.parse(MIXED_IMPORTS))

        assert [i.style for i in imports] == [
            ImportStyle.IMPORT,
            ImportStyle.IMPORT,
            ImportStyle.IMPORT,
            ImportStyle.IMPORT_REQUIRE,
            ImportStyle.EXPORT_FROM,
            ImportStyle.EXPORT_FROM,
            ImportStyle.REQUIRE,
        ]

    def test_dynamic_imports_are_skipped(self, parser: SourceParser):
        code = '''const a = import("./lazy");
const b = require(name);
const c = require("./" + name);
const d = require(`./${name}`);
'''
        assert extract_imports(parser.parse(code)) == []

    def test_module_path_case_is_preserved(self, parser: SourceParser):
        imports = extract_imports(parser.parse('import { Db } from "App/INFRASTRUCTURE/db";\n'))

        assert imports[0].module_path == "App/INFRASTRUCTURE/db"

    def test_column_of_nested_require(self, parser: SourceParser):
        line = "const x = 1; const y = require('./y');"
        imports = extract_imports(parser.parse(line + "\n"))

        assert len(imports) == 1
        assert imports[0].line == 1
        assert imports[0].column == line.index("require") + 1

    def test_require_inside_function(self, parser: SourceParser):
        code = '''export function load() {
  return require("./lazy-loaded");
}
'''
        imports = extract_imports(parser.parse(code))

        assert [(i.module_path, i.line, i.column) for i in imports] == [("./lazy-loaded", 2, 10)]

    def test_decorated_controller(self, parser: SourceParser, sample_controller_code: str):
        imports = extract_imports(parser.parse(sample_controller_code))

        assert [i.module_path for i in imports] == [
            "@nestjs/common", "./user.service", "./user.repository",
        ]
        assert all(i.column == 1 for i in imports)

    def test_escape_sequences_are_decoded(self, parser: SourceParser):
        code = r'''import a from "..\\infra\\db";
import b from './\x62\u{63}';
'''
        imports = extract_imports(parser.parse(code))

        assert [i.module_path for i in imports] == ["..\\infra\\db", "./bc"]

    def test_no_imports(self, parser: SourceParser):
        assert extract_imports(parser.parse("export const answer = 42;\n")) == []
