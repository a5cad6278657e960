"""File Analyzer - one complete lint pass over a single file.

The analyzer:
1. Reads the file
2. Parses it with the SourceParser
3. Extracts imports and measures functions
4. Runs the RuleEngine
5. Returns an AnalysisResult, never an exception
"""

from pathlib import Path

import structlog

from architect_linter.audit.functions import function_violations, scan_functions
from architect_linter.audit.imports import extract_imports
from architect_linter.audit.parser import SourceParser
from architect_linter.audit.rules import RuleEngine
from architect_linter.errors import ParseError
from architect_linter.models.config import LinterConfig
from architect_linter.models.violation import AnalysisResult, Violation

logger = structlog.get_logger()


class FileAnalyzer:
    """Analyzes one TypeScript file against a LinterConfig.

    A single instance is shared by all worker threads; it only holds the
    parser grammars and the rule engine, both read-only.
    """

    def __init__(
        self,
        parser: SourceParser | None = None,
        rule_engine: RuleEngine | None = None,
    ):
        self.parser = parser or SourceParser()
        self.rule_engine = rule_engine or RuleEngine()
        self._logger = logger.bind(component="FileAnalyzer")

    def analyze(self, path: str | Path, config: LinterConfig) -> AnalysisResult:
        """Analyze a file on disk.

        Read and parse failures are recorded in ``parse_error``.
        """
        file_path = str(path)
        self._logger.debug("Analyzing file", file=file_path)

        try:
            with open(file_path, encoding="utf-8-sig") as handle:
                code = handle.read()
        except (OSError, UnicodeDecodeError) as e:
            self._logger.warning("Could not read file", file=file_path, error=str(e))
            return AnalysisResult(file_path=file_path, parse_error=f"Could not read file: {e}")

        return self.analyze_code(code, file_path, config)

    def analyze_code(
        self,
        code: str,
        file_path: str,
        config: LinterConfig,
    ) -> AnalysisResult:
        """Analyze source text that is already in memory.

        Args:
            code: TypeScript source code
            file_path: Path used for rule matching and reporting
            config: Loaded rule configuration

        Returns:
            AnalysisResult with violations sorted by (line, column)
        """
        try:
            violations = self._collect_violations(code, file_path, config)
        except ParseError as e:
            self._logger.warning(
                "Skipping file with syntax error",
                file=file_path,
                line=e.line,
                column=e.column,
            )
            return AnalysisResult(
                file_path=file_path,
                parse_error=f"Syntax error at {e.line}:{e.column}: {e.description}",
            )
        except Exception as e:
            self._logger.exception("Analysis failed", file=file_path)
            return AnalysisResult(file_path=file_path, parse_error=f"Analysis failed: {e}")

        if violations:
            self._logger.info("Violations found", file=file_path, violations=len(violations))

        return AnalysisResult(file_path=file_path, violations=tuple(violations))

    def _collect_violations(
        self,
        code: str,
        file_path: str,
        config: LinterConfig,
    ) -> list[Violation]:
        parsed = self.parser.parse(code, file_path)

        imports = extract_imports(parsed)
        violations = self.rule_engine.evaluate_file(file_path, imports, config)

        spans = scan_functions(parsed)
        violations.extend(function_violations(file_path, spans, config.max_lines_per_function))

        # Stable: rule order survives for violations sharing a position.
        violations.sort(key=lambda v: (v.line, v.column))
        return violations
