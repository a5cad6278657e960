"""Result types produced by the analysis pipeline.

All of them are frozen: a Violation never changes after the rule engine
creates it, and a Report is handed to renderers as-is.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ViolationKind(str, Enum):
    """Machine-distinguishable violation category."""

    FORBIDDEN_IMPORT = "forbidden_import"
    FUNCTION_TOO_LONG = "function_too_long"


@dataclass(frozen=True)
class Violation:
    """One detected breach of a configured or fixed constraint.

    ``line`` and ``column`` are 1-based.
    """

    kind: ViolationKind
    file_path: str
    line: int
    column: int
    message: str
    reason: str | None = None
    rule_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "file_path": self.file_path,
            "line": self.line,
            "column": self.column,
            "message": self.message,
            "reason": self.reason,
            "rule_id": self.rule_id,
        }

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line}:{self.column}: {self.message}"


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of analyzing a single file."""

    file_path: str
    violations: tuple[Violation, ...] = ()
    parse_error: str | None = None

    @property
    def skipped(self) -> bool:
        """True if the file could not be read or parsed."""
        return self.parse_error is not None

    @property
    def passed(self) -> bool:
        return not self.violations

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_path": self.file_path,
            "violations": [v.to_dict() for v in self.violations],
            "parse_error": self.parse_error,
        }


@dataclass(frozen=True)
class ReportSummary:
    """Counts for a finished run."""

    analyzed: int = 0
    skipped: int = 0
    files_with_violations: int = 0
    total_violations: int = 0
    by_kind: tuple[tuple[str, int], ...] = ()

    @classmethod
    def from_results(cls, results: tuple[AnalysisResult, ...]) -> "ReportSummary":
        by_kind: dict[str, int] = {}
        for result in results:
            for violation in result.violations:
                kind = violation.kind.value
                by_kind[kind] = by_kind.get(kind, 0) + 1

        return cls(
            analyzed=sum(1 for r in results if not r.skipped),
            skipped=sum(1 for r in results if r.skipped),
            files_with_violations=sum(1 for r in results if r.violations),
            total_violations=sum(len(r.violations) for r in results),
            by_kind=tuple(sorted(by_kind.items())),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "analyzed": self.analyzed,
            "skipped": self.skipped,
            "files_with_violations": self.files_with_violations,
            "total_violations": self.total_violations,
            "by_kind": dict(self.by_kind),
        }


@dataclass(frozen=True)
class Report:
    """All per-file results of a run, in input file order."""

    results: tuple[AnalysisResult, ...]
    summary: ReportSummary

    @classmethod
    def from_results(cls, results: list[AnalysisResult]) -> "Report":
        ordered = tuple(results)
        return cls(results=ordered, summary=ReportSummary.from_results(ordered))

    @property
    def violations(self) -> list[Violation]:
        """Every violation, file by file."""
        return [v for r in self.results for v in r.violations]

    @property
    def skipped_results(self) -> list[AnalysisResult]:
        return [r for r in self.results if r.skipped]

    @property
    def passed(self) -> bool:
        return self.summary.total_violations == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "results": [r.to_dict() for r in self.results],
        }
