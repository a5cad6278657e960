"""Report Generator for lint results.

Generates human-readable and machine-readable reports
from a finished Report.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

import structlog

from architect_linter import __version__
from architect_linter.models.violation import Report, ViolationKind

logger = structlog.get_logger()

_KIND_DESCRIPTIONS = {
    ViolationKind.FORBIDDEN_IMPORT: "Import crosses a forbidden architectural boundary",
    ViolationKind.FUNCTION_TOO_LONG: "Function body exceeds the configured line limit",
}


class ReportFormat(str, Enum):
    """Output format for reports."""

    TEXT = "text"
    JSON = "json"
    MARKDOWN = "markdown"
    SARIF = "sarif"  # Static Analysis Results Interchange Format


class ReportGenerator:
    """Generates lint reports in various formats."""

    def __init__(self, include_timestamp: bool = True):
        self.include_timestamp = include_timestamp
        self._logger = logger.bind(component="ReportGenerator")

    def generate(
        self,
        report: Report,
        format: ReportFormat = ReportFormat.TEXT,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        """Render a report.

        Args:
            report: Finished report
            format: Output format
            metadata: Additional metadata to include (JSON and SARIF only)

        Returns:
            Formatted report string
        """
        match format:
            case ReportFormat.TEXT:
                return self._format_text(report)
            case ReportFormat.JSON:
                return self._format_json(report, metadata or {})
            case ReportFormat.MARKDOWN:
                return self._format_markdown(report)
            case ReportFormat.SARIF:
                return self._format_sarif(report, metadata or {})
            case _:
                return self._format_text(report)

    def _timestamp(self) -> str | None:
        if not self.include_timestamp:
            return None
        return datetime.now(timezone.utc).isoformat()

    def _format_text(self, report: Report) -> str:
        """Format as plain text, one ``path:line:column`` entry per violation."""
        lines = []
        s = report.summary

        lines.append("=" * 60)
        lines.append("ARCHITECTURE LINT REPORT")
        lines.append("=" * 60)
        timestamp = self._timestamp()
        if timestamp:
            lines.append(f"Timestamp: {timestamp}")
            lines.append("")

        lines.append("SUMMARY")
        lines.append("-" * 40)
        lines.append(f"Files Analyzed:         {s.analyzed}")
        lines.append(f"Files Skipped:          {s.skipped}")
        lines.append(f"Files With Violations:  {s.files_with_violations}")
        lines.append(f"Total Violations:       {s.total_violations}")
        for kind, count in s.by_kind:
            lines.append(f"  - {kind}: {count}")
        lines.append("")

        if report.violations:
            lines.append("VIOLATIONS")
            lines.append("-" * 40)
            for v in report.violations:
                lines.append(f"{v.file_path}:{v.line}:{v.column} [{v.kind.value}] {v.message}")
            lines.append("")

        if report.skipped_results:
            lines.append("SKIPPED FILES")
            lines.append("-" * 40)
            for result in report.skipped_results:
                lines.append(f"{result.file_path}: {result.parse_error}")
            lines.append("")

        lines.append("=" * 60)
        return "\n".join(lines)

    def _format_json(self, report: Report, metadata: dict[str, Any]) -> str:
        """Format as JSON."""
        data = report.to_dict()
        timestamp = self._timestamp()
        if timestamp:
            data["timestamp"] = timestamp
        data["metadata"] = metadata
        return json.dumps(data, indent=2)

    def _format_markdown(self, report: Report) -> str:
        """Format as Markdown."""
        lines = []
        s = report.summary

        lines.append("# Architecture Lint Report")
        lines.append("")
        timestamp = self._timestamp()
        if timestamp:
            lines.append(f"**Generated:** {timestamp}")
            lines.append("")

        lines.append("## Summary")
        lines.append("")
        lines.append("| Metric | Value |")
        lines.append("|--------|-------|")
        lines.append(f"| Files Analyzed | {s.analyzed} |")
        lines.append(f"| Files Skipped | {s.skipped} |")
        lines.append(f"| Files With Violations | {s.files_with_violations} |")
        lines.append(f"| Total Violations | {s.total_violations} |")
        lines.append("")

        lines.append("## Detailed Results")
        lines.append("")

        for result in report.results:
            if result.skipped:
                lines.append(f"### ⚠️ `{result.file_path}`")
                lines.append("")
                lines.append(f"Skipped: {result.parse_error}")
                lines.append("")
                continue
            if result.passed:
                continue

            lines.append(f"### ❌ `{result.file_path}`")
            lines.append("")
            lines.append("| Line | Column | Kind | Message |")
            lines.append("|------|--------|------|---------|")
            for v in result.violations:
                message = v.message.replace("|", "\\|")
                lines.append(f"| {v.line} | {v.column} | {v.kind.value} | {message} |")
            lines.append("")

        if s.total_violations == 0 and s.skipped == 0:
            lines.append("No violations found.")
            lines.append("")

        return "\n".join(lines)

    def _format_sarif(self, report: Report, metadata: dict[str, Any]) -> str:
        """Format as SARIF 2.1.0, supported by GitHub code scanning and others.

        Metadata goes into the run's property bag.
        """
        run: dict[str, Any] = {
            "tool": {
                "driver": {
                    "name": "architect-linter",
                    "version": __version__,
                    "rules": self._sarif_rules(report),
                }
            },
            "results": self._sarif_results(report),
        }
        if metadata:
            run["properties"] = metadata

        sarif = {
            "$schema": "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json",
            "version": "2.1.0",
            "runs": [run],
        }

        return json.dumps(sarif, indent=2)

    def _sarif_rules(self, report: Report) -> list[dict[str, Any]]:
        """Generate SARIF rule definitions, one per rule that fired."""
        rules: dict[str, dict[str, Any]] = {}

        for v in report.violations:
            rule_id = v.rule_id or v.kind.value
            if rule_id not in rules:
                rules[rule_id] = {
                    "id": rule_id,
                    "name": v.kind.value,
                    "shortDescription": {"text": _KIND_DESCRIPTIONS[v.kind]},
                    "defaultConfiguration": {"level": "error"},
                }

        return list(rules.values())

    def _sarif_results(self, report: Report) -> list[dict[str, Any]]:
        results = []

        for v in report.violations:
            results.append({
                "ruleId": v.rule_id or v.kind.value,
                "level": "error",
                "message": {"text": v.message},
                "locations": [
                    {
                        "physicalLocation": {
                            "artifactLocation": {"uri": Path(v.file_path).as_posix()},
                            "region": {
                                "startLine": v.line,
                                "startColumn": v.column,
                            },
                        }
                    }
                ],
            })

        return results

    def save_report(
        self,
        report: Report,
        output_path: str | Path,
        format: ReportFormat | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Generate and save report to file.

        Args:
            report: Finished report
            output_path: Where to save
            format: Output format (inferred from extension if None)
            metadata: Additional metadata
        """
        path = Path(output_path)

        if format is None:
            format = {
                ".txt": ReportFormat.TEXT,
                ".json": ReportFormat.JSON,
                ".md": ReportFormat.MARKDOWN,
                ".sarif": ReportFormat.SARIF,
            }.get(path.suffix.lower(), ReportFormat.TEXT)

        path.write_text(self.generate(report, format, metadata), encoding="utf-8")

        self._logger.info("Report saved", path=str(path), format=format.value)
