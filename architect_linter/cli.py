"""Command line entry point.

Usage:
    architect-lint [PATH] [--format text|json|markdown|sarif] [--cycles]

Exit codes: 0 when the project is clean, 1 when violations (or cycles, with
``--cycles``) were found, 2 when the configuration is invalid.
"""

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn
from rich.table import Table

from architect_linter import __version__
from architect_linter.audit.coordinator import ParallelCoordinator
from architect_linter.audit.cycles import CircularDependency, detect_cycles
from architect_linter.audit.reporter import ReportFormat, ReportGenerator
from architect_linter.discovery import collect_files
from architect_linter.errors import ConfigError
from architect_linter.loader import load_config_file
from architect_linter.logging_setup import configure_logging
from architect_linter.models.violation import Report
from architect_linter.settings import get_settings, settings_env_name

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="architect-lint",
        description="Enforce architectural import rules and function length limits in TypeScript projects.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory or single file to lint (default: current directory)",
    )
    parser.add_argument(
        "--config",
        help="Path to architect.json (default: <path>/architect.json)",
    )
    parser.add_argument(
        "--format",
        choices=[f.value for f in ReportFormat],
        help="Report format (default: text, or inferred from the --output extension)",
    )
    parser.add_argument(
        "--output",
        help="Write the report to this file instead of stdout",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Worker threads (default: CPU count)",
    )
    parser.add_argument(
        "--cycles",
        action="store_true",
        help="Also detect circular dependencies between project files",
    )
    parser.add_argument(
        "--log-level",
        help="Log level for diagnostics on stderr (default: WARNING)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit logs as JSON lines",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be at least 1")
    console = Console()
    err_console = Console(stderr=True)

    try:
        settings = get_settings()
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            err_console.print(
                f"[bold red]Invalid setting:[/] {escape(settings_env_name(field))}: {escape(error['msg'])}"
            )
        return EXIT_CONFIG_ERROR
    configure_logging(args.log_level or settings.log_level, args.log_json or settings.log_json)

    root = Path(args.path)
    project_dir = root if root.is_dir() else root.parent

    try:
        config = load_config_file(args.config or project_dir, settings.config_filename)
    except ConfigError as e:
        err_console.print(f"[bold red]Invalid configuration:[/] {escape(str(e))}")
        return EXIT_CONFIG_ERROR

    files = collect_files(root)
    if not files:
        err_console.print("[green]No TypeScript files found.[/]")
        return EXIT_OK

    coordinator = ParallelCoordinator(workers=args.workers or settings.workers)

    with Progress(
        SpinnerColumn(),
        BarColumn(),
        MofNCompleteColumn(),
        console=err_console,
        transient=True,
    ) as progress:
        task = progress.add_task("Analyzing", total=len(files))
        report = coordinator.run(files, config, progress=lambda _: progress.advance(task))

    cycles: list[CircularDependency] = []
    if args.cycles:
        cycles = detect_cycles(files, project_dir, parser=coordinator.analyzer.parser)

    requested_format = ReportFormat(args.format) if args.format else None
    metadata = {"cycles": [list(c.cycle) for c in cycles]} if args.cycles else None
    generator = ReportGenerator()
    if args.output:
        generator.save_report(report, args.output, requested_format, metadata)
    elif requested_format in (None, ReportFormat.TEXT):
        print_report(console, report)
    else:
        print(generator.generate(report, requested_format, metadata))

    if args.cycles:
        to_stdout = not args.output and requested_format in (None, ReportFormat.TEXT)
        print_cycles(console if to_stdout else err_console, cycles)

    if report.summary.total_violations or cycles:
        return EXIT_VIOLATIONS
    return EXIT_OK


def print_report(console: Console, report: Report) -> None:
    """Render a report for a terminal."""
    for result in report.results:
        if result.skipped:
            console.print(
                f"[yellow]skipped[/] [bold]{escape(result.file_path)}[/]: "
                f"{escape(result.parse_error or '')}"
            )
        for v in result.violations:
            console.print(
                f"[bold]{escape(v.file_path)}:{v.line}:{v.column}[/] "
                f"[red]{v.kind.value}[/] {escape(v.message)}"
            )

    s = report.summary
    table = Table(title="Summary", show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Files analyzed", str(s.analyzed))
    table.add_row("Files skipped", str(s.skipped))
    table.add_row("Files with violations", str(s.files_with_violations))
    table.add_row("Violations", str(s.total_violations))
    console.print(table)

    if report.passed:
        console.print("[bold green]✨ No architecture violations found.[/]")
    else:
        console.print(f"[bold red]❌ Found {s.total_violations} violation(s).[/]")


def print_cycles(console: Console, cycles: list[CircularDependency]) -> None:
    if not cycles:
        console.print("[green]No circular dependencies detected.[/]")
        return

    console.print(f"[bold red]Found {len(cycles)} circular dependency cycle(s):[/]")
    for number, cycle in enumerate(cycles, start=1):
        console.print(f"  {number}. {escape(str(cycle))}")


if __name__ == "__main__":
    sys.exit(main())
