"""Circular dependency detection between project files.

Builds a file-level import graph from relative imports and reports every
back edge found by a depth-first search as a cycle. Bare specifiers
(packages, path aliases) are not resolved and never form edges.
"""

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import structlog

from architect_linter.audit.imports import extract_imports
from architect_linter.audit.parser import SourceParser
from architect_linter.errors import ParseError

logger = structlog.get_logger()

RESOLVE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")
INDEX_FILES = ("index.ts", "index.tsx", "index.js")


@dataclass(frozen=True)
class CircularDependency:
    """A chain of files that ends where it started."""

    cycle: tuple[str, ...]

    @property
    def description(self) -> str:
        steps = [f"{a} -> {b}" for a, b in zip(self.cycle, self.cycle[1:])]
        return "Circular dependency: " + ", ".join(steps)

    def __str__(self) -> str:
        return " -> ".join(self.cycle)


class CircularDependencyAnalyzer:
    """Collects import edges between files and finds cycles."""

    def __init__(self, project_root: str | Path, parser: SourceParser | None = None):
        self.project_root = Path(project_root).resolve()
        self.parser = parser or SourceParser()
        self.graph: dict[str, list[str]] = {}
        self._logger = logger.bind(component="CircularDependencyAnalyzer")

    def build_graph(self, files: Iterable[str | Path]) -> None:
        """Add every file and its resolvable relative imports to the graph."""
        for file_path in files:
            path = Path(file_path).resolve()
            node = self.normalize(path)
            edges = self.graph.setdefault(node, [])

            for module_path in self._read_imports(path):
                resolved = resolve_import(path, module_path)
                if resolved is None:
                    continue
                target = self.normalize(resolved)
                if "node_modules" in target or target in edges:
                    continue
                edges.append(target)

    def detect_cycles(self) -> list[CircularDependency]:
        """Find cycles with an iterative depth-first search."""
        cycles: list[CircularDependency] = []
        visited: set[str] = set()

        for start in sorted(self.graph):
            if start in visited:
                continue

            path = [start]
            on_path = {start}
            visited.add(start)
            stack = [iter(self.graph.get(start, []))]

            while stack:
                neighbor = next(stack[-1], None)
                if neighbor is None:
                    stack.pop()
                    on_path.discard(path.pop())
                    continue

                if neighbor in on_path:
                    cycle = path[path.index(neighbor):] + [neighbor]
                    cycles.append(CircularDependency(tuple(cycle)))
                elif neighbor not in visited:
                    visited.add(neighbor)
                    on_path.add(neighbor)
                    path.append(neighbor)
                    stack.append(iter(self.graph.get(neighbor, [])))

        self._logger.info("Cycle detection complete", files=len(self.graph), cycles=len(cycles))
        return cycles

    def normalize(self, path: Path) -> str:
        """Root-relative, lower-cased, forward-slash form of a path."""
        try:
            relative = path.relative_to(self.project_root)
        except ValueError:
            relative = path
        return relative.as_posix().lower()

    def _read_imports(self, path: Path) -> list[str]:
        try:
            with open(path, encoding="utf-8-sig") as handle:
                code = handle.read()
            parsed = self.parser.parse(code, str(path))
        except (OSError, UnicodeDecodeError, ParseError) as e:
            self._logger.warning("Skipping file in cycle analysis", file=str(path), error=str(e))
            return []
        return [reference.module_path for reference in extract_imports(parsed)]


def resolve_import(current_file: Path, module_path: str) -> Path | None:
    """Resolve a relative import to an existing file, or None."""
    if not module_path.startswith((".", "/")):
        return None

    base = Path(os.path.normpath(current_file.parent / module_path))

    if base.name:
        for extension in RESOLVE_EXTENSIONS:
            candidate = base.with_name(base.name + extension)
            if candidate.is_file():
                return candidate

    if base.is_dir():
        for index in INDEX_FILES:
            candidate = base / index
            if candidate.is_file():
                return candidate

    if base.is_file():
        return base
    return None


def detect_cycles(
    file_paths: Iterable[str | Path],
    project_root: str | Path,
    parser: SourceParser | None = None,
) -> list[CircularDependency]:
    """Build the import graph for ``file_paths`` and return its cycles."""
    analyzer = CircularDependencyAnalyzer(project_root, parser)
    analyzer.build_graph(file_paths)
    return analyzer.detect_cycles()
