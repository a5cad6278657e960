"""Analysis pipeline for the architecture linter.

- Source Parser: tree-sitter based TypeScript parsing
- Import Extractor: static import declarations in source order
- Function Length Scanner: line spans of function-like constructs
- Rule Engine: forbidden import rules, configured and fixed
- File Analyzer: one isolated pass per file
- Parallel Coordinator: fan-out over a worker pool, ordered Report
- Cycle Detector: circular dependencies between project files
- Report Generator: text, JSON, Markdown and SARIF output
"""

from .parser import (
    ParsedSource,
    SourceParser,
)
from .imports import (
    ImportReference,
    ImportStyle,
    extract_imports,
)
from .functions import (
    FunctionSpan,
    function_violations,
    scan_functions,
)
from .rules import (
    CONTROLLER_REPOSITORY_RULE,
    FixedRule,
    RuleEngine,
)
from .analyzer import FileAnalyzer
from .coordinator import (
    ParallelCoordinator,
    default_worker_count,
    run_analysis,
)
from .cycles import (
    CircularDependency,
    CircularDependencyAnalyzer,
    detect_cycles,
)
from .reporter import (
    ReportFormat,
    ReportGenerator,
)

__all__ = [
    # Parser
    "ParsedSource",
    "SourceParser",
    # Imports
    "ImportReference",
    "ImportStyle",
    "extract_imports",
    # Functions
    "FunctionSpan",
    "function_violations",
    "scan_functions",
    # Rules
    "CONTROLLER_REPOSITORY_RULE",
    "FixedRule",
    "RuleEngine",
    # Analyzer
    "FileAnalyzer",
    # Coordinator
    "ParallelCoordinator",
    "default_worker_count",
    "run_analysis",
    # Cycles
    "CircularDependency",
    "CircularDependencyAnalyzer",
    "detect_cycles",
    # Reporter
    "ReportFormat",
    "ReportGenerator",
]
