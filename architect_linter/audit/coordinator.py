"""Parallel Coordinator - fans a file list out over a thread pool.

Each file is one independent task. The only objects shared between tasks
are the frozen LinterConfig and the FileAnalyzer (parser grammars and rule
engine), so no locking is needed. Results are placed back into input order
before the Report is built, which makes the Report independent of the pool
size and of completion order.
"""

import os
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any

import structlog

from architect_linter.audit.analyzer import FileAnalyzer
from architect_linter.models.config import LinterConfig, load_config
from architect_linter.models.violation import AnalysisResult, Report

logger = structlog.get_logger()

ProgressCallback = Callable[[AnalysisResult], None]


def default_worker_count() -> int:
    """Worker count matching the available hardware parallelism."""
    return os.cpu_count() or 1


class ParallelCoordinator:
    """Runs the FileAnalyzer over a closed batch of files."""

    def __init__(
        self,
        workers: int | None = None,
        analyzer: FileAnalyzer | None = None,
    ):
        if workers is not None and workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.workers = workers or default_worker_count()
        self.analyzer = analyzer or FileAnalyzer()
        self._logger = logger.bind(component="ParallelCoordinator")

    def run(
        self,
        file_paths: Iterable[str | Path],
        config: LinterConfig | Mapping[str, Any],
        progress: ProgressCallback | None = None,
    ) -> Report:
        """Analyze every file and merge the results.

        Args:
            file_paths: Files to analyze, in the order they should be reported
            config: Loaded LinterConfig, or a raw config document
            progress: Called once per finished file, from the calling thread.
                Exceptions it raises are logged and do not stop the batch.

        Returns:
            Report with one AnalysisResult per input path, in input order

        Raises:
            ConfigError: If ``config`` is a raw document that fails
                validation. Raised before any file is touched.
        """
        config = load_config(config)
        paths = [str(p) for p in file_paths]

        self._logger.info("Starting analysis", files=len(paths), workers=self.workers)

        results: list[AnalysisResult | None] = [None] * len(paths)
        if self.workers == 1 or len(paths) <= 1:
            for index, path in enumerate(paths):
                results[index] = self._analyze_inline(path, config)
                self._notify(progress, results[index])
        else:
            with ThreadPoolExecutor(
                max_workers=min(self.workers, len(paths)),
                thread_name_prefix="architect-lint",
            ) as executor:
                futures = {
                    executor.submit(self.analyzer.analyze, path, config): index
                    for index, path in enumerate(paths)
                }
                for future in as_completed(futures):
                    index = futures[future]
                    try:
                        results[index] = future.result()
                    except Exception as e:
                        results[index] = self._task_failed(paths[index], e)
                    self._notify(progress, results[index])

        report = Report.from_results(results)

        self._logger.info(
            "Analysis complete",
            analyzed=report.summary.analyzed,
            skipped=report.summary.skipped,
            violations=report.summary.total_violations,
        )
        return report

    def _analyze_inline(self, path: str, config: LinterConfig) -> AnalysisResult:
        try:
            return self.analyzer.analyze(path, config)
        except Exception as e:
            return self._task_failed(path, e)

    def _notify(self, progress: ProgressCallback | None, result: AnalysisResult) -> None:
        if progress is None:
            return
        try:
            progress(result)
        except Exception:
            self._logger.exception("Progress callback failed", file=result.file_path)

    def _task_failed(self, path: str, error: Exception) -> AnalysisResult:
        self._logger.error("Analysis task failed", file=path, error=str(error))
        return AnalysisResult(file_path=path, parse_error=f"Analysis task failed: {error}")


def run_analysis(
    file_paths: Iterable[str | Path],
    config: LinterConfig | Mapping[str, Any],
    workers: int | None = None,
) -> Report:
    """Analyze files with a fresh coordinator."""
    return ParallelCoordinator(workers=workers).run(file_paths, config)
