"""
Batch analysis across many frame tables.

Runs the engine over a list of files with a thread pool. One file's failure
is recorded in its FileAnalysisResult and never aborts the batch.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from enforcer.analysis.models import GameAnalysis
from enforcer.core.config import EnforcerConfig
from enforcer.pipeline.orchestrator import EnforcerEngine

logger = logging.getLogger(__name__)

FRAME_TABLE_PATTERNS = ("*.csv", "*.json", "*.parquet")


@dataclass
class FileAnalysisResult:
    """Result of analyzing a single frame table."""

    path: str
    success: bool
    duration_seconds: float
    error_message: str | None = None
    analysis: GameAnalysis | None = None

    @property
    def skipped(self) -> bool:
        return self.success and self.analysis is None

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "success": self.success,
            "duration_seconds": round(self.duration_seconds, 3),
            "error_message": self.error_message,
            "analysis": self.analysis.to_dict() if self.analysis else None,
        }


@dataclass
class BatchAnalysisResult:
    """Result of a batch run."""

    total_files: int
    successful: int
    failed: int
    total_duration_seconds: float
    results: list[FileAnalysisResult] = field(default_factory=list)

    @property
    def success_rate(self) -> float:
        if self.total_files == 0:
            return 0.0
        return round((self.successful / self.total_files) * 100, 1)

    @property
    def flagged(self) -> list[FileAnalysisResult]:
        """Successful analyses with at least one illegal player."""
        return [r for r in self.results if r.analysis is not None and not r.analysis.all_legal]

    def to_dict(self) -> dict:
        return {
            "total_files": self.total_files,
            "successful": self.successful,
            "failed": self.failed,
            "success_rate": self.success_rate,
            "total_duration_seconds": round(self.total_duration_seconds, 2),
            "results": [r.to_dict() for r in self.results],
        }


def _analyze_single_file(engine: EnforcerEngine, path: Path) -> FileAnalysisResult:
    start_time = time.time()
    try:
        analysis = engine.analyze_file(path)
    except Exception as e:
        logger.error(f"Failed to analyze {path}: {e}")
        return FileAnalysisResult(
            path=str(path),
            success=False,
            duration_seconds=time.time() - start_time,
            error_message=str(e),
        )

    if analysis.is_handwarmer and engine.config.batch.skip_handwarmers:
        logger.info(f"Skipping handwarmer {path.name}")
        analysis = None

    return FileAnalysisResult(
        path=str(path),
        success=True,
        duration_seconds=time.time() - start_time,
        analysis=analysis,
    )


def analyze_frame_files(
    paths: Iterable[Path | str],
    config: EnforcerConfig | None = None,
    max_workers: int | None = None,
    progress_callback: Callable[[FileAnalysisResult], None] | None = None,
) -> BatchAnalysisResult:
    """
    Analyze many frame tables in parallel.

    Args:
        paths: Frame table files (.csv, .json, .parquet)
        config: Engine configuration; defaults if omitted
        max_workers: Thread count, overriding config.batch.max_workers
        progress_callback: Called with each result as it completes

    Returns:
        BatchAnalysisResult; results are in completion order
    """
    paths = [Path(p) for p in paths]
    if not paths:
        return BatchAnalysisResult(
            total_files=0, successful=0, failed=0, total_duration_seconds=0.0
        )

    engine = EnforcerEngine(config)
    workers = max(1, max_workers or engine.config.batch.max_workers)
    start_time = time.time()
    results: list[FileAnalysisResult] = []

    logger.info(f"Starting batch analysis of {len(paths)} files with {workers} workers")

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(_analyze_single_file, engine, path): path for path in paths}
        for future in as_completed(futures):
            result = future.result()
            results.append(result)
            if progress_callback:
                progress_callback(result)

    total_duration = time.time() - start_time
    successful = sum(1 for r in results if r.success)
    failed = len(results) - successful

    logger.info(
        f"Batch analysis complete: {successful}/{len(results)} successful in {total_duration:.1f}s"
    )

    return BatchAnalysisResult(
        total_files=len(results),
        successful=successful,
        failed=failed,
        total_duration_seconds=total_duration,
        results=results,
    )


def analyze_directory(
    directory: Path,
    config: EnforcerConfig | None = None,
    recursive: bool = True,
) -> BatchAnalysisResult:
    """Analyze every frame table under a directory."""
    prefix = "**/" if recursive else ""
    paths = sorted(
        {p for pattern in FRAME_TABLE_PATTERNS for p in directory.glob(prefix + pattern)}
    )
    logger.info(f"Found {len(paths)} frame tables in {directory}")
    return analyze_frame_files(paths, config=config)
