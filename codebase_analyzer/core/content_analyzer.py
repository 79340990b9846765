"""Codebase content analyzer: line classification and file naming."""

import asyncio
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..exceptions import CancellationRequested, ReadFailure
from ..features.line_classifier import ContentCounters, classify_content
from ..features.naming_case import file_name_case
from ..utils.cancellation import CancellationToken
from ..utils.logging import get_logger
from ..utils.progress import ProgressBar
from .concurrency import ConcurrencyCoordinator, optimal_concurrency

logger = get_logger().get_logger('content')


@dataclass
class FileAnalysis:
    """Partial result of one file."""
    path: str
    name_case: Optional[str] = None
    counters: Optional[ContentCounters] = None


@dataclass
class ContentAnalysisResult:
    """Result of a content analysis run."""
    file_count: int = 0
    counters: ContentCounters = field(default_factory=ContentCounters)
    naming_cases: Dict[str, int] = field(default_factory=dict)
    duration_seconds: float = 0.0
    failed_files: List[str] = field(default_factory=list)
    cancelled: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""
        return {
            'fileCount': self.file_count,
            'fileNameCases': dict(self.naming_cases),
            'contentTypes': self.counters.to_dict(),
            'durationSeconds': round(self.duration_seconds, 3),
            'failedFiles': list(self.failed_files),
            'cancelled': self.cancelled,
        }


class CodebaseContentAnalyzer:
    """
    Classifies the lines and file names of a list of files.

    Files are read concurrently in batches; each worker returns a
    FileAnalysis and the partials are merged in file order once the run
    completes, so two runs over the same files give identical results.
    """

    def __init__(
        self,
        files: Sequence[Union[str, Path]],
        check_file_names: bool = True,
        check_file_content: bool = True,
        max_concurrency: Optional[int] = None,
        token: Optional[CancellationToken] = None,
        show_progress: bool = False,
    ):
        """
        Initialize analyzer.

        Args:
            files: Files to analyze
            check_file_names: Collect the naming-case distribution
            check_file_content: Classify file lines
            max_concurrency: Batch width (CPU-based optimum when None)
            token: Cancellation token
            show_progress: Show a progress bar
        """
        self.files = [str(f) for f in files]
        self.check_file_names = check_file_names
        self.check_file_content = check_file_content
        self.max_concurrency = max_concurrency or optimal_concurrency()
        self.token = token or CancellationToken()
        self.show_progress = show_progress

    async def _analyze_file(self, file_path: str) -> FileAnalysis:
        self.token.throw_if_cancelled()

        analysis = FileAnalysis(path=file_path)

        if self.check_file_names:
            analysis.name_case = file_name_case(file_path)

        if self.check_file_content:
            try:
                text = await asyncio.to_thread(Path(file_path).read_text, encoding='utf-8')
            except (OSError, UnicodeDecodeError) as e:
                raise ReadFailure(file_path, e) from e
            analysis.counters = classify_content(text)

        return analysis

    async def analyze(self) -> ContentAnalysisResult:
        """
        Run the analysis.

        Returns:
            ContentAnalysisResult; ``cancelled=True`` with empty counters if
            the token was set before or during the run
        """
        start = time.perf_counter()
        logger.info(f"Analyzing {len(self.files)} files ({self.max_concurrency} concurrent)")

        bar = ProgressBar(
            total=len(self.files),
            desc="Analyzing",
            unit="files",
            disable=not self.show_progress,
        )
        self.token.on_cancel(bar.close)

        coordinator = ConcurrencyCoordinator(self.max_concurrency, self.token)
        try:
            outcome = await coordinator.run(
                self.files,
                self._analyze_file,
                on_progress=lambda _: bar.update(),
            )
        except CancellationRequested:
            bar.close()
            logger.warning("Analysis cancelled")
            return ContentAnalysisResult(
                cancelled=True,
                duration_seconds=time.perf_counter() - start,
            )

        bar.complete()

        result = ContentAnalysisResult()
        for analysis in outcome.results:
            result.file_count += 1
            if analysis.name_case is not None:
                result.naming_cases[analysis.name_case] = result.naming_cases.get(analysis.name_case, 0) + 1
            if analysis.counters is not None:
                result.counters.merge(analysis.counters)

        for file_path, error in outcome.failures:
            logger.warning(f"Skipping {file_path}: {error}")
            result.failed_files.append(file_path)

        result.duration_seconds = time.perf_counter() - start
        logger.debug(
            f"Analyzed {result.file_count} files in {result.duration_seconds:.2f}s "
            f"({len(result.failed_files)} failed)"
        )
        return result

    def run(self) -> ContentAnalysisResult:
        """Synchronous wrapper around analyze()."""
        return asyncio.run(self.analyze())
