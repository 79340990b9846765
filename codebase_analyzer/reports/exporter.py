"""Export dispatch for content analysis results."""

from pathlib import Path
from typing import Optional, Union

from ..core.content_analyzer import ContentAnalysisResult
from ..utils.config import AnalysisOptions
from .csv_reporter import CSVReporter
from .html_reporter import HTMLReporter
from .json_reporter import JSONReporter

EXPORT_FORMATS = ('json', 'csv', 'html')


def export_results(
    result: ContentAnalysisResult,
    output_path: Union[str, Path],
    export_format: str = 'json',
    options: Optional[AnalysisOptions] = None
) -> Path:
    """
    Export a content analysis result.

    Args:
        result: Content analysis result
        output_path: Output file path (resolved to an absolute path)
        export_format: ``json``, ``csv`` or ``html``
        options: Options the analysis ran with

    Returns:
        Absolute path of the written file

    Raises:
        ValueError: If the format is not supported
    """
    full_path = Path(output_path).resolve()

    if export_format == 'json':
        return JSONReporter.generate(result, full_path, options)
    if export_format == 'csv':
        return CSVReporter.generate(result, full_path)
    if export_format == 'html':
        return HTMLReporter.generate(result, full_path, options)

    raise ValueError(f"Unsupported export format: {export_format}")
