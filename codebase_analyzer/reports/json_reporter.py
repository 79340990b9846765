"""JSON report generator."""

import json
from dataclasses import asdict
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, Optional

from ..core.content_analyzer import ContentAnalysisResult
from ..core.key_resolver import KeyUsageReport
from ..utils.config import AnalysisOptions
from ..utils.logging import get_logger

RESULT_FILE_NAME = 'analyze-codebase-result.json'

logger = get_logger()


def percentage(value: int, total: int) -> float:
    """``value`` as a percentage of ``total`` (0 when total is 0)."""
    if not total:
        return 0.0
    return value / total * 100


class JSONReporter:
    """Generate JSON reports for analysis results."""

    @staticmethod
    def build_document(
        result: ContentAnalysisResult,
        options: Optional[AnalysisOptions] = None
    ) -> Dict[str, Any]:
        """
        Build the serializable result object shared by every export format.

        Args:
            result: Content analysis result
            options: Options the analysis ran with

        Returns:
            Report dictionary
        """
        return {
            'date': datetime.now().isoformat(),
            'fileCount': result.file_count,
            'fileNameCases': dict(result.naming_cases),
            'options': asdict(options) if options is not None else {},
            'output': result.counters.to_dict(),
            'durationSeconds': round(result.duration_seconds, 3),
            'failedFiles': list(result.failed_files),
        }

    @staticmethod
    def generate(
        result: ContentAnalysisResult,
        output_path: Path,
        options: Optional[AnalysisOptions] = None,
        pretty: bool = True
    ) -> Path:
        """
        Generate JSON report.

        Args:
            result: Content analysis result
            output_path: Output file path
            options: Options the analysis ran with
            pretty: Pretty print JSON

        Returns:
            Path to generated report
        """
        report = JSONReporter.build_document(result, options)
        return JSONReporter._write(report, Path(output_path), pretty)

    @staticmethod
    def write_analyze_result(
        directory: Path,
        result: ContentAnalysisResult,
        options: Optional[AnalysisOptions] = None
    ) -> Path:
        """Write ``analyze-codebase-result.json`` into the analysed directory."""
        return JSONReporter.generate(result, Path(directory) / RESULT_FILE_NAME, options)

    @staticmethod
    def generate_key_report(
        report: KeyUsageReport,
        output_path: Path,
        i18n_file: Optional[Path] = None
    ) -> Path:
        """
        Generate JSON report of an unused key analysis.

        Args:
            report: Key usage report
            output_path: Output file path
            i18n_file: Translation file that was analysed

        Returns:
            Path to generated report
        """
        document = {
            'date': datetime.now().isoformat(),
            'i18nFile': str(i18n_file) if i18n_file else None,
            **report.to_dict(),
        }
        return JSONReporter._write(document, Path(output_path), pretty=True)

    @staticmethod
    def _write(document: Dict[str, Any], output_path: Path, pretty: bool) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            if pretty:
                json.dump(document, f, indent=2, ensure_ascii=False)
            else:
                json.dump(document, f, ensure_ascii=False)

        logger.debug(f"JSON report written: {output_path}")
        return output_path

    @staticmethod
    def load(report_path: Path) -> dict:
        """
        Load JSON report from file.

        Args:
            report_path: Path to JSON report

        Returns:
            Report dictionary
        """
        with open(report_path, 'r', encoding='utf-8') as f:
            return json.load(f)
