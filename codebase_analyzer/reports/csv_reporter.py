"""CSV report generator."""

import csv
from pathlib import Path

from ..core.content_analyzer import ContentAnalysisResult
from .json_reporter import percentage


class CSVReporter:
    """
    Generate CSV reports for content analysis.

    One row per file name case and per content type::

        Type,Count,Percentage
        File Name: CamelCase,12,60.00%
        Content: Physical,840,100.00%
    """

    HEADER = ['Type', 'Count', 'Percentage']

    @staticmethod
    def generate(
        result: ContentAnalysisResult,
        output_path: Path
    ) -> Path:
        """
        Generate CSV report.

        Args:
            result: Content analysis result
            output_path: Output file path

        Returns:
            Path to generated report
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        content_types = result.counters.to_dict()
        physical = content_types['Physical']

        with open(output_path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f, lineterminator='\n')
            writer.writerow(CSVReporter.HEADER)

            for case, count in result.naming_cases.items():
                writer.writerow([
                    f'File Name: {case}',
                    count,
                    f'{percentage(count, result.file_count):.2f}%',
                ])

            for content_type, count in content_types.items():
                writer.writerow([
                    f'Content: {content_type}',
                    count,
                    f'{percentage(count, physical):.2f}%',
                ])

        return output_path
