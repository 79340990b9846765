"""HTML report generator."""

import html
from pathlib import Path
from datetime import datetime
from typing import Iterable, Optional, Tuple

from ..core.content_analyzer import ContentAnalysisResult
from ..utils.config import AnalysisOptions
from .json_reporter import percentage


class HTMLReporter:
    """
    Standalone HTML report for content analysis.

    Features:
    - Single file, no external assets
    - File name case table (sorted by count)
    - Content type table
    - Analysis options
    """

    @staticmethod
    def generate(
        result: ContentAnalysisResult,
        output_path: Path,
        options: Optional[AnalysisOptions] = None,
        title: str = "Codebase Analysis Report"
    ) -> Path:
        """
        Generate HTML report.

        Args:
            result: Content analysis result
            output_path: Output file path
            options: Options the analysis ran with
            title: Report title

        Returns:
            Path to generated report
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(HTMLReporter._generate_html(result, options, title))

        return output_path

    @staticmethod
    def _generate_html(
        result: ContentAnalysisResult,
        options: Optional[AnalysisOptions],
        title: str
    ) -> str:
        """Build the complete HTML document."""
        naming_rows = [
            (case, count, percentage(count, result.file_count))
            for case, count in sorted(result.naming_cases.items(), key=lambda item: item[1], reverse=True)
        ]
        content_types = result.counters.to_dict()
        content_rows = [
            (content_type, count, percentage(count, content_types['Physical']))
            for content_type, count in content_types.items()
        ]

        directory = options.directory if options else ''
        framework = (options.framework if options else None) or 'N/A'
        extensions = ', '.join(options.extensions) if options and options.extensions else 'All'
        exclude = ', '.join(options.exclude) if options and options.exclude else 'None'

        return f'''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html.escape(title)}</title>
    <style>
        {HTMLReporter._get_css()}
    </style>
</head>
<body>
    <div class="header">
        <h1>📊 {html.escape(title)}</h1>
        <div class="meta">
            <p><strong>Date:</strong> {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}</p>
            <p><strong>Files Analyzed:</strong> {result.file_count}</p>
            <p><strong>Directory:</strong> {html.escape(directory)}</p>
        </div>
    </div>

    <div class="section">
        <h2>📝 File Name Case Analysis</h2>
        {HTMLReporter._render_table('Case Type', naming_rows)}
    </div>

    <div class="section">
        <h2>📊 Content Type Analysis</h2>
        {HTMLReporter._render_table('Type', content_rows)}
    </div>

    <div class="section">
        <h2>⚙️ Analysis Options</h2>
        <p><strong>Framework:</strong> {html.escape(framework)}</p>
        <p><strong>Extensions:</strong> {html.escape(extensions)}</p>
        <p><strong>Exclude:</strong> {html.escape(exclude)}</p>
    </div>
</body>
</html>
'''

    @staticmethod
    def _render_table(label: str, rows: Iterable[Tuple[str, int, float]]) -> str:
        body = ''.join(
            f'''
                <tr>
                    <td>{html.escape(name)}</td>
                    <td>{count}</td>
                    <td class="percentage">{share:.2f}%</td>
                </tr>'''
            for name, count, share in rows
        )
        return f'''<table>
            <thead>
                <tr>
                    <th>{html.escape(label)}</th>
                    <th>Count</th>
                    <th>Percentage</th>
                </tr>
            </thead>
            <tbody>{body}
            </tbody>
        </table>'''

    @staticmethod
    def _get_css() -> str:
        return '''
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            max-width: 1200px;
            margin: 0 auto;
            padding: 20px;
            background: #f5f5f5;
        }
        .header {
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            color: white;
            padding: 30px;
            border-radius: 10px;
            margin-bottom: 30px;
        }
        .header h1 { margin: 0; font-size: 2.5em; }
        .header .meta { margin-top: 10px; opacity: 0.9; }
        .section {
            background: white;
            padding: 25px;
            border-radius: 10px;
            margin-bottom: 20px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }
        .section h2 {
            margin-top: 0;
            color: #333;
            border-bottom: 2px solid #667eea;
            padding-bottom: 10px;
        }
        table { width: 100%; border-collapse: collapse; margin-top: 15px; }
        th, td { padding: 12px; text-align: left; border-bottom: 1px solid #ddd; }
        th { background: #f8f9fa; font-weight: 600; color: #495057; }
        tr:hover { background: #f8f9fa; }
        .percentage { color: #28a745; font-weight: 600; }
        '''
