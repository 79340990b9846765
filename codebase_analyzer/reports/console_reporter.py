"""Console report generator."""

import json
from typing import Optional

from ..core.content_analyzer import ContentAnalysisResult
from ..core.key_resolver import KeyUsageReport
from ..utils.colors import Colors
from ..utils.config import AnalysisOptions
from .json_reporter import percentage

CONTENT_TYPE_ICONS = {
    'Physical': '📄',
    'Source': '💻',
    'Comment': '💬',
    'SingleLineComment': '//',
    'BlockComment': '/* */',
    'Mixed': '🔀',
    'EmptyBlockComment': '⚪',
    'Empty': '⬜',
    'ToDo': '✅',
}


class ConsoleReporter:
    """Print analysis results to the terminal."""

    @staticmethod
    def print_content_report(
        result: ContentAnalysisResult,
        options: Optional[AnalysisOptions] = None
    ):
        """
        Print the content analysis report.

        Args:
            result: Content analysis result
            options: Options the analysis ran with (decides which tables print)
        """
        ConsoleReporter._print_header('📊 CODEBASE ANALYSIS RESULTS')

        if result.file_count == 0:
            directory = options.directory if options else '.'
            extensions = ', '.join(options.extensions) if options and options.extensions else 'all'
            print(f"{Colors.error('❌')} No files found in {Colors.info(directory)}")
            print(f"   Extensions: {Colors.info(extensions)}")
            return

        print(f"📁 Files Analyzed: {Colors.warning(str(result.file_count))}")
        print(f"⏱️  Duration: {Colors.warning(f'{result.duration_seconds:.2f}')}s")

        if result.failed_files:
            print(f"⚠️  Unreadable files: {len(result.failed_files)}")

        if options is None or options.check_file_names:
            ConsoleReporter._print_naming_cases(result)

        if options is None or options.check_file_content:
            ConsoleReporter._print_content_types(result)

    @staticmethod
    def _print_header(title: str):
        """Print report header."""
        print("\n" + "=" * 70)
        print(f"{Colors.bold(title)}")
        print("=" * 70)

    @staticmethod
    def _print_naming_cases(result: ContentAnalysisResult):
        """Print file name cases, most frequent first."""
        print(f"\n{Colors.bold('📝 FILE NAME CASE ANALYSIS')}")
        print("-" * 70)
        print(f"{'Case Type':<30} {'Count':<15} {'Percentage':<20}")
        print("-" * 70)

        for case, count in sorted(result.naming_cases.items(), key=lambda item: item[1], reverse=True):
            share = Colors.percentage(percentage(count, result.file_count))
            print(f"{Colors.info(f'{case:<30}')} {count:<15} {share}")

    @staticmethod
    def _print_content_types(result: ContentAnalysisResult):
        """Print line counters with their share of physical lines."""
        print(f"\n{Colors.bold('📊 CONTENT TYPE ANALYSIS')}")
        print("-" * 70)
        print(f"{'Type':<30} {'Count':<15} {'Percentage':<20}")
        print("-" * 70)

        content_types = result.counters.to_dict()
        physical = content_types['Physical']

        for content_type, count in content_types.items():
            label = f"{CONTENT_TYPE_ICONS.get(content_type, '📊')} {content_type}"
            share = Colors.percentage(percentage(count, physical))
            print(f"{Colors.info(f'{label:<30}')} {count:<15} {share}")

    @staticmethod
    def print_key_report(report: KeyUsageReport, limit: Optional[int] = None):
        """
        Print the unused translation keys with their values.

        Args:
            report: Key usage report
            limit: Print at most this many keys (all when None)
        """
        if report.dynamic_key_count:
            print(Colors.warning(
                f"\n⚠️  Note: Found {report.dynamic_key_count} keys used dynamically "
                f"(e.g., t(`a.b.${{var}}`))"
            ))
            print(Colors.muted("   These keys and their children are marked as used to prevent false positives."))

        print(Colors.success(
            f"\n✅ Completed: Checked {report.total_keys_checked} translation keys "
            f"across {report.files_processed} files"
        ))

        if not report.unused_keys:
            print(Colors.success("\n✓ No unused translation keys found!\n"))
            return

        print(Colors.warning(f"\nFound {Colors.bold(str(len(report.unused_keys)))} unused translation key(s):\n"))

        keys = report.unused_keys if limit is None else report.unused_keys[:limit]
        for i, key in enumerate(keys, 1):
            value = json.dumps(key.value, ensure_ascii=False)
            print(f"{Colors.muted(f'{i}. ')}{key.path}{Colors.muted(f' ({value})')}")

        if limit is not None and len(report.unused_keys) > limit:
            print(f"\n... and {len(report.unused_keys) - limit} more")
