"""
Codebase Analyzer
=================

Line content, file naming and translation key analysis for JavaScript and
TypeScript codebases.

Usage:
    from codebase_analyzer import CodebaseContentAnalyzer, collect_files

    files = collect_files('./src', extensions=['.ts', '.tsx'])
    result = CodebaseContentAnalyzer(files).run()
    print(result.counters.to_dict())

CLI:
    analyze-codebase analyze ./src -e .ts .tsx
    analyze-codebase i18n messages/en.json ./src
    analyze-codebase init
"""

from .__version__ import __version__, __author__, __description__

# Core exports
from .core.content_analyzer import CodebaseContentAnalyzer, ContentAnalysisResult
from .core.key_resolver import UnusedKeyResolver, KeyUsageReport
from .core.file_discovery import collect_files, collect_source_files

# Features
from .features.line_classifier import ContentCounters
from .features.translation_tree import flatten_keys, prune_keys

from .utils.cancellation import CancellationToken

__all__ = [
    '__version__',
    '__author__',
    '__description__',
    'CodebaseContentAnalyzer',
    'ContentAnalysisResult',
    'UnusedKeyResolver',
    'KeyUsageReport',
    'collect_files',
    'collect_source_files',
    'ContentCounters',
    'flatten_keys',
    'prune_keys',
    'CancellationToken',
]
