"""Core modules for codebase analysis."""

from .concurrency import (
    BatchOutcome,
    ConcurrencyCoordinator,
    default_concurrency,
    optimal_concurrency,
)
from .file_discovery import collect_files, collect_source_files
from .content_analyzer import CodebaseContentAnalyzer, ContentAnalysisResult, FileAnalysis
from .key_resolver import UnusedKeyResolver, KeyUsageReport

__all__ = [
    'BatchOutcome',
    'ConcurrencyCoordinator',
    'default_concurrency',
    'optimal_concurrency',
    'collect_files',
    'collect_source_files',
    'CodebaseContentAnalyzer',
    'ContentAnalysisResult',
    'FileAnalysis',
    'UnusedKeyResolver',
    'KeyUsageReport',
]
