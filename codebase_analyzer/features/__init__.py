"""Feature modules: classifiers and translation key matching."""

from .naming_case import what_case, control_case, file_name_case, NAMING_CASES
from .line_classifier import ContentCounters, classify_content, classify_file
from .translation_tree import (
    FlattenedKey,
    flatten_keys,
    prune_keys,
    load_translation_file,
    write_translation_file,
)
from .usage_matcher import KeyPatternSet, UsagePatternMatcher, UsageResult, search_key

__all__ = [
    'what_case',
    'control_case',
    'file_name_case',
    'NAMING_CASES',
    'ContentCounters',
    'classify_content',
    'classify_file',
    'FlattenedKey',
    'flatten_keys',
    'prune_keys',
    'load_translation_file',
    'write_translation_file',
    'KeyPatternSet',
    'UsagePatternMatcher',
    'UsageResult',
    'search_key',
]
