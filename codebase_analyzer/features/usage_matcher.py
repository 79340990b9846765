r"""
Translation key usage detection.

A key counts as used in a file when the file references it statically::

    t('section.title')      i18n.t("section.title")     $t(`section.title`)
    messages['section.title']
    messages.section.title  (property access of the trailing segment)
    'section.title'         (the quoted key anywhere)

or when a translation call builds a key dynamically from one of its
prefixes::

    t(`section.${name}`)
    t('section.' + name)
    t(ns + '.section')

A dynamic hit on prefix ``section`` marks every key below ``section`` as
used, because the concrete keys cannot be known without running the code.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Pattern, Sequence, Tuple

from .translation_tree import FlattenedKey, is_ancestor_key

DEFAULT_CALL_NAMES: Tuple[str, ...] = ('t', 'i18n.t', '$t', 'translate')

QUOTE = '[\'"`]'


def build_call_pattern(call_names: Iterable[str] = DEFAULT_CALL_NAMES) -> str:
    """
    Regex source matching any translation call name.

    Names are tried longest first and must not be preceded by an
    identifier character, so ``t`` does not match inside ``list``.

    Raises:
        ValueError: If ``call_names`` is empty
    """
    names = sorted({name for name in call_names if name}, key=len, reverse=True)
    if not names:
        raise ValueError("At least one translation function name is required")
    return r'(?<![\w$])(?:' + '|'.join(re.escape(name) for name in names) + ')'


@dataclass
class UsageResult:
    """Usage of one key across the scanned files."""
    found: bool = False
    is_dynamic: bool = False
    matched_files: List[str] = field(default_factory=list)

    def record(self, file_path: str, dynamic: bool = False) -> None:
        """Mark the key found in ``file_path``; a file is listed once."""
        self.found = True
        if dynamic:
            self.is_dynamic = True
        if file_path not in self.matched_files:
            self.matched_files.append(file_path)


@dataclass
class KeyPatternSet:
    """Compiled static and dynamic patterns of one key."""
    key: str
    static: List[Pattern[str]]
    dynamic: List[Tuple[str, List[Pattern[str]]]]  # (prefix, patterns)

    @classmethod
    def compile(cls, key: str, call_pattern: Optional[str] = None) -> 'KeyPatternSet':
        """
        Compile the patterns of ``key``.

        Args:
            key: Dot-notation key
            call_pattern: Output of build_call_pattern (default call names if omitted)

        Returns:
            Compiled pattern set
        """
        call = call_pattern or build_call_pattern()
        escaped_key = re.escape(key)
        segments = key.split('.')
        trailing = re.escape(segments[-1])

        static = [
            re.compile(call + r'\s*\(\s*' + QUOTE + escaped_key + QUOTE),
            re.compile(r'\[\s*' + QUOTE + escaped_key + QUOTE + r'\s*\]'),
            re.compile(r'\.' + trailing + r'(?![\w$])'),
            re.compile(QUOTE + escaped_key + QUOTE),
        ]

        dynamic = []
        for i in range(1, len(segments) + 1):
            prefix = '.'.join(segments[:i])
            escaped_prefix = re.escape(prefix)
            dynamic.append((prefix, [
                # t(`prefix.${x}`)
                re.compile(
                    call + r'\s*\(\s*`[^`]*?(?<![\w-])' + escaped_prefix
                    + r'(?![\w-])[^`]*\$\{[^}]+\}[^`]*`'
                ),
                # t('prefix.' + x)
                re.compile(
                    call + r'\s*\(\s*' + QUOTE + escaped_prefix + r'\.?' + QUOTE + r'\s*\+'
                ),
                # t(x + '.prefix')
                re.compile(
                    call + r'\s*\([^)]*\+\s*' + QUOTE + r'\.?' + escaped_prefix + QUOTE
                ),
            ]))

        return cls(key=key, static=static, dynamic=dynamic)

    def matches_static(self, content: str) -> bool:
        return any(pattern.search(content) for pattern in self.static)

    def dynamic_prefix(self, content: str) -> Optional[str]:
        """Return the shortest prefix of the key built dynamically in ``content``."""
        for prefix, patterns in self.dynamic:
            if any(pattern.search(content) for pattern in patterns):
                return prefix
        return None

    def search(self, content: str) -> Tuple[bool, bool]:
        """Return ``(found, is_dynamic)`` for this key in ``content``."""
        if self.matches_static(content):
            return True, False
        if self.dynamic_prefix(content) is not None:
            return True, True
        return False, False


def search_key(
    key: str,
    content: str,
    call_names: Iterable[str] = DEFAULT_CALL_NAMES
) -> Tuple[bool, bool]:
    """One-off ``(found, is_dynamic)`` check; compile a KeyPatternSet when scanning many files."""
    return KeyPatternSet.compile(key, build_call_pattern(call_names)).search(content)


class UsagePatternMatcher:
    """
    Tracks usage of every key of a translation tree across files.

    Pattern sets are compiled once, in the constructor. Results are keyed
    by dot path, so two leaves that flatten to the same path share one
    result.
    """

    def __init__(self, keys: Sequence[FlattenedKey], call_names: Iterable[str] = DEFAULT_CALL_NAMES):
        """
        Args:
            keys: Flattened keys of the translation tree
            call_names: Translation function names (``t``, ``i18n.t``, ...)
        """
        self.keys = list(keys)
        self.call_pattern = build_call_pattern(call_names)

        self.pattern_sets: List[KeyPatternSet] = []
        self.results: Dict[str, UsageResult] = {}
        for key in self.keys:
            if key.path not in self.results:
                self.results[key.path] = UsageResult()
                self.pattern_sets.append(KeyPatternSet.compile(key.path, self.call_pattern))

        self._descendants: Dict[str, List[str]] = {}

    def descendants_of(self, prefix: str) -> List[str]:
        """Known key paths equal to or below ``prefix``."""
        if prefix not in self._descendants:
            self._descendants[prefix] = [
                path for path in self.results if is_ancestor_key(prefix, path)
            ]
        return self._descendants[prefix]

    def check(self, pattern_set: KeyPatternSet, content: str, file_path: str) -> bool:
        """
        Check one key against one file's content and record the outcome.

        Static references are checked first. A dynamic hit on a prefix
        records the file for every key below that prefix.

        Returns:
            True if the key was found in ``content``
        """
        if pattern_set.matches_static(content):
            self.results[pattern_set.key].record(file_path)
            return True

        prefix = pattern_set.dynamic_prefix(content)
        if prefix is None:
            return False

        for path in self.descendants_of(prefix):
            self.results[path].record(file_path, dynamic=True)
        self.results[pattern_set.key].record(file_path, dynamic=True)
        return True

    def scan(self, content: str, file_path: str) -> int:
        """Check every key against ``content``; return how many were found."""
        return sum(1 for pattern_set in self.pattern_sets if self.check(pattern_set, content, file_path))

    def is_used(self, path: str) -> bool:
        result = self.results.get(path)
        return result is not None and result.found

    def unused_keys(self) -> List[FlattenedKey]:
        """Keys never found, in tree order."""
        return [key for key in self.keys if not self.results[key.path].found]

    def dynamic_keys(self) -> List[str]:
        return [path for path, result in self.results.items() if result.is_dynamic]

    def matched_files_per_key(self) -> Dict[str, List[str]]:
        """Files each found key was matched in."""
        return {
            path: list(result.matched_files)
            for path, result in self.results.items()
            if result.found
        }
