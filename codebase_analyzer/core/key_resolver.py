"""Unused translation key resolver."""

import asyncio
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from ..exceptions import CancellationRequested
from ..features.translation_tree import FlattenedKey, flatten_keys
from ..features.usage_matcher import DEFAULT_CALL_NAMES, UsagePatternMatcher
from ..utils.cancellation import CancellationToken
from ..utils.logging import get_logger
from ..utils.progress import ProgressBar
from .concurrency import ConcurrencyCoordinator, default_concurrency

logger = get_logger().get_logger('i18n')

# Keys checked between two cancellation checkpoints inside one file
KEY_BATCH_SIZE = 100


@dataclass
class KeyUsageReport:
    """Result of an unused key resolution."""
    total_keys_checked: int = 0
    unused_keys: List[FlattenedKey] = field(default_factory=list)
    dynamic_key_count: int = 0
    matched_files_per_key: Dict[str, List[str]] = field(default_factory=dict)
    files_processed: int = 0
    cancelled: bool = False
    duration_seconds: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary."""
        return {
            'totalKeysChecked': self.total_keys_checked,
            'unusedKeys': [
                {'key': key.path, 'value': key.value}
                for key in self.unused_keys
            ],
            'dynamicKeyCount': self.dynamic_key_count,
            'matchedFilesPerKey': {
                key: list(files) for key, files in self.matched_files_per_key.items()
            },
            'filesProcessed': self.files_processed,
            'cancelled': self.cancelled,
            'durationSeconds': round(self.duration_seconds, 3),
        }


class UnusedKeyResolver:
    """
    Finds translation keys that no source file references.

    Every file is checked against every key, including keys already found
    elsewhere, so ``matched_files_per_key`` lists all referencing files.
    Matching runs on the event loop thread between reads, which keeps the
    shared usage state consistent without locks.
    """

    def __init__(
        self,
        tree: Dict[str, Any],
        files: Sequence[Union[str, Path]],
        max_concurrency: Optional[int] = None,
        token: Optional[CancellationToken] = None,
        call_names: Iterable[str] = DEFAULT_CALL_NAMES,
        show_progress: bool = False,
    ):
        """
        Initialize resolver.

        Args:
            tree: Parsed translation tree
            files: Source files to scan
            max_concurrency: Batch width (size-based default when None)
            token: Cancellation token
            call_names: Translation function names
            show_progress: Show a progress bar
        """
        self.tree = tree
        self.files = [str(f) for f in files]
        self.keys = flatten_keys(tree)
        self.max_concurrency = max_concurrency or default_concurrency(len(self.files))
        self.token = token or CancellationToken()
        self.call_names = list(call_names)
        self.show_progress = show_progress
        self.files_processed = 0

    async def _scan_file(self, matcher: UsagePatternMatcher, file_path: str) -> bool:
        self.token.throw_if_cancelled()

        try:
            content = await asyncio.to_thread(Path(file_path).read_text, encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Skipping unreadable file {file_path}: {e}")
            return False

        pattern_sets = matcher.pattern_sets
        for i in range(0, len(pattern_sets), KEY_BATCH_SIZE):
            self.token.throw_if_cancelled()
            for pattern_set in pattern_sets[i:i + KEY_BATCH_SIZE]:
                matcher.check(pattern_set, content, file_path)
            await asyncio.sleep(0)

        self.files_processed += 1
        return True

    async def resolve(self) -> KeyUsageReport:
        """
        Scan all files and report the keys nobody uses.

        Returns:
            KeyUsageReport; ``cancelled=True`` with no unused keys if the
            token was set before or during the scan
        """
        start = time.perf_counter()
        self.files_processed = 0

        matcher = UsagePatternMatcher(self.keys, self.call_names)
        logger.info(
            f"Checking {len(self.keys)} translation keys across {len(self.files)} files "
            f"({self.max_concurrency} concurrent readers)"
        )

        bar = ProgressBar(
            total=len(self.files),
            desc="Processing files",
            unit="files",
            disable=not self.show_progress,
        )
        self.token.on_cancel(bar.close)

        coordinator = ConcurrencyCoordinator(self.max_concurrency, self.token)
        try:
            await coordinator.run(
                self.files,
                lambda file_path: self._scan_file(matcher, file_path),
                on_progress=lambda _: bar.update(),
            )
        except CancellationRequested:
            bar.close()
            logger.warning("Key analysis cancelled")
            return KeyUsageReport(
                total_keys_checked=len(self.keys),
                files_processed=self.files_processed,
                cancelled=True,
                duration_seconds=time.perf_counter() - start,
            )

        bar.complete()

        dynamic_keys = matcher.dynamic_keys()
        if dynamic_keys:
            logger.info(
                f"Found {len(dynamic_keys)} keys used dynamically; "
                f"they and their children are treated as used"
            )

        report = KeyUsageReport(
            total_keys_checked=len(self.keys),
            unused_keys=matcher.unused_keys(),
            dynamic_key_count=len(dynamic_keys),
            matched_files_per_key=matcher.matched_files_per_key(),
            files_processed=self.files_processed,
            duration_seconds=time.perf_counter() - start,
        )
        logger.debug(
            f"Checked {report.total_keys_checked} keys across {report.files_processed} files "
            f"in {report.duration_seconds:.2f}s"
        )
        return report

    def run(self) -> KeyUsageReport:
        """Synchronous wrapper around resolve()."""
        return asyncio.run(self.resolve())
