"""Source file discovery."""

import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..exceptions import InvalidDirectoryError

# Never scanned for translation key usage
SOURCE_IGNORED_DIRS = frozenset({
    'node_modules', 'dist', 'build', 'coverage', '.git', '.next',
    'public', 'test', 'tests', 'mocks',
})

DEFAULT_SOURCE_EXTENSIONS = ['.ts', '.tsx', '.js', '.jsx', '.vue']


def resolve_directory(directory: Union[str, Path]) -> Path:
    """
    Resolve an analysis root to an absolute directory.

    Raises:
        InvalidDirectoryError: If it does not exist or is not a directory
    """
    root = Path(directory).resolve()
    if not root.is_dir():
        raise InvalidDirectoryError(root)
    return root


def _walk(
    root: Path,
    extensions: Iterable[str],
    skip_names: Iterable[str],
    skip_dot_entries: bool
) -> List[Path]:
    suffixes = set(extensions)
    skipped = set(skip_names)
    files = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [
            d for d in dirnames
            if d not in skipped and not (skip_dot_entries and d.startswith('.'))
        ]

        for filename in filenames:
            if filename in skipped or (skip_dot_entries and filename.startswith('.')):
                continue
            if suffixes and os.path.splitext(filename)[1] not in suffixes:
                continue
            files.append(Path(dirpath) / filename)

    return sorted(files)


def collect_files(
    directory: Union[str, Path],
    extensions: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None
) -> List[Path]:
    """
    Collect files for content analysis.

    Args:
        directory: Root directory
        extensions: Suffixes to keep (``.ts``); every file when empty
        exclude: Directory or file names to skip anywhere in the tree

    Returns:
        Sorted absolute paths

    Raises:
        InvalidDirectoryError: If ``directory`` is not a directory
    """
    root = resolve_directory(directory)
    return _walk(root, extensions or [], exclude or [], skip_dot_entries=False)


def collect_source_files(
    directory: Union[str, Path],
    extensions: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None
) -> List[Path]:
    """
    Collect source files for translation key scanning.

    Build output, dependencies, tests and dot-entries are always skipped.

    Args:
        directory: Root directory
        extensions: Suffixes to keep (default ``.ts .tsx .js .jsx .vue``)
        exclude: Extra directory or file names to skip

    Returns:
        Sorted absolute paths

    Raises:
        InvalidDirectoryError: If ``directory`` is not a directory
    """
    root = resolve_directory(directory)
    skipped = set(SOURCE_IGNORED_DIRS) | set(exclude or [])
    return _walk(root, extensions or DEFAULT_SOURCE_EXTENSIONS, skipped, skip_dot_entries=True)
