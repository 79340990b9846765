"""
Translation tree helpers.

Localization files are nested JSON objects whose leaves are the
translations::

    {"section": {"title": "Title", "body": "Body"}, "ok": "OK"}

flatten to the dot-notation keys ``section.title``, ``section.body`` and
``ok``. Each flattened key keeps its raw segment names so a key can be
removed even when a segment itself contains a dot.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple, Union

from ..exceptions import TranslationFileError


@dataclass(frozen=True)
class FlattenedKey:
    """A leaf of the translation tree."""
    path: str  # e.g. "section.title"
    value: Any
    original_path: Tuple[str, ...]  # e.g. ("section", "title")


def is_ancestor_key(ancestor: str, key: str) -> bool:
    """
    Check whether ``ancestor`` is ``key`` or one of its dot-parents.

    ``a.b`` is an ancestor of ``a.b`` and ``a.b.c`` but not of ``a.bc``.
    """
    return key == ancestor or key.startswith(ancestor + '.')


def flatten_keys(
    tree: Dict[str, Any],
    prefix: str = '',
    original_path: Tuple[str, ...] = ()
) -> List[FlattenedKey]:
    """
    Flatten a nested translation tree into dot-notation leaves.

    Mappings are recursed depth first in insertion order. Lists, scalars
    and None are leaves. Empty mappings produce no entry.

    Args:
        tree: Parsed translation object
        prefix: Dot path of ``tree`` inside the root object
        original_path: Raw segments of ``tree`` inside the root object

    Returns:
        Flattened keys in document order
    """
    keys: List[FlattenedKey] = []

    for name, value in tree.items():
        path = f'{prefix}.{name}' if prefix else name
        segments = original_path + (name,)

        if isinstance(value, dict):
            keys.extend(flatten_keys(value, path, segments))
        else:
            keys.append(FlattenedKey(path=path, value=value, original_path=segments))

    return keys


def remove_key(tree: Dict[str, Any], original_path: Iterable[str]) -> None:
    """
    Delete the leaf at ``original_path`` and any ancestor left empty.

    Missing paths are ignored.
    """
    segments = list(original_path)
    if not segments:
        return

    head, rest = segments[0], segments[1:]

    if not rest:
        tree.pop(head, None)
        return

    child = tree.get(head)
    if isinstance(child, dict):
        remove_key(child, rest)
        if not child:
            del tree[head]


def prune_keys(tree: Dict[str, Any], keys: Iterable[FlattenedKey]) -> Dict[str, Any]:
    """
    Remove every key in ``keys`` from ``tree``.

    The tree is mutated in place and returned. No I/O happens here.
    """
    for key in keys:
        remove_key(tree, key.original_path)
    return tree


def load_translation_file(file_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read and parse a JSON translation file.

    Raises:
        TranslationFileError: If the file is unreadable, not JSON, or its
            top-level value is not an object
    """
    file_path = Path(file_path)

    try:
        content = file_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise TranslationFileError(file_path, str(e)) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise TranslationFileError(file_path, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise TranslationFileError(
            file_path, f"expected a JSON object, got {type(data).__name__}"
        )

    return data


def write_translation_file(file_path: Union[str, Path], tree: Dict[str, Any]) -> None:
    """Write ``tree`` as 2-space indented JSON with a trailing newline."""
    Path(file_path).write_text(
        json.dumps(tree, indent=2, ensure_ascii=False) + '\n',
        encoding='utf-8'
    )
