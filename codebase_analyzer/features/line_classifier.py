"""
Line content classifier.

Classifies every physical line of a source file as empty, comment
(single-line, block, mixed, empty block) or source, and counts TODO
markers. Classification is line based; no parsing is involved.
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..exceptions import ReadFailure


@dataclass
class ContentCounters:
    """Line counters aggregated over one or more files."""
    physical: int = 0
    comment: int = 0
    single_line_comment: int = 0
    block_comment: int = 0
    mixed: int = 0
    empty_block_comment: int = 0
    empty: int = 0
    todo: int = 0

    @property
    def source(self) -> int:
        """
        Lines of code.

        Derived as ``physical - comment - empty - todo``. A TODO inside a
        comment is subtracted twice, so the value can go negative.
        """
        return self.physical - self.comment - self.empty - self.todo

    def merge(self, other: 'ContentCounters') -> 'ContentCounters':
        """Add ``other`` into this accumulator and return self."""
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) + getattr(other, f.name))
        return self

    def to_dict(self) -> Dict[str, int]:
        """Counters keyed by report label, in report order."""
        return {
            'Physical': self.physical,
            'Source': self.source,
            'Comment': self.comment,
            'SingleLineComment': self.single_line_comment,
            'BlockComment': self.block_comment,
            'Mixed': self.mixed,
            'EmptyBlockComment': self.empty_block_comment,
            'Empty': self.empty,
            'ToDo': self.todo,
        }


def is_single_line_comment(line: str) -> bool:
    return line.startswith('//')


def is_block_comment(line: str) -> bool:
    return line.startswith('/*') and line.endswith('*/')


def is_mixed_comment(line: str) -> bool:
    return (line.startswith('/*') and not line.endswith('*/')) or line.startswith('*')


def is_empty_block_opener(line: str) -> bool:
    """``/*`` or ``/**`` with nothing after it."""
    return line.startswith('/*') and line.lstrip('/*').strip() == ''


def is_todo(line: str) -> bool:
    return 'TODO' in line


def split_lines(text: str) -> List[str]:
    """
    Split on line endings only (``\\n``, ``\\r\\n``, ``\\r``).

    Form feeds, U+2028 and the other characters ``str.splitlines`` treats
    as boundaries stay inside their line. A trailing newline does not
    start an extra line.
    """
    if not text:
        return []
    lines = text.replace('\r\n', '\n').replace('\r', '\n').split('\n')
    if lines[-1] == '':
        lines.pop()
    return lines


def classify_content(text: str, counters: Optional[ContentCounters] = None) -> ContentCounters:
    """
    Classify every line of ``text`` into ``counters``.

    Lines that open a block comment without closing it switch to an inside
    block state: each following line counts as a comment line (block or
    empty block, depending on the opener) until one ends with ``*/``. An
    unterminated block runs to the end of the text.

    Args:
        text: File content
        counters: Accumulator to update in place (new one if omitted)

    Returns:
        The updated counters
    """
    if counters is None:
        counters = ContentCounters()

    inside_block = False
    empty_opener = False

    for raw_line in split_lines(text):
        line = raw_line.strip()
        counters.physical += 1

        if inside_block:
            counters.comment += 1
            if empty_opener:
                counters.empty_block_comment += 1
            else:
                counters.block_comment += 1
            if line.endswith('*/'):
                inside_block = False
        elif line == '':
            counters.empty += 1
        elif is_single_line_comment(line):
            counters.single_line_comment += 1
            counters.comment += 1
        elif is_block_comment(line):
            counters.block_comment += 1
            counters.comment += 1
        elif is_mixed_comment(line):
            counters.mixed += 1
            counters.comment += 1
            if not line.endswith('*/'):
                inside_block = True
                empty_opener = is_empty_block_opener(line)

        if is_todo(line):
            counters.todo += 1

    return counters


def classify_file(
    file_path: Union[str, Path],
    counters: Optional[ContentCounters] = None
) -> ContentCounters:
    """
    Read a UTF-8 file and classify its lines.

    Raises:
        ReadFailure: If the file cannot be read or decoded
    """
    try:
        text = Path(file_path).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ReadFailure(file_path, e) from e

    return classify_content(text, counters)
