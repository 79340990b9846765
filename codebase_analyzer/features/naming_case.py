"""
Naming convention classifier for file names.

Every name gets exactly one label: the first pattern in NAMING_CASES that
matches the whole string. Several patterns overlap (``abc`` matches
CamelCase, SnakeCase, LowerCase, ...), so the order of the table decides.
"""

import re
from pathlib import Path
from typing import Dict, Pattern, Union


NAMING_CASES: Dict[str, Pattern[str]] = {
    'CamelCase': re.compile(r'[a-z][a-zA-Z0-9]*'),
    'PascalCase': re.compile(r'[A-Z][a-zA-Z0-9]*'),
    'SnakeCase': re.compile(r'[a-z][a-z0-9_]*'),
    'UpperCase': re.compile(r'[A-Z][A-Z0-9]*'),
    'LowerCase': re.compile(r'[a-z][a-z0-9]*'),
    'KebabCase': re.compile(r'[a-z][a-z0-9-]*'),
    'StartCase': re.compile(r'[A-Z][a-z0-9 ]*'),
    'DotCase': re.compile(r'[a-z][a-z0-9.]*'),
    'PathCase': re.compile(r'[a-z][a-z0-9/]*'),
    'SpaceCase': re.compile(r'[a-z][a-z0-9 ]*'),
    'NoCase': re.compile(r'[a-z][a-z0-9]*'),
    'ConstantCase': re.compile(r'[A-Z][A-Z0-9_]*'),
    'SentenceCase': re.compile(r'[A-Z][a-z0-9 ]*'),
    'Unknown': re.compile(r'.*', re.DOTALL),
}

UNKNOWN_CASE = 'Unknown'


def control_case(name: str, case: str) -> bool:
    """
    Check a name against one naming convention.

    Args:
        name: Name to test
        case: Label from NAMING_CASES

    Returns:
        True if the whole name matches the convention

    Raises:
        KeyError: If ``case`` is not a known label
    """
    return NAMING_CASES[case].fullmatch(name) is not None


def what_case(name: str) -> str:
    """Return the label of the first naming convention matching ``name``."""
    if not name:
        return UNKNOWN_CASE

    for case, pattern in NAMING_CASES.items():
        if pattern.fullmatch(name):
            return case

    return UNKNOWN_CASE


def file_name_case(file_path: Union[str, Path]) -> str:
    """Classify a file's base name without its final extension."""
    return what_case(Path(file_path).stem)
