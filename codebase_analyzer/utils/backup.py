"""Backup utilities for safe modifications of translation files."""

import shutil
from pathlib import Path
from datetime import datetime
from typing import Optional

from .logging import get_logger

logger = get_logger()


def create_backup(file_path: Path, timestamp: Optional[str] = None) -> Path:
    """
    Copy a file to ``<name>.<timestamp>.bak`` beside it.

    Args:
        file_path: File to back up
        timestamp: Custom timestamp (default: now, microsecond precision)

    Returns:
        Path to the backup file
    """
    file_path = Path(file_path)
    if timestamp is None:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S_%f')

    backup_path = file_path.with_name(f'{file_path.name}.{timestamp}.bak')
    shutil.copy2(file_path, backup_path)

    logger.info(f"💾 Backup created: {backup_path}")
    return backup_path


def list_backups(file_path: Path) -> list[Path]:
    """
    List the backups of a file, most recent first.

    Args:
        file_path: Original file

    Returns:
        List of backup files
    """
    file_path = Path(file_path)
    return sorted(
        file_path.parent.glob(f'{file_path.name}.*.bak'),
        key=lambda p: p.name,
        reverse=True
    )


def cleanup_old_backups(file_path: Path, keep_count: int = 5) -> list[Path]:
    """
    Remove old backups, keeping only the most recent ones.

    Args:
        file_path: Original file
        keep_count: Number of backups to keep

    Returns:
        The removed backup files
    """
    backups = list_backups(file_path)

    if len(backups) <= keep_count:
        return []

    to_remove = backups[keep_count:]

    logger.debug(f"Cleaning up old backups (keeping {keep_count} most recent)")

    for backup in to_remove:
        backup.unlink()
        logger.debug(f"Removed backup: {backup.name}")

    return to_remove
