"""Utility modules."""

from .colors import Colors
from .cancellation import CancellationToken, install_signal_handlers
from .backup import (
    create_backup,
    list_backups,
    cleanup_old_backups,
)

__all__ = [
    'Colors',
    'CancellationToken',
    'install_signal_handlers',
    'create_backup',
    'list_backups',
    'cleanup_old_backups',
]
