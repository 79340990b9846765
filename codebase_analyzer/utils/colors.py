"""ANSI color helpers for terminal reports."""

import os


class Colors:
    """
    ANSI codes and helpers that wrap text in them.

    The helpers return plain text once colors are disabled (``--no-color``
    or the ``NO_COLOR`` environment variable); the raw codes stay
    available for the log formatter, which has its own switch.
    """

    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    GRAY = '\033[90m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    UNDERLINE = '\033[4m'

    enabled = 'NO_COLOR' not in os.environ

    @classmethod
    def set_enabled(cls, enabled: bool) -> None:
        cls.enabled = enabled

    @classmethod
    def paint(cls, code: str, text: str) -> str:
        """Wrap ``text`` in ``code`` when colors are enabled."""
        if not cls.enabled:
            return text
        return f"{code}{text}{cls.ENDC}"

    @classmethod
    def success(cls, text: str) -> str:
        return cls.paint(cls.OKGREEN, text)

    @classmethod
    def error(cls, text: str) -> str:
        return cls.paint(cls.FAIL, text)

    @classmethod
    def warning(cls, text: str) -> str:
        return cls.paint(cls.WARNING, text)

    @classmethod
    def info(cls, text: str) -> str:
        return cls.paint(cls.OKCYAN, text)

    @classmethod
    def muted(cls, text: str) -> str:
        return cls.paint(cls.GRAY, text)

    @classmethod
    def bold(cls, text: str) -> str:
        return cls.paint(cls.BOLD, text)

    @classmethod
    def percentage(cls, value: float) -> str:
        """Format a share: green above 50, yellow above 25, gray otherwise."""
        text = f"{value:.2f}%"
        if value > 50:
            return cls.success(text)
        if value > 25:
            return cls.warning(text)
        return cls.muted(text)
