"""
Logging for codebase analyzer.

Every module logs through a child of the ``codebase_analyzer`` logger
(``codebase_analyzer.content``, ``codebase_analyzer.i18n``, ...). Console
records are written through tqdm so a message emitted while a progress
bar is drawn does not tear the bar; the optional log file gets plain,
timestamped records at DEBUG level.
"""

import logging
import sys
from typing import Optional
from pathlib import Path

from tqdm import tqdm

from .colors import Colors

ROOT_LOGGER_NAME = 'codebase_analyzer'

CONSOLE_FORMAT = '%(message)s'
FILE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def console_level(verbose: bool = False, quiet: bool = False) -> int:
    """Console threshold for the CLI flags; quiet wins over verbose."""
    if quiet:
        return logging.WARNING
    if verbose:
        return logging.DEBUG
    return logging.INFO


class ColoredFormatter(logging.Formatter):
    """
    Console formatter.

    Colors the whole message by level and can prefix warnings and errors
    with an icon. Never used for the log file.
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.GRAY,
        logging.INFO: Colors.OKCYAN,
        logging.WARNING: Colors.WARNING,
        logging.ERROR: Colors.FAIL,
        logging.CRITICAL: Colors.FAIL + Colors.BOLD,
    }

    LEVEL_ICONS = {
        logging.WARNING: '⚠️ ',
        logging.ERROR: '❌',
        logging.CRITICAL: '❌',
    }

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True, use_icons: bool = False):
        """
        Args:
            fmt: Format string for log messages
            use_colors: Wrap messages in ANSI color codes
            use_icons: Prefix warnings and errors with an icon
        """
        super().__init__(fmt)
        self.use_colors = use_colors
        self.use_icons = use_icons

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        if self.use_colors:
            message = f"{self.LEVEL_COLORS.get(record.levelno, '')}{message}{Colors.ENDC}"

        icon = self.LEVEL_ICONS.get(record.levelno) if self.use_icons else None
        if icon:
            message = f"{icon} {message}"

        return message


class TqdmStreamHandler(logging.StreamHandler):
    """Stream handler that clears and redraws active tqdm bars around each record."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=self.stream)
            self.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


def _console_handler(level: int = logging.INFO, use_colors: bool = True) -> TqdmStreamHandler:
    handler = TqdmStreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, use_colors=use_colors, use_icons=True))
    return handler


def _file_handler(file_path: Path) -> logging.FileHandler:
    file_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(file_path, encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    return handler


class Logger:
    """
    Process-wide logger shared by the CLI and the analyzers.

    Owns the handlers of the ``codebase_analyzer`` logger: one console
    handler (replaced on every configure call) and at most one file
    handler. Module code asks for a child with ``get_logger(name)``.
    """

    _instance: Optional['Logger'] = None
    _initialized: bool = False

    def __new__(cls) -> 'Logger':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if Logger._initialized:
            return

        self._logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)
        self._logger.handlers = []
        self._logger.propagate = False

        self._console_handler: logging.Handler = _console_handler()
        self._logger.addHandler(self._console_handler)
        self._file_handler: Optional[logging.FileHandler] = None

        Logger._initialized = True

    def configure(
        self,
        verbose: bool = False,
        quiet: bool = False,
        log_file: Optional[Path] = None,
        use_colors: bool = True
    ) -> None:
        """
        Apply the CLI logging flags.

        Args:
            verbose: Show DEBUG records on the console
            quiet: Only show WARNING and above on the console
            log_file: Also write every record to this file
            use_colors: Color console records
        """
        self._logger.removeHandler(self._console_handler)
        self._console_handler = _console_handler(console_level(verbose, quiet), use_colors)
        self._logger.addHandler(self._console_handler)

        if log_file:
            if self._file_handler is not None:
                self._logger.removeHandler(self._file_handler)
                self._file_handler.close()
            self._file_handler = _file_handler(Path(log_file))
            self._logger.addHandler(self._file_handler)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """The package logger, or its ``name`` child."""
        if name:
            return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
        return self._logger

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs) -> None:
        self._logger.critical(msg, *args, **kwargs)

    def success(self, msg: str) -> None:
        self._logger.info(f"{Colors.success('✓')} {msg}")

    def fail(self, msg: str) -> None:
        self._logger.error(f"{Colors.error('✗')} {msg}")

    def hint(self, msg: str) -> None:
        self._logger.info(f"{Colors.info('💡')} {msg}")

    def section(self, title: str, char: str = '=', width: int = 70) -> None:
        """Title line followed by a rule."""
        self._logger.info(f"\n{Colors.bold(title)}")
        self._logger.info(char * width)


_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Return the shared Logger, creating it on first use."""
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
    use_colors: bool = True
) -> None:
    """Configure the shared Logger; see Logger.configure."""
    get_logger().configure(
        verbose=verbose,
        quiet=quiet,
        log_file=log_file,
        use_colors=use_colors
    )


def reset_logger() -> None:
    """Drop the shared Logger and close its handlers (test isolation)."""
    global _logger
    if _logger is not None:
        for handler in _logger._logger.handlers[:]:
            handler.close()
            _logger._logger.removeHandler(handler)
    _logger = None
    Logger._instance = None
    Logger._initialized = False
