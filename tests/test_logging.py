"""Tests for the logging setup."""

import logging
import tempfile
from io import StringIO
from pathlib import Path

import pytest

from codebase_analyzer.utils import logging as log_module
from codebase_analyzer.utils.colors import Colors
from codebase_analyzer.utils.logging import (
    ROOT_LOGGER_NAME,
    ColoredFormatter,
    Logger,
    TqdmStreamHandler,
    configure_logging,
    console_level,
    get_logger,
    reset_logger,
)
from codebase_analyzer.utils.progress import ProgressBar


def make_record(level=logging.INFO, msg='message'):
    return logging.LogRecord(
        name='codebase_analyzer.test', level=level, pathname='', lineno=0,
        msg=msg, args=(), exc_info=None,
    )


def read_log(logger: Logger, log_file: Path) -> str:
    logger._file_handler.flush()
    logger._file_handler.close()
    return log_file.read_text(encoding='utf-8')


@pytest.fixture
def fresh_logger():
    reset_logger()
    yield get_logger()
    reset_logger()


class TestColoredFormatter:
    """Test cases for ColoredFormatter."""

    def test_plain(self):
        """Without colors or icons the message is untouched."""
        formatter = ColoredFormatter('%(message)s', use_colors=False, use_icons=False)

        assert formatter.format(make_record(msg='Scanning')) == 'Scanning'

    @pytest.mark.parametrize('level, code', [
        (logging.DEBUG, Colors.GRAY),
        (logging.INFO, Colors.OKCYAN),
        (logging.WARNING, Colors.WARNING),
        (logging.ERROR, Colors.FAIL),
        (logging.CRITICAL, Colors.FAIL + Colors.BOLD),
    ])
    def test_level_colors(self, level, code):
        """Each level wraps the message in its own color."""
        formatter = ColoredFormatter('%(message)s', use_colors=True, use_icons=False)

        assert formatter.format(make_record(level, 'x')) == f'{code}x{Colors.ENDC}'

    def test_icons(self):
        """Warnings and errors are prefixed with an icon; info is not."""
        formatter = ColoredFormatter('%(message)s', use_colors=False, use_icons=True)

        assert formatter.format(make_record(logging.INFO, 'ok')) == 'ok'
        assert formatter.format(make_record(logging.WARNING, 'slow')).startswith('⚠️')
        assert formatter.format(make_record(logging.ERROR, 'broken')) == '❌ broken'


class TestConsoleLevel:
    """Test cases for console_level."""

    @pytest.mark.parametrize('verbose, quiet, level', [
        (False, False, logging.INFO),
        (True, False, logging.DEBUG),
        (False, True, logging.WARNING),
        (True, True, logging.WARNING),
    ])
    def test_flags(self, verbose, quiet, level):
        """Quiet wins over verbose."""
        assert console_level(verbose, quiet) == level


class TestTqdmStreamHandler:
    """Test cases for TqdmStreamHandler."""

    def _handler(self, stream):
        handler = TqdmStreamHandler(stream)
        handler.setFormatter(logging.Formatter('%(message)s'))
        return handler

    def test_one_line_per_record(self):
        """Records are newline terminated."""
        stream = StringIO()
        handler = self._handler(stream)

        handler.emit(make_record(msg='first'))
        handler.emit(make_record(msg='second'))

        assert stream.getvalue() == 'first\nsecond\n'

    def test_record_during_progress(self):
        """A record emitted while a bar is drawn still reaches the stream."""
        stream = StringIO()
        handler = self._handler(stream)
        bar = ProgressBar(total=3, desc="Scanning", file=stream)

        handler.emit(make_record(msg='between updates'))
        bar.close()

        assert 'between updates\n' in stream.getvalue()


class TestLogger:
    """Test cases for the shared Logger."""

    def test_single_instance(self, fresh_logger):
        """Logger() and get_logger() return the same object."""
        assert Logger() is fresh_logger
        assert get_logger() is fresh_logger

    def test_children_share_handlers(self, fresh_logger):
        """Module loggers are children of the package logger."""
        child = fresh_logger.get_logger('i18n')

        assert child.name == 'codebase_analyzer.i18n'
        assert child.parent is logging.getLogger(ROOT_LOGGER_NAME)
        assert fresh_logger.get_logger().propagate is False

    @pytest.mark.parametrize('kwargs, level', [
        ({}, logging.INFO),
        ({'verbose': True}, logging.DEBUG),
        ({'quiet': True}, logging.WARNING),
    ])
    def test_configure_sets_console_level(self, fresh_logger, kwargs, level):
        """CLI flags set the console threshold."""
        configure_logging(**kwargs)

        assert fresh_logger._console_handler.level == level

    def test_reconfigure_replaces_console_handler(self, fresh_logger):
        """Configuring twice leaves a single console handler."""
        configure_logging()
        configure_logging(quiet=True)

        consoles = [h for h in fresh_logger._logger.handlers if isinstance(h, TqdmStreamHandler)]
        assert len(consoles) == 1

    def test_console_output_by_level(self, fresh_logger, capfd):
        """Info shows by default; debug needs verbose."""
        configure_logging(use_colors=False)
        fresh_logger.info("visible info")
        fresh_logger.debug("hidden debug")
        fresh_logger.get_logger('content').warning("child warning")

        out = capfd.readouterr().out
        assert "visible info" in out
        assert "hidden debug" not in out
        assert "child warning" in out

    def test_quiet_output(self, fresh_logger, capfd):
        """Quiet mode drops info records."""
        configure_logging(quiet=True)
        fresh_logger.info("chatty")
        fresh_logger.error("serious")

        out = capfd.readouterr().out
        assert "chatty" not in out
        assert "serious" in out

    @pytest.mark.parametrize('method, marker', [
        ('success', '✓'),
        ('fail', '✗'),
        ('hint', '💡'),
    ])
    def test_styled_helpers(self, fresh_logger, capfd, method, marker):
        """Styled helpers prefix their marker."""
        configure_logging()
        getattr(fresh_logger, method)("styled text")

        out = capfd.readouterr().out
        assert marker in out
        assert "styled text" in out

    def test_section(self, fresh_logger, capfd):
        """A section prints its title and a rule."""
        configure_logging()
        fresh_logger.section("Results")

        out = capfd.readouterr().out
        assert "Results" in out
        assert "=" * 70 in out


class TestFileLogging:
    """Test cases for the log file."""

    def test_file_records(self, fresh_logger):
        """The file gets timestamped records with level and logger name."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / 'run.log'
            configure_logging(log_file=log_file)

            fresh_logger.info("started")
            fresh_logger.get_logger('watch').warning("slow disk")
            fresh_logger.debug("detail")

            content = read_log(fresh_logger, log_file)
            assert "[INFO] codebase_analyzer: started" in content
            assert "[WARNING] codebase_analyzer.watch: slow disk" in content
            assert "detail" in content

    def test_file_has_no_ansi_codes(self, fresh_logger):
        """Console styling never reaches the file formatter."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / 'run.log'
            configure_logging(log_file=log_file)

            fresh_logger.warning("plain warning")

            content = read_log(fresh_logger, log_file)
            assert "plain warning" in content
            assert '\033[' not in content
            assert '⚠️' not in content

    def test_parent_directory_created(self, fresh_logger):
        """Missing log directories are created."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / 'logs' / 'nested' / 'run.log'
            configure_logging(log_file=log_file)

            fresh_logger.info("hello")

            assert "hello" in read_log(fresh_logger, log_file)


class TestResetLogger:
    """Test cases for reset_logger."""

    def test_reset_rebuilds_logger(self):
        """After a reset the next get_logger() builds a new instance."""
        first = get_logger()
        reset_logger()

        assert log_module._logger is None
        assert get_logger() is not first
