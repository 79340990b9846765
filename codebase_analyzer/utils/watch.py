"""Debounced directory watcher that re-runs an analysis on file changes."""

import threading
import time
from pathlib import Path
from typing import Callable, Iterable, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .logging import get_logger

logger = get_logger().get_logger('watch')

WATCH_IGNORED = frozenset({'node_modules', '.git', 'dist', 'build', 'coverage', '.next'})

# Wait this long after the last change before re-analyzing
DEBOUNCE_SECONDS = 0.5

WATCHED_EVENTS = frozenset({'created', 'modified', 'deleted', 'moved'})


class AnalysisChangeHandler(FileSystemEventHandler):
    """
    Turns file system events into debounced analysis runs.

    Each relevant event restarts the debounce timer; when it fires the
    analysis runs once. Changes arriving while an analysis is running are
    dropped.
    """

    def __init__(
        self,
        root: Path,
        run_analysis: Callable[[], None],
        exclude: Optional[Iterable[str]] = None,
        debounce: float = DEBOUNCE_SECONDS,
    ):
        """
        Args:
            root: Watched directory
            run_analysis: Zero-argument callable performing one analysis
            exclude: Extra directory or file names to ignore
            debounce: Seconds of quiet before re-analyzing
        """
        super().__init__()
        self.root = Path(root).resolve()
        self.run_analysis = run_analysis
        self.ignored = set(WATCH_IGNORED) | set(exclude or [])
        self.debounce = debounce

        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._analyzing = False

    def is_ignored(self, path: str) -> bool:
        """Whether any component of ``path`` below the root is ignored."""
        try:
            parts = Path(path).resolve().relative_to(self.root).parts
        except ValueError:
            parts = Path(path).parts
        return any(part in self.ignored for part in parts)

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in WATCHED_EVENTS or event.is_directory:
            return
        if self.is_ignored(event.src_path):
            return
        logger.debug(f"{event.event_type}: {event.src_path}")
        self.schedule()

    def schedule(self) -> None:
        """Restart the debounce timer."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.debounce, self.trigger)
            self._timer.daemon = True
            self._timer.start()

    def trigger(self) -> bool:
        """
        Run the analysis unless one is already running.

        Returns:
            True if the analysis ran
        """
        with self._lock:
            self._timer = None
            if self._analyzing:
                logger.debug("Skipping change during active analysis")
                return False
            self._analyzing = True

        logger.info("🔄 File change detected, re-analyzing...")
        try:
            self.run_analysis()
        except Exception as e:
            logger.error(f"Error during analysis: {e}")
        finally:
            with self._lock:
                self._analyzing = False
        return True

    def cancel(self) -> None:
        """Drop a pending debounced run."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


def watch_directory(
    directory: Path,
    run_analysis: Callable[[], None],
    exclude: Optional[Iterable[str]] = None,
    debounce: float = DEBOUNCE_SECONDS,
    stop_event: Optional[threading.Event] = None,
) -> None:
    """
    Run ``run_analysis`` now and again after every burst of changes.

    Blocks until Ctrl+C (or until ``stop_event`` is set).

    Args:
        directory: Directory to watch recursively
        run_analysis: Zero-argument callable performing one analysis
        exclude: Extra directory or file names to ignore
        debounce: Seconds of quiet before re-analyzing
        stop_event: Optional event that ends the watch loop
    """
    handler = AnalysisChangeHandler(directory, run_analysis, exclude, debounce)

    logger.info(f"👀 Watch mode enabled, watching: {handler.root}")
    logger.info("Press Ctrl+C to stop")

    handler.trigger()

    observer = Observer()
    observer.schedule(handler, str(handler.root), recursive=True)
    observer.start()

    try:
        while not (stop_event is not None and stop_event.is_set()):
            time.sleep(0.2)
    except KeyboardInterrupt:
        logger.info("👋 Stopping watch mode...")
    finally:
        handler.cancel()
        observer.stop()
        observer.join()
