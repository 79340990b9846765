"""Progress indicator utilities built on tqdm."""

import sys
from typing import Optional

from tqdm import tqdm


class ProgressBar:
    """
    Manually driven progress bar.

    Wraps tqdm so async workers can report completion one item at a time,
    which iterator-style progress bars cannot do.

    Usage:
        bar = ProgressBar(total=len(files), desc="Analyzing", unit="files")
        token.on_cancel(bar.close)
        ...
        bar.update()
        bar.complete()

        # Disable progress output
        bar = ProgressBar(total=10, disable=True)
    """

    def __init__(
        self,
        total: int,
        desc: Optional[str] = None,
        disable: bool = False,
        unit: str = 'files',
        leave: bool = False,
        file: Optional[object] = None,
    ):
        """
        Initialize progress bar.

        Args:
            total: Total number of items
            desc: Description prefix for the progress bar
            disable: If True, don't show progress output
            unit: Unit of items (e.g., 'files', 'keys')
            leave: Whether to leave progress bar after completion
            file: File object for output (default: sys.stderr)
        """
        self.total = total
        self.current = 0
        self._bar: Optional[tqdm] = tqdm(
            total=total,
            desc=desc,
            unit=unit,
            leave=leave,
            file=file or sys.stderr,
            disable=disable,
        )

    @property
    def closed(self) -> bool:
        return self._bar is None

    def update(self, value: int = 1) -> None:
        """Advance by ``value`` items; no-op once closed."""
        self.current += value
        if self._bar is not None:
            self._bar.update(value)

    def set_total(self, total: int) -> None:
        self.total = total
        if self._bar is not None:
            self._bar.total = total
            self._bar.refresh()

    def close(self) -> None:
        """Stop the bar where it is. Safe to call more than once."""
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    def complete(self) -> None:
        """Fill the bar to its total and close it."""
        if self._bar is not None:
            remaining = self.total - self._bar.n
            if remaining > 0:
                self._bar.update(remaining)
            self.current = self.total
            self.close()


class SpinnerContext:
    """
    Status line shown while a short blocking step runs.

    The line is drawn by tqdm (no bar, just the message) and replaced by
    ``<message>... <result>`` when the step finishes without error. The
    result defaults to ``Done``; call ``done()`` inside the block to
    report something more useful, such as how many files were found.
    """

    def __init__(self, message: str, done_message: Optional[str] = None, disable: bool = False):
        """
        Args:
            message: Message to show while the step runs
            done_message: Result printed after the message (default: Done)
            disable: If True, print nothing
        """
        self.message = message
        self.result = done_message or "Done"
        self.disable = disable
        self._status: Optional[tqdm] = None

    def __enter__(self) -> 'SpinnerContext':
        self._status = tqdm(
            total=0,
            desc=self.message,
            bar_format='{desc}',
            leave=False,
            disable=self.disable,
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._status is not None:
            self._status.close()
            self._status = None
        if exc_type is None and not self.disable:
            print(f"{self.message}... {self.result}")

    def update(self, message: str) -> None:
        """Replace the message while the step runs."""
        self.message = message
        if self._status is not None:
            self._status.set_description(message)

    def done(self, result: str) -> None:
        """Set the result printed when the block exits."""
        self.result = result


def spinner(
    message: str,
    done_message: Optional[str] = None,
    disable: bool = False,
) -> SpinnerContext:
    """
    Show ``message`` while the ``with`` block runs.

    Example:
        with spinner("Discovering files", disable=not show_progress) as status:
            files = collect_files(root, extensions, exclude)
            status.done(f"{len(files)} files")
    """
    return SpinnerContext(message, done_message, disable=disable)
