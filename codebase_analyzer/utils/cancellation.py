"""Cooperative cancellation for long-running scans."""

import signal
import threading
from typing import Callable, List

from ..exceptions import CancellationRequested
from .logging import get_logger

logger = get_logger().get_logger('cancellation')


class CancellationToken:
    """
    One-shot cancellation flag shared by reference between tasks.

    The flag goes from unset to set exactly once. Registered callbacks run
    on that transition (progress bars use them to close themselves). Work
    is never interrupted; tasks poll the token at their checkpoints.

    Usage:
        token = CancellationToken()
        token.on_cancel(bar.close)
        ...
        token.throw_if_cancelled()
    """

    def __init__(self):
        self._cancelled = False
        self._callbacks: List[Callable[[], None]] = []
        self._lock = threading.RLock()

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._cancelled

    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """
        Request cancellation.

        Only the first call has an effect. Callback errors are logged and
        do not stop the remaining callbacks.
        """
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            callbacks = list(self._callbacks)

        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.debug(f"Cancellation callback failed: {e}")

    def on_cancel(self, callback: Callable[[], None]) -> None:
        """Register a zero-argument callback run when the token is cancelled."""
        with self._lock:
            self._callbacks.append(callback)

    def throw_if_cancelled(self) -> None:
        """
        Raise at a checkpoint if cancellation was requested.

        Raises:
            CancellationRequested: If the token is set
        """
        if self._cancelled:
            raise CancellationRequested()

    def reset(self) -> None:
        """Clear the flag and all callbacks (test isolation only)."""
        with self._lock:
            self._cancelled = False
            self._callbacks.clear()


def install_signal_handlers(token: CancellationToken) -> None:
    """
    Route SIGINT and SIGTERM to ``token.cancel()``.

    Must be called from the main thread. A second Ctrl+C while the scan is
    draining its current batch raises KeyboardInterrupt as usual.

    Args:
        token: Token to cancel on signal
    """
    def handler(signum, frame):
        if token.cancelled and signum == signal.SIGINT:
            raise KeyboardInterrupt
        logger.debug(f"Received signal {signum}, cancelling")
        token.cancel()

    signal.signal(signal.SIGINT, handler)
    signal.signal(signal.SIGTERM, handler)
