"""
Thread pool dispatcher - Implements TaskDispatcher protocol.

Runs fire-and-forget work (confirmation emails) on a ThreadPoolExecutor.
Task failures are logged here and never reach the submitter.
"""

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

logger = logging.getLogger(__name__)


class ThreadPoolDispatcher:
    """Implements TaskDispatcher protocol via concurrent.futures."""

    def __init__(self, max_workers: int = 4) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="notifier"
        )

    def submit(self, fn: Callable[..., Any], *args: Any) -> None:
        future = self._executor.submit(fn, *args)
        future.add_done_callback(self._log_failure)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting tasks; optionally wait for queued ones."""
        self._executor.shutdown(wait=wait)

    @staticmethod
    def _log_failure(future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            logger.error("Background task failed: %s", exc, exc_info=exc)
