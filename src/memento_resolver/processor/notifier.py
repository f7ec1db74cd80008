"""Progress notifier - deliver submission events without blocking the caller."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from ..models.submission import SubmissionEvent

logger = logging.getLogger(__name__)

SubmissionCallback = Callable[[SubmissionEvent], None]


class ProgressNotifier:
    """
    Runs the callback on a single background worker, so events arrive in the
    order they were sent. A failing callback is logged and otherwise ignored.
    """

    def __init__(self, callback: Optional[SubmissionCallback] = None):
        self._callback = callback
        self._executor: Optional[ThreadPoolExecutor] = None
        if callback is not None:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="memento-progress"
            )

    def notify(self, event: SubmissionEvent) -> None:
        if self._executor is None:
            return
        future = self._executor.submit(self._callback, event)
        future.add_done_callback(self._log_failure)

    def close(self, wait: bool = False) -> None:
        """Stop accepting events. Already queued events are still delivered."""
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None

    @staticmethod
    def _log_failure(future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.warning("Progress callback failed: %s", error)
