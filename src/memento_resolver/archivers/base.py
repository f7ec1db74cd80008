"""Common contract for archival submission services."""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..models.submission import SubmissionResult
from ..tools.fetch_tool import DEFAULT_TIMEOUT


class ArchiveSubmission(ABC):
    """
    Asks an archival service to capture a new snapshot of original_url.

    submit() performs the initial request; check_status() reports progress
    without re-submitting. Ordinary HTTP failures come back as a done result
    with final_url None. Only protocol anomalies raise.
    """

    name: str = ""
    # Seconds between status checks; None means check again immediately.
    wait_between_status: Optional[float] = None

    def __init__(
        self,
        url: str,
        user_agent: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.original_url = url
        self.user_agent = user_agent
        self.timeout = timeout
        self.last_result: Optional[SubmissionResult] = None

    @abstractmethod
    def submit(self) -> SubmissionResult:
        """Perform the initial archival request."""

    @abstractmethod
    def check_status(self) -> SubmissionResult:
        """Latest result for the submission."""

    def _record(self, result: SubmissionResult) -> SubmissionResult:
        self.last_result = result
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self.original_url!r})"


# (url, user_agent) -> adapter; a class is the usual factory.
SubmissionFactory = Callable[[str, Optional[str]], ArchiveSubmission]
