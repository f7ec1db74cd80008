"""archive.today submission - a single request answered with a refresh header."""

import logging
from datetime import datetime, timezone
from typing import Optional

from ..models.submission import SubmissionResult
from ..tools.fetch_tool import send_request
from .base import ArchiveSubmission

logger = logging.getLogger(__name__)

SUBMIT_PREFIX = "https://archive.today/submit/"


def parse_refresh_header(value: Optional[str]) -> Optional[str]:
    """Target of a refresh header shaped '<seconds>;url=<target>'."""
    if not value:
        return None
    index = value.lower().find("url=")
    if index == -1:
        return None
    return value[index + len("url=") :].strip() or None


class ArchiveTodaySubmission(ArchiveSubmission):
    """Done as soon as submit() returns; check_status() replays that result."""

    name = "archive.today"
    wait_between_status = None

    def submit(self) -> SubmissionResult:
        full_url = f"{SUBMIT_PREFIX}?url={self.original_url}"
        logger.info("Submitting %s to %s", self.original_url, self.name)
        submitted_at = datetime.now(timezone.utc)
        response = send_request(
            "GET", full_url, user_agent=self.user_agent, timeout=self.timeout
        )
        status = response.status_code
        if status >= 400:
            logger.error("%s submit got status code %d", self.name, status)
            return self._record(SubmissionResult(status_code=status, is_done=True))

        final_url = parse_refresh_header(response.headers.get("refresh"))
        if final_url is None:
            logger.error(
                "%s submit for %s returned no usable refresh header (status %d)",
                self.name,
                self.original_url,
                status,
            )
            return self._record(SubmissionResult(status_code=status, is_done=True))

        logger.info("%s is archiving %s at %s", self.name, self.original_url, final_url)
        return self._record(
            SubmissionResult(
                status_code=status,
                is_done=True,
                final_url=final_url,
                timestamp=submitted_at,
            )
        )

    def check_status(self) -> SubmissionResult:
        if self.last_result is None:
            raise RuntimeError("check_status() called before submit()")
        return self.last_result
