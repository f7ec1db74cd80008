"""Internet Archive submission - Save Page Now job, polled until it finishes."""

import json
import logging
import re
from typing import Optional

from ..errors import MalformedResponse
from ..models.submission import SubmissionResult
from ..tools.fetch_tool import send_request
from ..tools.memento_tool import parse_memento_datetime
from .base import ArchiveSubmission

logger = logging.getLogger(__name__)

SUBMIT_PREFIX = "https://web.archive.org/save/"
STATUS_PREFIX = "https://web.archive.org/save/status/"
MEMENTO_TEMPLATE = "https://web.archive.org/web/{timestamp}/{url}"
JOB_REGEX = re.compile(r'Job\("([^ ",\\/:]+)",', re.IGNORECASE)

STATUS_PENDING = "pending"
STATUS_SUCCESS = "success"


def find_job_id(body: str) -> Optional[str]:
    """Job id from the save page body, e.g. Job("spn2-abc123", ...)."""
    match = JOB_REGEX.search(body)
    return match.group(1) if match else None


class InternetArchiveSubmission(ArchiveSubmission):
    """Submit starts a capture job; check_status polls it."""

    name = "Internet Archive"
    wait_between_status = 2.0

    def __init__(self, url: str, user_agent: Optional[str] = None, **kwargs):
        super().__init__(url, user_agent, **kwargs)
        self.job_id: Optional[str] = None

    def submit(self) -> SubmissionResult:
        full_url = f"{SUBMIT_PREFIX}{self.original_url}"
        logger.info("Submitting %s to %s", self.original_url, self.name)
        response = send_request(
            "POST",
            full_url,
            user_agent=self.user_agent,
            data={"url": self.original_url, "capture_all": "on"},
            timeout=self.timeout,
        )
        status = response.status_code
        if status >= 300:
            logger.error("%s submit got status code %d", self.name, status)
            return self._record(SubmissionResult(status_code=status, is_done=True))

        job_id = find_job_id(response.text)
        if job_id is None:
            raise MalformedResponse(
                f"Unable to find job ID in {self.name} response: {response.text[:500]}"
            )

        self.job_id = job_id
        logger.info("%s started job %s for %s", self.name, job_id, self.original_url)
        return self._record(SubmissionResult(status_code=status, is_done=False))

    def check_status(self) -> SubmissionResult:
        if self.last_result is not None and self.last_result.is_done:
            return self.last_result
        if self.job_id is None:
            raise RuntimeError("check_status() called before a job was started")

        full_url = f"{STATUS_PREFIX}{self.job_id}"
        logger.debug("Checking %s job status at %s", self.name, full_url)
        response = send_request(
            "GET", full_url, user_agent=self.user_agent, timeout=self.timeout
        )
        status = response.status_code
        if status >= 300:
            logger.error("%s status check got status code %d", self.name, status)
            return self._record(SubmissionResult(status_code=status, is_done=True))

        try:
            body = response.json()
        except json.JSONDecodeError:
            body = None
        if not isinstance(body, dict):
            logger.error("%s status check returned a non-JSON body: %s", self.name, response.text[:500])
            return self._record(SubmissionResult(status_code=status, is_done=True))

        job_status = body.get("status")
        logger.info("%s job %s is %s", self.name, self.job_id, job_status)
        if job_status == STATUS_PENDING:
            return self._record(SubmissionResult(status_code=status, is_done=False))

        if job_status == STATUS_SUCCESS:
            timestamp = body.get("timestamp")
            if not timestamp:
                logger.error("%s job %s succeeded but has no timestamp: %s", self.name, self.job_id, body)
                return self._record(SubmissionResult(status_code=status, is_done=True))
            return self._record(
                SubmissionResult(
                    status_code=status,
                    is_done=True,
                    final_url=MEMENTO_TEMPLATE.format(timestamp=timestamp, url=self.original_url),
                    timestamp=parse_memento_datetime(str(timestamp)),
                )
            )

        logger.error("%s job %s got unknown status: %s", self.name, self.job_id, body)
        return self._record(SubmissionResult(status_code=status, is_done=True))
