"""Submission step results and progress events."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SubmissionResult(BaseModel):
    """Outcome of one submission step (initial submit or a status check)."""

    status_code: Optional[int] = None
    is_done: bool = False
    final_url: Optional[str] = None
    timestamp: Optional[datetime] = None

    @property
    def succeeded(self) -> bool:
        return self.is_done and self.final_url is not None


class SubmissionEvent(BaseModel):
    """Sent before an archival service is asked to capture a URL."""

    original_url: str
    submitter_name: str
