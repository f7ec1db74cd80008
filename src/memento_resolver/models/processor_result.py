"""Processor result and processing states."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, model_validator


class ProcessingState(str, Enum):
    """States of a single resolution. All transitions controlled by the processor."""

    RESOLVING_DEPOTS = "RESOLVING_DEPOTS"
    SUBMITTING = "SUBMITTING"
    DONE_FOUND = "DONE_FOUND"  # terminal
    DONE_SUBMITTED = "DONE_SUBMITTED"  # terminal
    FAILED = "FAILED"  # terminal


# Terminal states - no further transitions
TERMINAL_STATES = {
    ProcessingState.DONE_FOUND,
    ProcessingState.DONE_SUBMITTED,
    ProcessingState.FAILED,
}


class ProcessorResult(BaseModel):
    """
    Either a memento found in a depot or one created by a submission.
    Exactly one of the two field pairs is populated. original_url is the
    URL as given for a depot hit, and the query-stripped URL that was
    submitted for a new capture.
    """

    original_url: str
    found_url: Optional[str] = None
    depot_used_name: Optional[str] = None
    submitted_url: Optional[str] = None
    submitted_name: Optional[str] = None
    timestamp: Optional[datetime] = None

    @model_validator(mode="after")
    def _check_shape(self) -> "ProcessorResult":
        found = self.found_url is not None and self.depot_used_name is not None
        submitted = self.submitted_url is not None and self.submitted_name is not None
        found_partial = self.found_url is not None or self.depot_used_name is not None
        submitted_partial = self.submitted_url is not None or self.submitted_name is not None
        if found and not submitted_partial:
            return self
        if submitted and not found_partial:
            return self
        raise ValueError(
            "result must carry either found_url/depot_used_name or "
            "submitted_url/submitted_name, not both or neither"
        )

    @property
    def was_submitted(self) -> bool:
        return self.submitted_url is not None

    @property
    def memento_url(self) -> str:
        return self.submitted_url if self.was_submitted else self.found_url

    @property
    def source_name(self) -> str:
        return self.submitted_name if self.was_submitted else self.depot_used_name
