"""Data models for memento resolution."""

from .depot import DepotConfig
from .memento import Memento
from .submission import SubmissionResult, SubmissionEvent
from .processor_result import ProcessorResult, ProcessingState, TERMINAL_STATES

__all__ = [
    "DepotConfig",
    "Memento",
    "SubmissionResult",
    "SubmissionEvent",
    "ProcessorResult",
    "ProcessingState",
    "TERMINAL_STATES",
]
