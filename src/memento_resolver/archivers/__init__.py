"""Depot client and archival submission services."""

from .base import ArchiveSubmission, SubmissionFactory
from .memento_depot import MementoDepot
from .archive_today import ArchiveTodaySubmission
from .internet_archive import InternetArchiveSubmission

# Priority order: first success wins.
DEFAULT_SUBMITTERS: tuple[SubmissionFactory, ...] = (
    ArchiveTodaySubmission,
    InternetArchiveSubmission,
)

__all__ = [
    "ArchiveSubmission",
    "SubmissionFactory",
    "MementoDepot",
    "ArchiveTodaySubmission",
    "InternetArchiveSubmission",
    "DEFAULT_SUBMITTERS",
]
