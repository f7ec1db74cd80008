"""Error taxonomy for memento resolution."""

UNKNOWN_STATUS = -1


class ProcessorError(Exception):
    """
    Raised by the processor. status_code is an HTTP-like classification
    (-1 if unknown) used to decide whether to escalate to submission.
    """

    def __init__(self, message: str, status_code: int = UNKNOWN_STATUS):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def suggests_not_archived(self) -> bool:
        """3xx/4xx means the target is plausibly not archived yet."""
        return 300 <= self.status_code < 500


class DepotUnavailable(ProcessorError):
    """Network error or 5xx from a depot."""


class DepotMiss(ProcessorError):
    """Depot answered but has no memento for the URL."""


class SubmissionAdapterFailure(ProcessorError):
    """An archival service finished without producing a memento URL."""


class ProcessorExhausted(ProcessorError):
    """No depot hit and no successful submission."""


class MalformedResponse(Exception):
    """A remote service answered in a shape we do not understand."""
