"""Time travel processor - control plane for resolving one URL to a memento."""

import itertools
import logging
import time
from typing import Callable, Optional, Sequence

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_result,
    stop_never,
    wait_fixed,
    wait_none,
)

from ..archivers import DEFAULT_SUBMITTERS
from ..archivers.base import ArchiveSubmission, SubmissionFactory
from ..errors import (
    UNKNOWN_STATUS,
    DepotMiss,
    DepotUnavailable,
    ProcessorError,
    ProcessorExhausted,
    SubmissionAdapterFailure,
)
from ..models.processor_result import ProcessingState, ProcessorResult, TERMINAL_STATES
from ..models.submission import SubmissionEvent, SubmissionResult
from ..tools.url_tool import normalize_url
from .notifier import ProgressNotifier, SubmissionCallback
from .registry import DepotRegistry

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_URL_PREFIX = "https://archive.today/newest/"
# Classification for a 2xx depot answer without a usable memento URL.
MALFORMED_MISS_STATUS = 404


class TimeTravelProcessor:
    """
    Resolves one URL: depots first, in registry order, then archival
    submission if some depot suggested the URL is simply not archived.
    Create one per request and discard it afterwards.
    """

    def __init__(
        self,
        original_url: str,
        registry: DepotRegistry,
        submitters: Sequence[SubmissionFactory] = DEFAULT_SUBMITTERS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.original_url = original_url
        try:
            self.formatted_url = normalize_url(original_url)
        except ValueError as e:
            raise ProcessorError(f"Invalid URL {original_url}: {e}") from e
        self.registry = registry
        self.submitters = tuple(submitters)
        self.state = ProcessingState.RESOLVING_DEPOTS
        self._sleep = sleep
        logger.debug("Processor for %s, formatted url is %s", original_url, self.formatted_url)

    def process(self, on_submission: Optional[SubmissionCallback] = None) -> ProcessorResult:
        """
        Run the full resolution.
        on_submission receives a SubmissionEvent before each archival service
        is tried; it runs in the background and never delays resolution.
        Raises ProcessorExhausted if nothing could be found or created.
        """
        if self.state in TERMINAL_STATES:
            raise ProcessorError(f"Processor for {self.formatted_url} already finished ({self.state.value})")

        logger.info("Resolving %s", self.formatted_url)
        self.state = ProcessingState.RESOLVING_DEPOTS

        should_submit = False
        last_error: Optional[ProcessorError] = None
        for depot_name in self.registry.depots:
            try:
                return self.use_depot(depot_name)
            except ProcessorError as e:
                logger.error("Depot %s failed for %s: %s", depot_name, self.formatted_url, e.message)
                last_error = e
                if e.suggests_not_archived:
                    should_submit = True

        if not should_submit:
            self.state = ProcessingState.FAILED
            raise ProcessorExhausted(
                f"Unable to find any mementos for {self.formatted_url} and no depot reported it missing",
                last_error.status_code if last_error else UNKNOWN_STATUS,
            )

        self.state = ProcessingState.SUBMITTING
        notifier = ProgressNotifier(on_submission)
        try:
            return self._submit_all(notifier)
        finally:
            notifier.close(wait=False)

    def use_depot(self, depot_name: str) -> ProcessorResult:
        """
        Query a single named depot.
        Raises DepotUnavailable or DepotMiss when it has no memento.
        """
        depot = self.registry.get(depot_name)
        if depot is None:
            raise ProcessorError(f"Could not find depot {depot_name} for {self.formatted_url}")

        try:
            memento = depot.get_latest_memento(self.formatted_url)
        except Exception as e:
            # Transport failures, and URLs the HTTP client refuses to send.
            raise DepotUnavailable(f"Error querying {depot_name} for {self.formatted_url}: {e}") from e

        if not memento.is_miss:
            self.state = ProcessingState.DONE_FOUND
            logger.info("Found %s in %s: %s", self.formatted_url, depot_name, memento.url)
            return ProcessorResult(
                original_url=self.original_url,
                found_url=memento.url,
                depot_used_name=depot_name,
                timestamp=memento.timestamp,
            )

        if memento.status >= 500:
            raise DepotUnavailable(
                f"Got status code {memento.status} from {depot_name} for {self.formatted_url}",
                memento.status,
            )
        if memento.status >= 400:
            raise DepotMiss(
                f"Got status code {memento.status} from {depot_name} for {self.formatted_url}",
                memento.status,
            )
        raise DepotMiss(
            f"No memento URL in {depot_name} response (status {memento.status}) for {self.formatted_url}",
            memento.status if memento.status >= 300 else MALFORMED_MISS_STATUS,
        )

    def get_fallback_url(self) -> str:
        """Manual search link to show when nothing could be resolved."""
        depot = self.registry.fallback_depot
        if depot is not None:
            fallback_url = depot.get_fallback_url(self.formatted_url)
            if fallback_url is not None:
                return fallback_url
        return f"{DEFAULT_FALLBACK_URL_PREFIX}{self.formatted_url}"

    def _submit_all(self, notifier: ProgressNotifier) -> ProcessorResult:
        last_status = UNKNOWN_STATUS
        for factory in self.submitters:
            submitter = factory(self.formatted_url, self.registry.user_agent)
            logger.info("Submitting %s to %s", self.formatted_url, submitter.name)
            notifier.notify(
                SubmissionEvent(original_url=self.formatted_url, submitter_name=submitter.name)
            )
            try:
                result = self._run_submitter(submitter)
                if not result.succeeded:
                    raise SubmissionAdapterFailure(
                        f"{submitter.name} finished without a memento for {self.formatted_url}",
                        result.status_code if result.status_code is not None else UNKNOWN_STATUS,
                    )
            except SubmissionAdapterFailure as e:
                logger.error("Unable to submit to %s: %s (status %d)", submitter.name, e.message, e.status_code)
                last_status = e.status_code
                continue
            except Exception:
                logger.exception("Error while submitting %s to %s", self.formatted_url, submitter.name)
                continue

            self.state = ProcessingState.DONE_SUBMITTED
            logger.info("Submitted %s to %s: %s", self.formatted_url, submitter.name, result.final_url)
            return ProcessorResult(
                original_url=self.formatted_url,
                submitted_url=result.final_url,
                submitted_name=submitter.name,
                timestamp=result.timestamp,
            )

        self.state = ProcessingState.FAILED
        raise ProcessorExhausted(
            f"Unable to submit {self.formatted_url} to any archive", last_status
        )

    def _run_submitter(self, submitter: ArchiveSubmission) -> SubmissionResult:
        """submit(), then check_status() until done, sleeping in between."""
        steps = itertools.chain([submitter.submit], itertools.repeat(submitter.check_status))
        if submitter.wait_between_status is None:
            wait = wait_none()
        else:
            wait = wait_fixed(submitter.wait_between_status)
        retrying = Retrying(
            retry=retry_if_result(lambda result: not result.is_done),
            wait=wait,
            stop=stop_never,
            sleep=self._pause,
            before_sleep=before_sleep_log(logger, logging.DEBUG),
        )
        return retrying(lambda: next(steps)())

    def _pause(self, seconds: float) -> None:
        if seconds > 0:
            self._sleep(seconds)
