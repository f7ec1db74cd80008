"""Shared test fixtures for the memento resolver test suite."""

import json
from typing import Callable, Optional

import httpx
import pytest
from unittest.mock import MagicMock

from memento_resolver.archivers.base import ArchiveSubmission
from memento_resolver.models.depot import DepotConfig
from memento_resolver.models.submission import SubmissionResult
from memento_resolver.processor.registry import DepotRegistry


def make_mock_response(
    status_code: int = 200,
    headers: Optional[dict] = None,
    text: str = "",
    json_data: dict | list | None = None,
) -> MagicMock:
    """Build a mock httpx.Response with real, case-insensitive headers."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.headers = httpx.Headers(headers or {})
    resp.text = text
    if json_data is not None:
        resp.json.return_value = json_data
    else:
        resp.json.side_effect = json.JSONDecodeError("Expecting value", text, 0)
    return resp


class ScriptedSubmission(ArchiveSubmission):
    """Submission double that replays a fixed sequence of results."""

    def __init__(self, url, user_agent=None, *, name, results, wait=None, error=None, calls=None):
        super().__init__(url, user_agent)
        self.name = name
        self.wait_between_status = wait
        self._results = list(results)
        self._error = error
        self.calls = calls if calls is not None else []

    def _next(self, step: str) -> SubmissionResult:
        self.calls.append((self.name, step))
        if self._error is not None:
            raise self._error
        result = self._results.pop(0) if len(self._results) > 1 else self._results[0]
        return self._record(result)

    def submit(self) -> SubmissionResult:
        return self._next("submit")

    def check_status(self) -> SubmissionResult:
        return self._next("check_status")


def scripted(name: str, *results: SubmissionResult, wait=None, error=None, calls=None) -> Callable:
    """Factory with the (url, user_agent) signature the processor expects."""

    def factory(url, user_agent=None):
        return ScriptedSubmission(
            url, user_agent, name=name, results=results, wait=wait, error=error, calls=calls
        )

    return factory


@pytest.fixture
def mock_response() -> Callable[..., MagicMock]:
    return make_mock_response


@pytest.fixture
def depot_configs() -> list[DepotConfig]:
    return [
        DepotConfig(name="A", time_gate_prefix="https://a.example/tg/", fallback_prefix=None),
        DepotConfig(
            name="B",
            time_gate_prefix="https://b.example/timegate/",
            fallback_prefix="https://b.example/search/",
        ),
    ]


@pytest.fixture
def registry(depot_configs) -> DepotRegistry:
    return DepotRegistry(depot_configs, user_agent="memento-test/1.0")
