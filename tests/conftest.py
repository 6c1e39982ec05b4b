"""Pytest fixtures for all test modules."""
from typing import Callable

import httpx
import pytest

from parallelclient import ParallelClient

TEST_API_KEY = "test-api-key"
TEST_BASE_URL = "https://api.parallel.test/v1beta"

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingHandler:
    """MockTransport handler that records requests and replays queued responses.

    The last queued response is repeated once the queue runs dry.
    """

    def __init__(self, *responses: httpx.Response):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        template = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        # A fresh Response per call, templates may be replayed
        return httpx.Response(template.status_code, content=template.content, headers=template.headers)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real credentials out of the tests."""
    monkeypatch.delenv("PARALLEL_API_KEY", raising=False)
    monkeypatch.delenv("PARALLEL_BASE_URL", raising=False)


@pytest.fixture
def make_client() -> Callable[[Handler], ParallelClient]:
    """
    Build a client whose HTTP calls go to ``handler``.

    Returns:
        Callable taking a MockTransport handler and returning a ParallelClient
    """

    def _make(handler: Handler, api_key: str | None = TEST_API_KEY) -> ParallelClient:
        return ParallelClient(
            api_key=api_key,
            base_url=TEST_BASE_URL,
            transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture
def task_payload():
    """Factory for GET /tasks/runs/{run_id} bodies."""

    def _payload(status: str, run_id: str = "test-run-id", **extra) -> dict:
        return {"run_id": run_id, "status": status, **extra}

    return _payload


@pytest.fixture
def recorder() -> type[RecordingHandler]:
    """The RecordingHandler class, for building MockTransport handlers."""
    return RecordingHandler
