"""Parallel API client implementation."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import httpx

from .codec import (
    decode_chat_response,
    decode_extract_response,
    decode_search_response,
    decode_task_run_response,
    decode_task_run_result,
    encode_chat_request,
    encode_extract_request,
    encode_search_request,
    encode_task_request,
)
from .config import API_CONFIG
from .errors import ErrorKind, ParallelError
from .polling import poll_until_complete
from .result import Err, Ok, Result
from .transport import Transport, api_key_headers, bearer_headers
from .types import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ExtractRequest,
    ExtractResponse,
    SearchRequest,
    SearchResponse,
    TaskRunRequest,
    TaskRunResponse,
    TaskRunResult,
)

logger = logging.getLogger(__name__)


def _get_api_key(api_key: str | None = None) -> str | None:
    """Get API key from parameter or environment."""
    return api_key or os.environ.get(API_CONFIG.API_KEY_ENV)


def _get_base_url(base_url: str | None = None) -> str:
    return base_url or os.environ.get(API_CONFIG.BASE_URL_ENV) or API_CONFIG.BASE_URL


@dataclass(frozen=True)
class ParallelClient:
    """Client for the Parallel search, extract, task and chat API.

    All public methods are coroutines returning Result types instead of raising.

    Usage:
        client = ParallelClient(api_key="your-key")  # or set PARALLEL_API_KEY env var

        result = await client.search(SearchRequest(objective="latest AI news"))
        if result.is_ok():
            for r in result.value.results:
                print(f"{r.title}: {r.url}")

        run = await client.run_task(TaskRunRequest(input="...", processor="base"))
        if run.is_ok():
            final = await client.poll_until_complete(run.value.run_id, 5.0, timeout=600)
    """

    api_key: str | None = None
    base_url: str | None = None
    beta_tag: str = API_CONFIG.BETA_TAG
    timeout: float = API_CONFIG.DEFAULT_TIMEOUT_SECONDS
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)
    _http: Transport = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "api_key", _get_api_key(self.api_key))
        object.__setattr__(self, "base_url", _get_base_url(self.base_url))
        object.__setattr__(
            self,
            "_http",
            Transport(base_url=self.base_url, timeout=self.timeout, transport=self.transport),
        )

    def _check_key(self) -> Result[str, ParallelError]:
        """Verify API key is available."""
        if not self.api_key:
            return Err(
                ParallelError(
                    ErrorKind.CONFIG,
                    f"API key is required. Pass api_key or set {API_CONFIG.API_KEY_ENV} environment variable.",
                )
            )
        return Ok(self.api_key)

    def _headers(self, with_body: bool = True) -> dict[str, str]:
        return api_key_headers(self.api_key or "", self.beta_tag, with_body)

    async def search(self, request: SearchRequest) -> Result[SearchResponse, ParallelError]:
        """Run a web search.

        Args:
            request: Objective and queries to search for.

        Returns:
            Result containing SearchResponse on success or ParallelError on failure.
        """
        key_check = self._check_key()
        if key_check.is_err():
            return key_check

        return await self._http.send(
            "POST",
            API_CONFIG.SEARCH_ENDPOINT,
            self._headers(),
            encode_search_request(request),
            parse=decode_search_response,
        )

    async def extract(self, request: ExtractRequest) -> Result[ExtractResponse, ParallelError]:
        """Extract excerpts or full content from web pages.

        Args:
            request: URLs and extraction options.

        Returns:
            Result containing ExtractResponse on success or ParallelError on failure.
            Per-URL failures are reported in ``ExtractResponse.errors``.
        """
        key_check = self._check_key()
        if key_check.is_err():
            return key_check

        return await self._http.send(
            "POST",
            API_CONFIG.EXTRACT_ENDPOINT,
            self._headers(),
            encode_extract_request(request),
            parse=decode_extract_response,
        )

    async def run_task(self, request: TaskRunRequest) -> Result[TaskRunResponse, ParallelError]:
        """Start a task run. Use the returned ``run_id`` with get_task or poll_until_complete."""
        key_check = self._check_key()
        if key_check.is_err():
            return key_check

        return await self._http.send(
            "POST",
            API_CONFIG.TASK_RUNS_ENDPOINT,
            self._headers(),
            encode_task_request(request),
            parse=decode_task_run_response,
        )

    async def get_task(self, run_id: str) -> Result[TaskRunResult, ParallelError]:
        """Fetch the current status, or final output, of a task run."""
        key_check = self._check_key()
        if key_check.is_err():
            return key_check

        return await self._http.send(
            "GET",
            f"{API_CONFIG.TASK_RUNS_ENDPOINT}/{quote(run_id, safe='')}",
            self._headers(with_body=False),
            parse=decode_task_run_result,
        )

    async def poll_until_complete(
        self,
        run_id: str,
        interval: float = API_CONFIG.DEFAULT_POLL_INTERVAL_SECONDS,
        *,
        timeout: float | None = None,
        cancel: asyncio.Event | None = None,
    ) -> Result[TaskRunResult, ParallelError]:
        """Wait until a task run is "completed" or "failed".

        Args:
            run_id: Run to watch.
            interval: Seconds between status checks.
            timeout: Optional deadline in seconds for the whole wait.
            cancel: Optional event; setting it stops polling.

        Returns:
            Result containing the terminal TaskRunResult, the first failed check's
            error, or a CANCELLED error.
        """
        return await poll_until_complete(
            self.get_task, run_id, interval, timeout=timeout, cancel=cancel
        )

    async def chat(self, request: ChatRequest) -> Result[ChatResponse, ParallelError]:
        """Send a chat completion request.

        The chat endpoint authenticates with a bearer token rather than the
        ``x-api-key`` header used by the other endpoints.
        """
        key_check = self._check_key()
        if key_check.is_err():
            return key_check

        return await self._http.send(
            "POST",
            API_CONFIG.CHAT_ENDPOINT,
            bearer_headers(self.api_key or ""),
            encode_chat_request(request),
            parse=decode_chat_response,
        )


# Convenience functions for one-off usage
async def search(
    objective: str,
    search_queries: list[str] | None = None,
    api_key: str | None = None,
    **kwargs: Any,
) -> Result[SearchResponse, ParallelError]:
    """Run a web search.

    Convenience function that creates a client for single use.
    For multiple requests, prefer creating a ParallelClient instance.
    """
    client = ParallelClient(api_key=api_key)
    request = SearchRequest(objective=objective, search_queries=search_queries or [], **kwargs)
    return await client.search(request)


async def extract(
    urls: list[str],
    objective: str = "",
    api_key: str | None = None,
    **kwargs: Any,
) -> Result[ExtractResponse, ParallelError]:
    """Extract content from web pages.

    Convenience function that creates a client for single use.
    """
    client = ParallelClient(api_key=api_key)
    return await client.extract(ExtractRequest(urls=urls, objective=objective, **kwargs))


async def chat(
    messages: list[dict[str, str]] | list[ChatMessage],
    model: str,
    api_key: str | None = None,
) -> Result[ChatResponse, ParallelError]:
    """Send a chat completion request.

    Args:
        messages: Messages as dicts with 'role' and 'content', or ChatMessage objects.
        model: Model to use.
        api_key: API key (or set PARALLEL_API_KEY env var).
    """
    msg_list = [
        m if isinstance(m, ChatMessage) else ChatMessage(role=m["role"], content=m["content"])
        for m in messages
    ]
    client = ParallelClient(api_key=api_key)
    return await client.chat(ChatRequest(model=model, messages=msg_list))


async def run_task_and_wait(
    input: str,
    processor: str,
    interval: float = API_CONFIG.DEFAULT_POLL_INTERVAL_SECONDS,
    timeout: float | None = None,
    api_key: str | None = None,
) -> Result[TaskRunResult, ParallelError]:
    """Start a task run and wait for it to reach a terminal status."""
    client = ParallelClient(api_key=api_key)
    started = await client.run_task(TaskRunRequest(input=input, processor=processor))
    if started.is_err():
        return started

    run_id = started.value.run_id
    logger.debug("started run %s with processor %s", run_id, processor)
    return await client.poll_until_complete(run_id, interval, timeout=timeout)
