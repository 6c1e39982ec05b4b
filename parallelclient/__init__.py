"""
parallelclient - Python client library for the Parallel API

Usage:
    from parallelclient import ParallelClient, SearchRequest, TaskRunRequest

    client = ParallelClient(api_key="your-key")  # or set PARALLEL_API_KEY env var

    # Web search
    result = await client.search(SearchRequest(objective="latest AI news"))
    if result.is_ok():
        for r in result.value.results:
            print(f"{r.title}: {r.url}")

    # Start a task and wait for it
    run = await client.run_task(TaskRunRequest(input="...", processor="base"))
    if run.is_ok():
        final = await client.poll_until_complete(run.value.run_id, 5.0, timeout=600)
        if final.is_ok() and final.value.is_completed:
            print(final.value.output)
"""

from .client import ParallelClient, chat, extract, run_task_and_wait, search
from .errors import ErrorKind, ParallelClientError, ParallelError
from .polling import poll_until_complete
from .types import (
    TERMINAL_STATUSES,
    Basis,
    ChatChoice,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    Citation,
    ExtractError,
    ExtractRequest,
    ExtractResponse,
    ExtractResult,
    JSONSchemaSpec,
    ResponseFormat,
    SearchRequest,
    SearchResponse,
    SearchResult,
    TaskRunOutput,
    TaskRunRequest,
    TaskRunResponse,
    TaskRunResult,
    TaskStatus,
    is_terminal_status,
)
from .result import Result, Ok, Err

__all__ = [
    "ParallelClient",
    "search",
    "extract",
    "chat",
    "run_task_and_wait",
    "poll_until_complete",
    "ErrorKind",
    "ParallelError",
    "ParallelClientError",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
    "ExtractRequest",
    "ExtractResponse",
    "ExtractResult",
    "ExtractError",
    "TaskRunRequest",
    "TaskRunResponse",
    "TaskRunOutput",
    "TaskRunResult",
    "TaskStatus",
    "TERMINAL_STATUSES",
    "is_terminal_status",
    "Basis",
    "Citation",
    "ChatRequest",
    "ChatResponse",
    "ChatMessage",
    "ChatChoice",
    "ResponseFormat",
    "JSONSchemaSpec",
    "Result",
    "Ok",
    "Err",
]

__version__ = "1.0.0"
