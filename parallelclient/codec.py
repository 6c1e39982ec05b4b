"""JSON encoding of requests and decoding of responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, TypeVar

from .errors import ErrorKind, ParallelError
from .result import Err, Ok, Result
from .types import (
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
    SearchRequest,
    SearchResponse,
    SearchResult,
    TaskRunOutput,
    TaskRunRequest,
    TaskRunResponse,
    TaskRunResult,
)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def encode_search_request(request: SearchRequest) -> dict[str, Any]:
    """Build /search payload."""
    return {
        "objective": request.objective,
        "search_queries": list(request.search_queries),
        "max_results": request.max_results,
        "max_chars_per_result": request.max_chars_per_result,
    }


def encode_extract_request(request: ExtractRequest) -> dict[str, Any]:
    """Build /extract payload."""
    return {
        "urls": list(request.urls),
        "objective": request.objective,
        "excerpts": request.excerpts,
        "full_content": request.full_content,
    }


def encode_task_request(request: TaskRunRequest) -> dict[str, Any]:
    """Build /tasks/runs payload."""
    return {"input": request.input, "processor": request.processor}


def encode_chat_message(message: ChatMessage) -> dict[str, str]:
    return {"role": message.role, "content": message.content}


def encode_chat_request(request: ChatRequest) -> dict[str, Any]:
    """Build /chat/completions payload.

    ``response_format`` is left out entirely when not set.
    """
    payload: dict[str, Any] = {
        "model": request.model,
        "messages": [encode_chat_message(m) for m in request.messages],
        "stream": request.stream,
    }
    if request.response_format is not None:
        fmt = request.response_format
        payload["response_format"] = {
            "type": fmt.type,
            "json_schema": {
                "name": fmt.json_schema.name,
                "schema": fmt.json_schema.schema,
            },
        }
    return payload


# ---------------------------------------------------------------------------
# Decoding helpers
# ---------------------------------------------------------------------------

def _object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"expected JSON object for {what}, got {type(value).__name__}")
    return value


def _list(value: Any, what: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"expected JSON array for {what}, got {type(value).__name__}")
    return value


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _strings(value: Any, what: str) -> list[str]:
    return [_str(v) for v in _list(value, what)]


def _timestamp(value: Any) -> datetime | None:
    """Parse an RFC3339 timestamp. Null and empty strings mean unset."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise TypeError(f"expected RFC3339 timestamp string, got {type(value).__name__}")
    # RFC3339 permits a lowercase "z"
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def decode_search_response(data: Any) -> SearchResponse:
    """Parse /search response."""
    data = _object(data, "search response")
    results = [
        SearchResult(
            url=_str(r.get("url")),
            title=_str(r.get("title")),
            excerpts=_strings(r.get("excerpts"), "excerpts"),
        )
        for r in (_object(item, "search result") for item in _list(data.get("results"), "results"))
    ]
    return SearchResponse(search_id=_str(data.get("search_id")), results=results)


def decode_extract_response(data: Any) -> ExtractResponse:
    """Parse /extract response."""
    data = _object(data, "extract response")
    results = [
        ExtractResult(
            url=_str(r.get("url")),
            title=_str(r.get("title")),
            excerpts=_strings(r.get("excerpts"), "excerpts"),
            full_content=_str(r.get("full_content")),
        )
        for r in (_object(item, "extract result") for item in _list(data.get("results"), "results"))
    ]
    errors = [
        ExtractError(message=_str(_object(e, "extract error").get("message")))
        for e in _list(data.get("errors"), "errors")
    ]
    return ExtractResponse(
        extract_id=_str(data.get("extract_id")),
        results=results,
        errors=errors,
    )


def _decode_basis(data: Any) -> Basis:
    data = _object(data, "basis")
    citations = [
        Citation(
            url=_str(c.get("url")),
            title=_str(c.get("title")),
            excerpts=_strings(c.get("excerpts"), "excerpts"),
        )
        for c in (_object(item, "citation") for item in _list(data.get("citations"), "citations"))
    ]
    return Basis(
        field_name=_str(data.get("field")),
        reasoning=_str(data.get("reasoning")),
        citations=citations,
        confidence=_str(data.get("confidence")),
    )


def decode_task_run_response(data: Any) -> TaskRunResponse:
    """Parse POST /tasks/runs response.

    The run is normally nested under ``output``; a bare run object at the top
    level is accepted as well.
    """
    data = _object(data, "task run response")
    output = data.get("output")
    out = _object(output, "task run output") if output is not None else data
    return TaskRunResponse(
        output=TaskRunOutput(
            run_id=_str(out.get("run_id")),
            status=_str(out.get("status")),
            content=out.get("content"),
            basis=[_decode_basis(b) for b in _list(out.get("basis"), "basis")],
            created_at=_timestamp(out.get("created_at")),
            completed_at=_timestamp(out.get("completed_at")),
            processor=_str(out.get("processor")),
            warnings=out.get("warnings"),
            error=out.get("error"),
            taskgroup_id=out.get("taskgroup_id"),
        )
    )


def decode_task_run_result(data: Any) -> TaskRunResult:
    """Parse GET /tasks/runs/{run_id} response."""
    data = _object(data, "task run")
    return TaskRunResult(
        run_id=_str(data.get("run_id")),
        status=_str(data.get("status")),
        is_active=bool(data.get("is_active", False)),
        processor=_str(data.get("processor")),
        output=data.get("output"),
        error=data.get("error"),
        warnings=data.get("warnings"),
        metadata=data.get("metadata"),
        taskgroup_id=_str(data.get("taskgroup_id")),
        created_at=_timestamp(data.get("created_at")),
        modified_at=_timestamp(data.get("modified_at")),
    )


def decode_chat_message(data: Any) -> ChatMessage:
    data = _object(data, "chat message")
    return ChatMessage(role=_str(data.get("role")), content=_str(data.get("content")))


def decode_chat_response(data: Any) -> ChatResponse:
    """Parse chat completion response."""
    data = _object(data, "chat response")
    choices = [
        ChatChoice(
            index=int(c.get("index") or 0),
            message=decode_chat_message(c.get("message") or {}),
            finish_reason=_str(c.get("finish_reason")),
        )
        for c in (_object(item, "chat choice") for item in _list(data.get("choices"), "choices"))
    ]
    usage = data.get("usage")
    return ChatResponse(
        id=_str(data.get("id")),
        object=_str(data.get("object")),
        model=_str(data.get("model")),
        created=int(data.get("created") or 0),
        choices=choices,
        usage=_object(usage, "usage") if usage is not None else None,
    )


def decode(
    data: Any,
    parser: Callable[[Any], T],
    *,
    status_code: int | None = None,
    body: str | None = None,
) -> Result[T, ParallelError]:
    """Run ``parser`` over a decoded JSON body, reporting shape errors as DECODE.

    ``status_code`` and ``body`` describe the response the JSON came from and are
    copied onto the error.
    """
    try:
        return Ok(parser(data))
    except (TypeError, ValueError) as e:
        return Err(ParallelError(ErrorKind.DECODE, f"decode response: {e}", status_code=status_code, body=body))
