"""Type definitions for the Parallel API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class TaskStatus(str, Enum):
    """Task run status values observed from the API.

    The set is open: the server may report values not listed here, and any
    value other than ``COMPLETED`` or ``FAILED`` means the run is still pending.
    """
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATUSES = frozenset({TaskStatus.COMPLETED.value, TaskStatus.FAILED.value})


def is_terminal_status(status: str) -> bool:
    """Whether no further progress happens after ``status``."""
    return status in TERMINAL_STATUSES


# Search
@dataclass(frozen=True, slots=True)
class SearchRequest:
    """Request body for /search."""
    objective: str = ""
    search_queries: list[str] = field(default_factory=list)
    max_results: int = 0
    max_chars_per_result: int = 0


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Individual search result."""
    url: str
    title: str
    excerpts: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class SearchResponse:
    """Response from /search."""
    search_id: str
    results: list[SearchResult] = field(default_factory=list)


# Extract
@dataclass(frozen=True, slots=True)
class ExtractRequest:
    """Request body for /extract."""
    urls: list[str] = field(default_factory=list)
    objective: str = ""
    excerpts: bool = False
    full_content: bool = False


@dataclass(frozen=True, slots=True)
class ExtractResult:
    """A single extracted web page."""
    url: str
    title: str
    excerpts: list[str] = field(default_factory=list)
    full_content: str = ""


@dataclass(frozen=True, slots=True)
class ExtractError:
    """Per-URL extraction failure."""
    message: str


@dataclass(frozen=True, slots=True)
class ExtractResponse:
    """Response from /extract."""
    extract_id: str
    results: list[ExtractResult] = field(default_factory=list)
    errors: list[ExtractError] = field(default_factory=list)


# Tasks
@dataclass(frozen=True, slots=True)
class TaskRunRequest:
    """Request body for /tasks/runs."""
    input: str
    processor: str = ""


@dataclass(frozen=True, slots=True)
class Citation:
    """Source backing one output field."""
    url: str
    title: str = ""
    excerpts: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Basis:
    """Reasoning and citations for one output field (``field`` on the wire)."""
    field_name: str
    reasoning: str = ""
    citations: list[Citation] = field(default_factory=list)
    confidence: str = ""


@dataclass(frozen=True, slots=True)
class TaskRunOutput:
    """Structured output block returned when a run is created."""
    run_id: str
    status: str = ""
    content: Any | None = None
    basis: list[Basis] = field(default_factory=list)
    created_at: datetime | None = None
    completed_at: datetime | None = None
    processor: str = ""
    warnings: Any | None = None
    error: Any | None = None
    taskgroup_id: Any | None = None


@dataclass(frozen=True, slots=True)
class TaskRunResponse:
    """Response from POST /tasks/runs."""
    output: TaskRunOutput

    @property
    def run_id(self) -> str:
        return self.output.run_id

    @property
    def status(self) -> str:
        return self.output.status


@dataclass(frozen=True, slots=True)
class TaskRunResult:
    """Task status or completed output, as returned by GET /tasks/runs/{run_id}.

    ``output``, ``error``, ``warnings`` and ``metadata`` are raw JSON values whose
    schema depends on the processor that ran the task.
    """
    run_id: str
    status: str
    is_active: bool = False
    processor: str = ""
    output: Any | None = None
    error: Any | None = None
    warnings: Any | None = None
    metadata: Any | None = None
    taskgroup_id: str = ""
    created_at: datetime | None = None
    modified_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return is_terminal_status(self.status)

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED.value

    @property
    def is_failed(self) -> bool:
        return self.status == TaskStatus.FAILED.value


# Chat
@dataclass(frozen=True, slots=True)
class ChatMessage:
    """Chat message."""
    role: str
    content: str


@dataclass(frozen=True, slots=True)
class JSONSchemaSpec:
    """Schema metadata and body for structured chat output."""
    name: str
    schema: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ResponseFormat:
    """Schema-based JSON output format."""
    json_schema: JSONSchemaSpec
    type: str = "json_schema"


@dataclass(frozen=True, slots=True)
class ChatRequest:
    """Chat completion request payload."""
    model: str
    messages: list[ChatMessage] = field(default_factory=list)
    stream: bool = False
    response_format: ResponseFormat | None = None


@dataclass(frozen=True, slots=True)
class ChatChoice:
    """Chat completion choice."""
    index: int
    message: ChatMessage
    finish_reason: str = ""


@dataclass(frozen=True, slots=True)
class ChatResponse:
    """Chat completion response."""
    id: str
    object: str = ""
    model: str = ""
    created: int = 0
    choices: list[ChatChoice] = field(default_factory=list)
    usage: dict[str, Any] | None = None

    @property
    def content(self) -> str:
        """Get the content of the first choice."""
        if self.choices:
            return self.choices[0].message.content
        return ""
