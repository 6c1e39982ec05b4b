"""Error values returned by the Parallel client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Category of a failed call."""

    CONFIG = "config"  # No API key available
    TRANSPORT = "transport"  # Connection, DNS, timeout before any response
    API = "api"  # Non-2xx response
    DECODE = "decode"  # 2xx body that does not match the expected shape
    CANCELLED = "cancelled"  # Polling deadline or cancel event fired


@dataclass(frozen=True, slots=True)
class ParallelError:
    """API error details.

    ``message`` is the human readable description. For ``ErrorKind.API`` it is
    always ``"API error: <status> — <body>"`` and ``body`` holds the raw response
    text. ``detail`` is the body parsed as JSON when that was possible.
    """

    kind: ErrorKind
    message: str
    status_code: int | None = None
    body: str | None = None
    detail: Any | None = None

    def __str__(self) -> str:
        return self.message


class ParallelClientError(Exception):
    """Raised when an ``Err`` result is unwrapped."""

    def __init__(self, error: ParallelError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


def api_error(status: str, status_code: int, body: str, detail: Any | None = None) -> ParallelError:
    """Build the error for a non-2xx response."""
    return ParallelError(
        ErrorKind.API,
        f"API error: {status} — {body}",
        status_code=status_code,
        body=body,
        detail=detail,
    )


def cancelled_error(message: str) -> ParallelError:
    return ParallelError(ErrorKind.CANCELLED, message)
