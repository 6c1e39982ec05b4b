"""HTTP transport shared by every Parallel operation."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Literal, TypeVar

import httpx

from .codec import decode
from .config import API_CONFIG
from .errors import ErrorKind, ParallelError, api_error
from .result import Err, Ok, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")


def api_key_headers(api_key: str, beta_tag: str, with_body: bool = True) -> dict[str, str]:
    """Headers for the search, extract and task endpoints."""
    headers = {
        API_CONFIG.API_KEY_HEADER: api_key,
        API_CONFIG.BETA_HEADER: beta_tag,
    }
    if with_body:
        headers["Content-Type"] = "application/json"
    return headers


def bearer_headers(api_key: str) -> dict[str, str]:
    """Headers for the chat completions endpoint."""
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


def _best_effort_json(text: str) -> Any | None:
    try:
        return json.loads(text)
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class Transport:
    """Sends one request and maps the outcome to a Result.

    A new ``httpx.AsyncClient`` is opened for every call, so a single Transport
    can be shared by concurrent callers.
    """

    base_url: str
    timeout: float = API_CONFIG.DEFAULT_TIMEOUT_SECONDS
    transport: httpx.AsyncBaseTransport | None = None

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def send(
        self,
        method: Literal["GET", "POST"],
        path: str,
        headers: dict[str, str],
        payload: dict[str, Any] | None = None,
        parse: Callable[[Any], T] | None = None,
    ) -> Result[Any, ParallelError]:
        """Perform the request and return the decoded JSON body.

        Args:
            parse: Optional decoder applied to the JSON value. Its shape errors
                are reported as DECODE with the response status and body.

        Returns:
            Ok with the JSON value (or the parsed value) on 2xx, otherwise Err
            with a TRANSPORT, API or DECODE error.
        """
        url = self.url(path)
        logger.debug("%s %s", method, url)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(method, url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            return Err(ParallelError(ErrorKind.TRANSPORT, f"send request: timed out ({e})"))
        except httpx.RequestError as e:
            return Err(ParallelError(ErrorKind.TRANSPORT, f"send request: {e}"))

        logger.debug("%s %s -> %s", method, url, response.status_code)

        if not response.is_success:
            body = response.text
            status = f"{response.status_code} {response.reason_phrase}"
            return Err(api_error(status, response.status_code, body, _best_effort_json(body)))

        try:
            data = response.json()
        except ValueError as e:
            return Err(
                ParallelError(
                    ErrorKind.DECODE,
                    f"decode response: {e}",
                    status_code=response.status_code,
                    body=response.text,
                )
            )

        if parse is None:
            return Ok(data)
        return decode(data, parse, status_code=response.status_code, body=response.text)
