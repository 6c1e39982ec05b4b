"""Wait-for-completion loop over task run status checks."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from .errors import ParallelError, cancelled_error
from .result import Err, Result
from .types import TaskRunResult

logger = logging.getLogger(__name__)

FetchTask = Callable[[str], Awaitable[Result[TaskRunResult, ParallelError]]]


async def _wait_tick(interval: float, cancel: asyncio.Event | None) -> bool:
    """Sleep one interval. Returns True if ``cancel`` was set instead."""
    if cancel is None:
        await asyncio.sleep(interval)
        return False
    if cancel.is_set():
        return True

    waiter = asyncio.ensure_future(cancel.wait())
    try:
        done, _ = await asyncio.wait({waiter}, timeout=interval)
    finally:
        waiter.cancel()
    return bool(done)


async def _check_once(
    fetch: FetchTask, run_id: str, cancel: asyncio.Event | None
) -> Result[TaskRunResult, ParallelError] | None:
    """Call ``fetch`` once. Returns None if ``cancel`` is set before the call finishes."""
    if cancel is None:
        return await fetch(run_id)

    check = asyncio.ensure_future(fetch(run_id))
    waiter = asyncio.ensure_future(cancel.wait())
    try:
        done, _ = await asyncio.wait({check, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not check.done():
            check.cancel()
            await asyncio.wait({check})

    if waiter in done:
        return None
    return check.result()


async def poll_until_complete(
    fetch: FetchTask,
    run_id: str,
    interval: float,
    *,
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> Result[TaskRunResult, ParallelError]:
    """Check a task run every ``interval`` seconds until it reaches a terminal status.

    Each tick waits first and then calls ``fetch(run_id)`` once. There is no cap
    on the number of checks; pass ``timeout`` or ``cancel`` to bound the wait.

    Args:
        fetch: Coroutine function returning the current run, e.g. ``client.get_task``.
        run_id: Server-assigned run identifier.
        interval: Seconds between checks. Must be positive.
        timeout: Deadline in seconds for the whole wait, including in-flight checks.
        cancel: Event the caller sets to stop polling.

    Returns:
        Ok with the run once its status is "completed" or "failed" (a failed run
        is still a successful return; inspect ``status`` and ``error``).
        Err with the first failed check's error, or a CANCELLED error when the
        deadline passes or ``cancel`` is set first.
    """
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval}")

    attempts = 0
    deadline = asyncio.timeout(timeout)
    try:
        async with deadline:
            while True:
                if await _wait_tick(interval, cancel):
                    return Err(cancelled_error(f"polling run {run_id} cancelled after {attempts} checks"))

                attempts += 1
                result = await _check_once(fetch, run_id, cancel)
                if result is None:
                    return Err(cancelled_error(f"polling run {run_id} cancelled during check {attempts}"))
                if result.is_err():
                    return result

                task = result.value
                logger.debug("run %s check %d: status=%s", run_id, attempts, task.status)
                if task.is_terminal:
                    return result
    except TimeoutError:
        if not deadline.expired():
            raise
        return Err(
            cancelled_error(
                f"polling run {run_id} cancelled: deadline of {timeout}s exceeded after {attempts} checks"
            )
        )
