"""
Polling wait for text to appear on a page.

The waiter only proves that the text is present; building the follow-up
snapshot is left to the caller.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Awaitable, Callable, Union

from camoufox_snapshot.errors import WaitTimeoutError
from camoufox_snapshot.logging import get_logger
from camoufox_snapshot.models import WaitResult, WaitSpec

logger = get_logger(__name__)

TextSampler = Callable[[], Union[Awaitable[str | None], str, None]]

DEFAULT_POLL_INTERVAL_MS = 100


async def _sample(sampler: TextSampler) -> str:
    content = sampler()
    if inspect.isawaitable(content):
        content = await content
    return content or ""


async def wait_for_text(
    text: str,
    timeout_ms: int,
    sampler: TextSampler,
    *,
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
) -> WaitResult:
    """
    Poll ``sampler`` until its output contains ``text``.

    Matching is an exact, case-sensitive substring test. The deadline starts
    at the first sample. Between samples the coroutine sleeps for the poll
    interval, shortened so that the last sample happens on the deadline.

    Args:
        text: Text that must appear in the sampled page content
        timeout_ms: Maximum time to wait in milliseconds
        sampler: Zero-argument callable (sync or async) returning page text
        poll_interval_ms: Delay between samples in milliseconds

    Returns:
        WaitResult with elapsed time and number of samples taken

    Raises:
        WaitTimeoutError: The text was not seen before the deadline
        asyncio.CancelledError: The wait was cancelled by the caller
    """
    if timeout_ms < 0:
        raise ValueError(f"timeout_ms must be non-negative, got {timeout_ms}")

    loop = asyncio.get_running_loop()
    timeout_s = timeout_ms / 1000
    interval_s = max(poll_interval_ms, 1) / 1000
    attempts = 0
    started = loop.time()

    try:
        while True:
            attempts += 1
            content = await _sample(sampler)
            elapsed_s = loop.time() - started

            if text in content:
                result = WaitResult(
                    text=text, elapsed_ms=round(elapsed_s * 1000, 2), attempts=attempts
                )
                logger.debug("wait_for_text_found", **result.to_dict())
                return result

            remaining_s = timeout_s - elapsed_s
            if remaining_s <= 0:
                logger.info(
                    "wait_for_text_timeout",
                    text=text,
                    timeout_ms=timeout_ms,
                    attempts=attempts,
                )
                raise WaitTimeoutError(text, elapsed_s * 1000, timeout_ms)

            await asyncio.sleep(min(interval_s, remaining_s))

    except asyncio.CancelledError:
        logger.info("wait_for_text_cancelled", text=text, attempts=attempts)
        raise


async def wait_for(
    spec: WaitSpec,
    sampler: TextSampler,
    *,
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
) -> WaitResult:
    """Run ``wait_for_text`` for a WaitSpec."""
    return await wait_for_text(
        spec.text, spec.timeout_ms, sampler, poll_interval_ms=poll_interval_ms
    )
