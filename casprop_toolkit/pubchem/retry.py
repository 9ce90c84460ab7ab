"""Per-request retry with linear backoff for PubChem.

PubChem signals throttling with 503 (server busy) or 429 (too many requests). Those are retried after
`retry_delay * attempt` seconds; every other outcome is final.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any

import aiohttp

from casprop_toolkit.pubchem.errors import (
    CompoundNotFoundError,
    MaxRetriesExceededError,
    PubChemHTTPError,
)

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = frozenset({429, 503})


class ResponseAction(Enum):
    """What to do with a response status."""

    ACCEPT = "accept"
    RETRY = "retry"
    NOT_FOUND = "not_found"
    FAIL = "fail"


def classify_status(status: int) -> ResponseAction:
    if 200 <= status < 300:
        return ResponseAction.ACCEPT
    if status in RETRYABLE_STATUSES:
        return ResponseAction.RETRY
    if status == 404:
        return ResponseAction.NOT_FOUND
    return ResponseAction.FAIL


async def fetch_json_with_retry(
    session: aiohttp.ClientSession,
    url: str,
    max_attempts: int = 3,
    retry_delay: float = 1.0,
) -> Any:
    """GET ``url`` and return the decoded JSON body.

    Args:
        session: Open aiohttp session.
        url: Fully built request URL.
        max_attempts: Total attempts, including the first one.
        retry_delay: Base delay in seconds; attempt ``n`` (1-based) waits ``n * retry_delay``.

    Returns:
        Parsed JSON payload of the first 2xx response.

    Raises:
        CompoundNotFoundError: on 404, without retrying.
        PubChemHTTPError: on any other non-2xx, non-retryable status.
        MaxRetriesExceededError: when all attempts were throttled.
        aiohttp.ClientError: on transport failures, propagated unchanged.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")
    if retry_delay < 0:
        raise ValueError("retry_delay must be >= 0")

    for attempt in range(1, max_attempts + 1):
        async with session.get(url) as response:
            action = classify_status(response.status)

            if action is ResponseAction.ACCEPT:
                # PubChem sometimes labels JSON bodies as text/plain.
                return await response.json(content_type=None)

            if action is ResponseAction.NOT_FOUND:
                raise CompoundNotFoundError()

            if action is ResponseAction.FAIL:
                raise PubChemHTTPError(response.status, response.reason or "")

            delay = retry_delay * attempt
            logger.warning(
                f"PubChem returned {response.status} (attempt {attempt}/{max_attempts}). "
                f"Backing off {delay}s..."
            )

        await asyncio.sleep(delay)

    raise MaxRetriesExceededError()
