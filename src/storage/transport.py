"""
Retrying HTTP sender for storage requests.

Wraps an ``httpx.AsyncClient`` and re-sends a prepared request when:
- the transport fails (connection reset, DNS, TLS, timeouts)
- the service answers with a transient status (408, 429, 5xx gateway errors)

Backoff is exponential (``delay * 2**retry``) capped at ``max_delay``; a
numeric ``Retry-After`` header takes precedence. Sleeps use
``asyncio.sleep`` so cancelling the calling task aborts the wait as well as
the in-flight request.

Responses are sent with ``stream=True``: the body is left unread for the
caller's responder, which is responsible for closing it.
"""

from __future__ import annotations

import asyncio
from typing import FrozenSet, Optional

import httpx
import structlog
from pydantic import BaseModel, Field

from src.core.config import settings

logger = structlog.get_logger(__name__)

DEFAULT_RETRY_STATUSES = frozenset({408, 429, 500, 502, 503, 504})


class RetryPolicy(BaseModel):
    """How many times and how patiently a request is re-sent."""

    attempts: int = Field(default=3, ge=1, description="Total attempts including the first")
    delay: float = Field(default=1.0, ge=0, description="Base backoff in seconds")
    max_delay: float = Field(default=30.0, ge=0, description="Cap on a single backoff sleep")
    retry_statuses: FrozenSet[int] = Field(default=DEFAULT_RETRY_STATUSES)

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            attempts=settings.STORAGE_RETRY_ATTEMPTS,
            delay=settings.STORAGE_RETRY_DELAY,
            max_delay=settings.STORAGE_RETRY_MAX_DELAY,
        )

    def backoff(self, retry: int, response: Optional[httpx.Response] = None) -> float:
        """Seconds to wait before retry number ``retry`` (0-based)."""
        if response is not None:
            retry_after = response.headers.get("retry-after")
            if retry_after is not None:
                try:
                    return min(max(float(retry_after), 0.0), self.max_delay)
                except ValueError:
                    pass  # HTTP-date form, fall back to exponential backoff
        return min(self.delay * (2 ** retry), self.max_delay)


class RetryingSender:
    """Sends prepared requests through an ``httpx.AsyncClient`` with retries."""

    def __init__(self, client: httpx.AsyncClient, policy: Optional[RetryPolicy] = None):
        self.client = client
        self.policy = policy or RetryPolicy.from_settings()

    async def send(self, request: httpx.Request) -> httpx.Response:
        """
        Send ``request`` until it succeeds or the policy is exhausted.

        Returns the last response, which may carry a retryable status if
        every attempt was answered that way. Re-raises the last
        ``httpx.TransportError`` if the final attempt failed in transport.
        """
        attempts = self.policy.attempts
        for attempt in range(1, attempts + 1):
            try:
                response = await self.client.send(request, stream=True)
            except httpx.TransportError as e:
                if attempt >= attempts:
                    logger.warning(
                        "storage_send_failed",
                        method=request.method,
                        url=str(request.url),
                        attempts=attempt,
                        error=str(e),
                    )
                    raise
                wait = self.policy.backoff(attempt - 1)
                logger.debug(
                    "storage_send_retry",
                    method=request.method,
                    url=str(request.url),
                    attempt=attempt,
                    error=str(e),
                    wait_seconds=wait,
                )
                await asyncio.sleep(wait)
                continue

            if response.status_code not in self.policy.retry_statuses or attempt >= attempts:
                return response

            wait = self.policy.backoff(attempt - 1, response)
            logger.debug(
                "storage_send_retry",
                method=request.method,
                url=str(request.url),
                attempt=attempt,
                status_code=response.status_code,
                wait_seconds=wait,
            )
            await response.aclose()
            await asyncio.sleep(wait)

        # attempts >= 1 always returns or raises inside the loop
        raise RuntimeError("retry loop exited without a response")
