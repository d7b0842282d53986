"""
Shared pytest fixtures for the File Shares client test suite.

The storage service is simulated with ``httpx.MockTransport``: each test
supplies a handler that receives the outgoing ``httpx.Request`` and returns
the response (or raises a transport error). Every request that reaches the
transport is recorded so tests can assert on what went over the wire, or
that nothing did.
"""

from typing import Callable, List

import httpx
import pytest

from src.storage.shares import SharesClient
from src.storage.transport import RetryPolicy


# ============================================================================
# Constants
# ============================================================================

ACCOUNT_NAME = "mystorage"
SHARE_NAME = "myshare"
API_VERSION = "2018-11-09"
BASE_URI = "core.windows.net"


# ============================================================================
# Fake storage service
# ============================================================================

class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it was asked to handle."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def ok_handler(request: httpx.Request) -> httpx.Response:
    """Simulate a successful Set Share Metadata call."""
    return httpx.Response(
        200,
        headers={
            "ETag": '"0x8D6A2F4E6C1B2C3"',
            "Last-Modified": "Mon, 04 Mar 2019 10:00:00 GMT",
            "x-ms-request-id": "req-0001",
            "x-ms-version": API_VERSION,
        },
    )


@pytest.fixture
def no_wait_policy() -> RetryPolicy:
    """Retry policy with zero backoff so retry tests run instantly."""
    return RetryPolicy(attempts=3, delay=0, max_delay=0)


@pytest.fixture
def make_client(no_wait_policy):
    """Factory fixture: ``make_client(handler)`` returns ``(client, transport)``."""

    def _make(handler=ok_handler, policy: RetryPolicy = None, **kwargs):
        transport = RecordingTransport(handler)
        http_client = httpx.AsyncClient(transport=transport)
        options = {"base_uri": BASE_URI, "api_version": API_VERSION, **kwargs}
        client = SharesClient(
            http_client=http_client,
            retry_policy=policy or no_wait_policy,
            **options,
        )
        return client, transport

    return _make
