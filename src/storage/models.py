"""Result types returned by storage operations."""

from dataclasses import dataclass
from typing import Optional

import httpx


@dataclass(frozen=True)
class OperationResponse:
    """
    Thin wrapper over the raw HTTP response of an operation that returns no
    payload. The body has already been closed when this is handed out.
    """

    response: httpx.Response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.response.headers

    @property
    def request_id(self) -> Optional[str]:
        return self.response.headers.get("x-ms-request-id")

    @property
    def etag(self) -> Optional[str]:
        return self.response.headers.get("etag")

    @property
    def last_modified(self) -> Optional[str]:
        return self.response.headers.get("last-modified")

    @property
    def version(self) -> Optional[str]:
        return self.response.headers.get("x-ms-version")
