"""
Shares Client — File Storage share operations.

Each operation is split into three steps that can be called on their own:

    <op>_preparer   build the ``httpx.Request``
    <op>_sender     send it through the retrying sender
    <op>_responder  check the status code and close the body

The public ``<op>`` method validates input, runs the three steps and wraps
any failure in the matching ``StorageError`` subclass.

Usage::

    async with SharesClient() as client:
        result = await client.set_metadata("mystorage", "myshare", {"project": "alpha"})
        print(result.status_code, result.request_id)
"""

from __future__ import annotations

from typing import Mapping, Optional
from urllib.parse import quote

import httpx
import structlog

from src.core.config import settings
from src.storage import metadata as metadata_codec
from src.storage.endpoints import get_file_endpoint
from src.storage.errors import (
    RequestPreparationError,
    ResponseError,
    SendError,
    ValidationError,
)
from src.storage.models import OperationResponse
from src.storage.transport import RetryingSender, RetryPolicy

logger = structlog.get_logger(__name__)

RESOURCE = "shares.Client"
DEFAULT_USER_AGENT = "file-shares-client"

# Sent on requests without a body too; the service tolerates it and sibling
# operations that do send XML use the same value.
XML_CONTENT_TYPE = "application/xml; charset=utf-8"


class SharesClient:
    """Client for the Shares resource of the File Storage data plane."""

    def __init__(
        self,
        base_uri: Optional[str] = None,
        api_version: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        retry_policy: Optional[RetryPolicy] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        self._base_uri = base_uri or settings.STORAGE_BASE_URI
        self._api_version = api_version or settings.STORAGE_API_VERSION
        self._timeout = timeout
        self._user_agent = user_agent or settings.STORAGE_USER_AGENT or DEFAULT_USER_AGENT

        self._owns_http_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(
                timeout=timeout if timeout is not None else settings.STORAGE_REQUEST_TIMEOUT
            )
        self._http_client = http_client
        self._sender = RetryingSender(http_client, retry_policy)

    @property
    def base_uri(self) -> str:
        return self._base_uri

    @property
    def api_version(self) -> str:
        """Value sent as ``x-ms-version``; fixed for the client's lifetime."""
        return self._api_version

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "SharesClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    # ========================================================================
    # SetMetaData
    # ========================================================================

    async def set_metadata(
        self,
        account_name: str,
        share_name: str,
        metadata: Optional[Mapping[str, str]] = None,
    ) -> OperationResponse:
        """
        Set the user-defined metadata of a share, replacing what is there.

        Raises:
            ValidationError: bad arguments; nothing was sent.
            RequestPreparationError: the request could not be built.
            SendError: the request failed in transport after retries.
            ResponseError: the service answered with a status other than 200.
        """
        operation = "SetMetaData"
        if not account_name:
            raise ValidationError(RESOURCE, operation, "`accountName` cannot be an empty string.")
        if not share_name:
            raise ValidationError(RESOURCE, operation, "`shareName` cannot be an empty string.")
        if share_name.lower() != share_name:
            raise ValidationError(RESOURCE, operation, "`shareName` must be a lower-cased string.")
        try:
            metadata_codec.validate(metadata)
        except metadata_codec.MetadataError as e:
            raise ValidationError(RESOURCE, operation, f"`metadata` is not valid: {e}.") from e

        try:
            request = self.set_metadata_preparer(account_name, share_name, metadata)
        except (httpx.InvalidURL, ValueError, TypeError) as e:
            raise RequestPreparationError(RESOURCE, operation, "Failure preparing request") from e

        try:
            response = await self.set_metadata_sender(request)
        except httpx.HTTPError as e:
            raise SendError(RESOURCE, operation, "Failure sending request") from e

        try:
            result = await self.set_metadata_responder(response)
        except httpx.HTTPError as e:
            raise ResponseError(RESOURCE, operation, "Failure responding to request", response) from e

        logger.info(
            "share_metadata_set",
            account_name=account_name,
            share_name=share_name,
            keys=len(metadata or {}),
            request_id=result.request_id,
        )
        return result

    def set_metadata_preparer(
        self,
        account_name: str,
        share_name: str,
        metadata: Optional[Mapping[str, str]] = None,
    ) -> httpx.Request:
        """Build the ``PUT /{share}?restype=share&comp=metadata`` request."""
        url = get_file_endpoint(self._base_uri, account_name) + "/" + quote(share_name, safe="")
        headers = {
            "Content-Type": XML_CONTENT_TYPE,
            "User-Agent": self._user_agent,
            "x-ms-version": self._api_version,
        }
        headers = metadata_codec.set_into_headers(headers, metadata)

        request = self._http_client.build_request(
            "PUT",
            url,
            params={"restype": "share", "comp": "metadata"},
            headers=headers,
            timeout=self._timeout if self._timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )
        logger.debug(
            "share_metadata_request_prepared",
            url=str(request.url),
            header_count=len(request.headers),
        )
        return request

    async def set_metadata_sender(self, request: httpx.Request) -> httpx.Response:
        """Send the request; the returned response body is still open."""
        return await self._sender.send(request)

    async def set_metadata_responder(self, response: httpx.Response) -> OperationResponse:
        """
        Accept only HTTP 200. The body is drained and closed on every path,
        so an error response's payload stays readable via ``response.text``.
        """
        try:
            await response.aread()
        finally:
            await response.aclose()

        if response.status_code != httpx.codes.OK:
            raise httpx.HTTPStatusError(
                f"unexpected status {response.status_code}, expected {int(httpx.codes.OK)}",
                request=response.request,
                response=response,
            )
        return OperationResponse(response=response)
