"""
Storage Client Errors

Every failure raised by a storage operation is a ``StorageError`` that
records which operation failed and in which phase:

    validation  → bad input, detected before any network activity
    prepare     → the HTTP request could not be built
    send        → transport failure after the sender's retry policy
    respond     → the service answered with an unexpected status

The raw ``httpx.Response`` is attached whenever one exists, and the
underlying exception is chained as ``__cause__``.
"""

from enum import Enum
from typing import Optional

import httpx


class ErrorPhase(str, Enum):
    VALIDATION = "validation"
    PREPARE = "prepare"
    SEND = "send"
    RESPOND = "respond"


class StorageError(Exception):
    """Base error for storage operations."""

    phase: ErrorPhase = ErrorPhase.RESPOND

    def __init__(
        self,
        resource: str,
        operation: str,
        message: str,
        response: Optional[httpx.Response] = None,
    ):
        self.resource = resource
        self.operation = operation
        self.message = message
        self.response = response
        super().__init__(message)

    @property
    def status_code(self) -> Optional[int]:
        if self.response is None:
            return None
        return self.response.status_code

    def __str__(self) -> str:
        text = f"{self.resource}#{self.operation}: {self.message}"
        if self.status_code is not None:
            text += f" StatusCode={self.status_code}"
        if self.__cause__ is not None:
            text += f" -- Original Error: {self.__cause__}"
        return text


class ValidationError(StorageError):
    """Raised when arguments fail validation; no request is made."""

    phase = ErrorPhase.VALIDATION

    def __init__(self, resource: str, operation: str, message: str):
        super().__init__(resource, operation, f"Invalid input: {message}")


class RequestPreparationError(StorageError):
    phase = ErrorPhase.PREPARE


class SendError(StorageError):
    phase = ErrorPhase.SEND


class ResponseError(StorageError):
    """Raised for any status other than the one the operation expects."""

    phase = ErrorPhase.RESPOND

    @property
    def error_code(self) -> Optional[str]:
        """Service error code from the ``x-ms-error-code`` header, if sent."""
        if self.response is None:
            return None
        return self.response.headers.get("x-ms-error-code")
