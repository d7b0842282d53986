"""Azure Storage data-plane clients.

Provides the shares client plus the helpers it is built on: endpoint
resolution, the metadata header codec and the retrying sender.
"""

from .errors import (
    ErrorPhase,
    StorageError,
    ValidationError,
    RequestPreparationError,
    SendError,
    ResponseError,
)
from .models import OperationResponse
from .transport import RetryPolicy, RetryingSender
from .shares import SharesClient

__all__ = [
    # Errors
    "ErrorPhase",
    "StorageError",
    "ValidationError",
    "RequestPreparationError",
    "SendError",
    "ResponseError",
    # Models
    "OperationResponse",
    # Transport
    "RetryPolicy",
    "RetryingSender",
    # Clients
    "SharesClient",
]
