"""File Storage shares resource."""

from .client import SharesClient

__all__ = [
    "SharesClient",
]
