"""Transport layer for the decision call."""

from .errors import (
    TransportErrorCategory,
    TransportErrorClassification,
    classify_status,
    classify_transport_error,
)
from .retrying import RetryingTransport

__all__ = [
    "RetryingTransport",
    "TransportErrorCategory",
    "TransportErrorClassification",
    "classify_transport_error",
    "classify_status",
]
