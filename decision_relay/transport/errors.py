"""
Transport error classification.

Maps httpx exceptions raised by a decision call to a category and a short
description. The description is what ``TransportOutcome.transport_error``
carries; transport failures are never raised past the transport.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import httpx


class TransportErrorCategory(Enum):
    """Categories of failed decision calls."""
    TIMEOUT = "timeout"
    NETWORK = "network"
    TLS = "tls"
    PROTOCOL = "protocol"
    HTTP_STATUS = "http_status"
    UNKNOWN = "unknown"


@dataclass
class TransportErrorClassification:
    category: TransportErrorCategory
    description: str


def _is_tls_failure(error: Exception) -> bool:
    text = str(error).lower()
    return any(phrase in text for phrase in ("certificate", "ssl", "tls"))


def classify_transport_error(error: Exception) -> TransportErrorClassification:
    """
    Classify an exception raised while performing a decision call.

    Args:
        error: The httpx (or other) exception

    Returns:
        TransportErrorClassification with a category and a description
    """
    if isinstance(error, httpx.ConnectTimeout):
        category = TransportErrorCategory.TIMEOUT
        detail = "connection timed out"
    elif isinstance(error, httpx.TimeoutException):
        category = TransportErrorCategory.TIMEOUT
        detail = "response timed out"
    elif isinstance(error, httpx.ConnectError) and _is_tls_failure(error):
        category = TransportErrorCategory.TLS
        detail = "TLS handshake failed"
    elif isinstance(error, (httpx.ConnectError, httpx.NetworkError)):
        category = TransportErrorCategory.NETWORK
        detail = "network error"
    elif isinstance(error, (httpx.ProtocolError, httpx.DecodingError, httpx.TooManyRedirects)):
        category = TransportErrorCategory.PROTOCOL
        detail = "protocol error"
    else:
        category = TransportErrorCategory.UNKNOWN
        detail = "transport error"

    message = str(error) or type(error).__name__
    return TransportErrorClassification(category=category, description=f"{detail}: {message}")


def classify_status(http_status: int) -> Optional[TransportErrorCategory]:
    """Category for a non-2xx status, None when the status is a success."""
    if 200 <= http_status < 300:
        return None
    return TransportErrorCategory.HTTP_STATUS
