"""
Directive returned by the decision endpoint.

The endpoint is remote and loosely typed, so decoding never fails: a body
that is not a JSON object becomes an empty ``Directive``, and individual
fields that cannot be coerced to their expected type are treated as absent.
"""

import json
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..config.constants import (
    HIDE_REFERRER_HEADER,
    HIDE_REFERRER_PAGE,
    METHOD_INLINE,
    METHOD_REDIRECT,
    STATUS_ERROR,
    STATUS_NONE,
)
from ..observability.logging import RelayLogger

logger = RelayLogger("directive")


class DirectiveStatus(str, Enum):
    """Known values of the ``status`` field."""
    ERROR = STATUS_ERROR
    NONE = STATUS_NONE


class DeliveryMethod(str, Enum):
    """Known values of the ``method`` field."""
    REDIRECT = METHOD_REDIRECT
    INLINE = METHOD_INLINE


class ReferrerMode(int, Enum):
    """Known values of the ``hide_referrer`` field."""
    OFF = 0
    HEADER = HIDE_REFERRER_HEADER
    PAGE = HIDE_REFERRER_PAGE


def _as_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
    return None


class Directive(BaseModel):
    """
    Decoded decision response.

    Every field is optional. Absence of ``status`` and ``method`` means
    "no directive". Unknown extra fields are kept for diagnostics.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    status: Optional[str] = None
    message: Optional[str] = None
    hide_referrer: Optional[int] = None
    method: Optional[str] = None
    url: Optional[str] = None
    content: Optional[str] = None
    http_code: Optional[int] = None

    @field_validator("status", "message", "method", "url", mode="before")
    def coerce_text(cls, v):
        return _as_text(v)

    @field_validator("content", mode="before")
    def coerce_content(cls, v):
        if isinstance(v, (dict, list)):
            return json.dumps(v)
        return _as_text(v)

    @field_validator("hide_referrer", "http_code", mode="before")
    def coerce_int(cls, v):
        return _as_int(v)

    @property
    def is_empty(self) -> bool:
        return self.status is None and self.method is None and self.hide_referrer is None

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "Directive":
        fields = {str(k): v for k, v in data.items()}
        try:
            return cls.model_validate(fields)
        except ValidationError as e:
            # Extra fields pydantic refuses; keep the known ones
            logger.debug("Discarding extra directive fields", errors=e.error_count())
            known = {k: v for k, v in fields.items() if k in cls.model_fields}
            return cls.model_validate(known)


def decode_response_body(raw: Optional[bytes]) -> Optional[Dict[str, Any]]:
    """
    Decode a response body into a JSON object.

    Args:
        raw: Raw body bytes, or None when no response was received

    Returns:
        The decoded mapping, or None if the body is missing, not JSON, or
        not a JSON object
    """
    if not raw:
        return None
    try:
        decoded = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        return None
    return decoded if isinstance(decoded, dict) else None


def parse_directive(raw: Optional[bytes]) -> Tuple[Optional[Dict[str, Any]], Directive]:
    """Decode ``raw`` into ``(mapping_or_None, Directive)``; never raises."""
    decoded = decode_response_body(raw)
    if decoded is None:
        return None, Directive()
    return decoded, Directive.from_mapping(decoded)
