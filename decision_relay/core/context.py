"""
Request context encoding.

The request environment travels to the decision endpoint as compact JSON
wrapped in standard base64. Encoding accepts whatever a request
environment can hold; values JSON cannot represent are coerced rather than
rejected.
"""

import base64
import binascii
import json
from types import MappingProxyType
from typing import Any, Dict, Mapping

from ..errors import ContextDecodeError

RequestEnvironment = Mapping[str, Any]


def freeze_environment(environment: Mapping[Any, Any]) -> RequestEnvironment:
    """Capture ``environment`` as a read-only mapping with string keys."""
    return MappingProxyType({str(k): v for k, v in environment.items()})


def _coerce(value: Any) -> Any:
    """``json.dumps`` fallback for values outside the JSON data model."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (set, frozenset)):
        return sorted((_coerce_item(v) for v in value), key=repr)
    if isinstance(value, Mapping):
        return {str(k): v for k, v in value.items()}
    return str(value)


def _coerce_item(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return _coerce(value)


def _stringify_keys(value: Any) -> Any:
    # json.dumps rejects non-scalar keys
    if isinstance(value, Mapping):
        return {str(k): _stringify_keys(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_stringify_keys(v) for v in value]
    return value


def serialize_environment(environment: RequestEnvironment) -> str:
    """Canonical compact JSON text of ``environment`` in insertion order."""
    return json.dumps(
        _stringify_keys(environment),
        default=_coerce,
        separators=(",", ":"),
        ensure_ascii=True,
        allow_nan=True,
    )


def encode_environment(environment: RequestEnvironment) -> str:
    """Serialize ``environment`` and wrap it in base64 text."""
    text = serialize_environment(environment)
    return base64.b64encode(text.encode("ascii")).decode("ascii")


def decode_environment(blob: str) -> Dict[str, Any]:
    """
    Reverse ``encode_environment``.

    Args:
        blob: Base64 text produced by ``encode_environment``

    Returns:
        The decoded mapping

    Raises:
        ContextDecodeError: If the blob is not base64 encoded JSON object text
    """
    try:
        raw = base64.b64decode(blob.encode("ascii"), validate=True)
        decoded = json.loads(raw)
    except (binascii.Error, ValueError, UnicodeError) as e:
        raise ContextDecodeError(f"Invalid context blob: {e}", component="context") from e
    if not isinstance(decoded, dict):
        raise ContextDecodeError("Context blob does not hold a JSON object", component="context")
    return decoded


class ContextEncoder:
    """Turns a captured request environment into the outbound context blob."""

    def encode(self, environment: RequestEnvironment) -> str:
        return encode_environment(environment)

    def decode(self, blob: str) -> Dict[str, Any]:
        return decode_environment(blob)
