"""Core request/response cycle components."""

from .context import ContextEncoder, decode_environment, encode_environment, freeze_environment
from .payloads import PayloadBuilder, build_headers, build_payload
from .sink import ResponseSink
from .interpreter import DirectiveInterpreter
from .boundary import BoundaryErrorHandler
from .requirements import check_requirements

__all__ = [
    "ContextEncoder",
    "encode_environment",
    "decode_environment",
    "freeze_environment",
    "PayloadBuilder",
    "build_payload",
    "build_headers",
    "ResponseSink",
    "DirectiveInterpreter",
    "BoundaryErrorHandler",
    "check_requirements",
]
