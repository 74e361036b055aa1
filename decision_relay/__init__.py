"""
Decision Relay - consult a remote decision endpoint on every visitor request.

For each inbound request the relay:
- Captures and encodes the request environment
- Sends it, with static visitor and campaign identifiers, to one decision endpoint
- Retries transient failures up to a fixed ceiling
- Applies the returned directive: pass-through, Referrer-Policy, client-side
  redirect page, HTTP redirect or inline content

A debug trigger replaces the directive with a full trace of the cycle.
"""

__version__ = "0.1.0"

from .api.client import DecisionRelay, RelayResult
from .config.settings import RelayConfig
from .core.context import decode_environment, encode_environment
from .core.sink import ResponseSink
from .errors import (
    ConfigurationError,
    ContextDecodeError,
    EnvironmentUnsupportedError,
    RelayError,
)
from .models.cycle import ActionKind, CycleResult, DirectiveAction, TransportOutcome
from .models.directive import Directive, parse_directive
from .models.payload import OutboundPayload
from .reliability.retry import RetryPolicy

__all__ = [
    # Main client
    "DecisionRelay",
    "RelayResult",
    "RelayConfig",
    "RetryPolicy",

    # Context
    "encode_environment",
    "decode_environment",

    # Models
    "OutboundPayload",
    "TransportOutcome",
    "Directive",
    "parse_directive",
    "CycleResult",
    "ActionKind",
    "DirectiveAction",
    "ResponseSink",

    # Errors
    "RelayError",
    "ConfigurationError",
    "ContextDecodeError",
    "EnvironmentUnsupportedError",
]
