"""Data models for the decision relay."""

from .payload import HeaderSet, OutboundPayload
from .directive import (
    DeliveryMethod,
    Directive,
    DirectiveStatus,
    ReferrerMode,
    decode_response_body,
    parse_directive,
)
from .cycle import ActionKind, CycleResult, DirectiveAction, TransportOutcome

__all__ = [
    # Outbound
    "HeaderSet",
    "OutboundPayload",

    # Inbound
    "Directive",
    "DirectiveStatus",
    "DeliveryMethod",
    "ReferrerMode",
    "decode_response_body",
    "parse_directive",

    # Cycle
    "TransportOutcome",
    "CycleResult",
    "ActionKind",
    "DirectiveAction",
]
