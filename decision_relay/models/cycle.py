from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .payload import OutboundPayload


class TransportOutcome(BaseModel):
    """Result of a single attempt against the decision endpoint."""
    model_config = ConfigDict(frozen=True)

    http_status: int = Field(0, description="HTTP status, 0 when no response was received")
    transport_error: str = Field("", description="Transport failure description, empty on success")
    raw_body: Optional[bytes] = None
    attempt: int = Field(1, ge=1)

    @property
    def failed(self) -> bool:
        return bool(self.transport_error) or not (200 <= self.http_status < 300)


class CycleResult(BaseModel):
    """Formatted record of one full cycle, the unit of observability."""
    model_config = ConfigDict(frozen=True)

    http_code: int
    transport_error: str
    request_payload: OutboundPayload
    directive: Optional[Dict[str, Any]] = None
    attempts: int = 1

    def to_report(self) -> Dict[str, Any]:
        return {
            "http_code": self.http_code,
            "transport_error": self.transport_error,
            "request_payload": self.request_payload.to_wire(),
            "directive": self.directive,
            "attempts": self.attempts,
        }


class ActionKind(str, Enum):
    """What a cycle did to the response."""
    ERROR_MESSAGE = "error_message"
    PASS_THROUGH = "pass_through"
    REFERRER_PAGE = "referrer_page"
    REDIRECT = "redirect"
    INLINE_CONTENT = "inline_content"
    NO_EFFECT = "no_effect"
    CAMPAIGN_PROBE = "campaign_probe"
    TRACE = "trace"
    FAILURE = "failure"


class DirectiveAction(BaseModel):
    """
    Terminal-action result returned in place of stopping the process.

    ``terminal`` means the response in the sink is final; otherwise the
    caller may continue to the real destination.
    """
    model_config = ConfigDict(frozen=True)

    kind: ActionKind
    terminal: bool

    @classmethod
    def final(cls, kind: ActionKind) -> "DirectiveAction":
        return cls(kind=kind, terminal=True)

    @classmethod
    def proceed(cls, kind: ActionKind) -> "DirectiveAction":
        return cls(kind=kind, terminal=False)
