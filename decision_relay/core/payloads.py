"""
Outbound payload and header construction for the decision call.

Both builders are pure: the only varying input, the timestamp, comes from an
injectable clock.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

from ..config.constants import DEFAULT_USER_AGENT, JSON_MEDIA_TYPE, NULL_IDENTIFIER
from ..models.payload import HeaderSet, OutboundPayload

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO 8601 / RFC 3339 with seconds precision, e.g. 2025-01-31T09:15:00+00:00."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).replace(microsecond=0).isoformat()


def build_payload(
    visitor_id: Optional[str],
    campaign_id: Optional[str],
    encoded_context: str,
) -> OutboundPayload:
    return OutboundPayload(uid=visitor_id, cid=campaign_id, payload=encoded_context)


def build_headers(
    visitor_id: Optional[str],
    campaign_id: Optional[str],
    user_agent: str = DEFAULT_USER_AGENT,
    now: Optional[datetime] = None,
) -> HeaderSet:
    """
    Build the ordered header set for one decision call.

    Absent identifiers are sent as the literal string ``"null"``; the decision
    endpoint relies on that value.
    """
    moment = now if now is not None else utc_now()
    return [
        ("Content-Type", JSON_MEDIA_TYPE),
        ("Accept", JSON_MEDIA_TYPE),
        ("User-Agent", user_agent),
        ("X-Timestamp", format_timestamp(moment)),
        ("Connection", "keep-alive"),
        ("X-UID", visitor_id if visitor_id is not None else NULL_IDENTIFIER),
        ("X-CID", campaign_id if campaign_id is not None else NULL_IDENTIFIER),
    ]


class PayloadBuilder:
    """Builds the payload and header set from the relay's static identifiers."""

    def __init__(
        self,
        visitor_id: Optional[str],
        campaign_id: Optional[str],
        user_agent: str = DEFAULT_USER_AGENT,
        clock: Clock = utc_now,
    ):
        self.visitor_id = visitor_id
        self.campaign_id = campaign_id
        self.user_agent = user_agent
        self._clock = clock

    def payload(self, encoded_context: str) -> OutboundPayload:
        return build_payload(self.visitor_id, self.campaign_id, encoded_context)

    def headers(self) -> HeaderSet:
        return build_headers(self.visitor_id, self.campaign_id, self.user_agent, now=self._clock())
