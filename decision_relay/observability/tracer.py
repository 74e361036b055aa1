"""
Diagnostic trace output.

Only runs when the visitor request carries the debug trigger. The trace
replaces directive application and always ends the cycle.
"""

from pprint import pformat
from typing import Optional

from ..core.pages import render_trace
from ..core.sink import ResponseSink
from ..models.cycle import ActionKind, CycleResult, DirectiveAction
from ..models.payload import HeaderSet, OutboundPayload


class DiagnosticTracer:
    """Renders endpoint, headers, payload and cycle result for debugging."""

    def render(
        self,
        endpoint: str,
        headers: HeaderSet,
        payload: OutboundPayload,
        result: Optional[CycleResult],
    ) -> str:
        logical_payload = {
            "uid": payload.uid,
            "cid": payload.cid,
            "serverData": payload.payload,
        }
        report = result.to_report() if result is not None else None
        return render_trace(
            endpoint=endpoint,
            headers=list(headers),
            payload=pformat(logical_payload, sort_dicts=False),
            response=pformat(report, sort_dicts=False),
        )

    def emit(
        self,
        sink: ResponseSink,
        endpoint: str,
        headers: HeaderSet,
        payload: OutboundPayload,
        result: Optional[CycleResult],
    ) -> DirectiveAction:
        sink.write(self.render(endpoint, headers, payload, result), media_type="text/html")
        return DirectiveAction.final(ActionKind.TRACE)
