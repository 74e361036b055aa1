"""Unit tests for the diagnostic tracer."""

from decision_relay.core.sink import ResponseSink
from decision_relay.models.cycle import ActionKind, CycleResult
from decision_relay.models.payload import OutboundPayload
from decision_relay.observability.tracer import DiagnosticTracer

ENDPOINT = "https://decisions.example.test/api/v1/run"
HEADERS = [("Content-Type", "application/json"), ("X-UID", "visitor-123"), ("X-CID", "null")]
PAYLOAD = OutboundPayload(uid="visitor-123", cid=None, payload="eyJBIjoiMSJ9")


def make_result(**overrides):
    values = dict(
        http_code=200,
        transport_error="",
        request_payload=PAYLOAD,
        directive={"method": "nrc", "content": "<b>x</b>"},
        attempts=1,
    )
    values.update(overrides)
    return CycleResult(**values)


class TestDiagnosticTracer:
    """Test trace rendering."""

    def test_render_contains_everything(self):
        trace = DiagnosticTracer().render(ENDPOINT, HEADERS, PAYLOAD, make_result())

        assert "TRACE INFO" in trace
        assert f"Endpoint: {ENDPOINT}" in trace
        for name, value in HEADERS:
            assert f"{name}: {value}" in trace
        assert "visitor-123" in trace
        assert "eyJBIjoiMSJ9" in trace
        assert "serverData" in trace
        assert "http_code" in trace

    def test_response_content_is_escaped(self):
        trace = DiagnosticTracer().render(ENDPOINT, HEADERS, PAYLOAD, make_result())

        assert "<b>x</b>" not in trace
        assert "&lt;b&gt;x&lt;/b&gt;" in trace

    def test_render_transport_error(self):
        result = make_result(http_code=0, transport_error="network error: refused", directive=None)

        trace = DiagnosticTracer().render(ENDPOINT, HEADERS, PAYLOAD, result)

        assert "network error: refused" in trace
        assert "None" in trace

    def test_emit_is_terminal(self):
        sink = ResponseSink()

        action = DiagnosticTracer().emit(sink, ENDPOINT, HEADERS, PAYLOAD, make_result())

        assert action.kind == ActionKind.TRACE
        assert action.terminal
        assert sink.body.startswith("<pre>")
        assert sink.media_type == "text/html"
