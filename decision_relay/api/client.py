"""
High-level relay client.

``DecisionRelay`` owns one full cycle per visitor request: requirements
check, campaign probe, context encoding, payload construction, the retrying
decision call, and either the debug trace or directive interpretation. Any
failure along the way is converted by the boundary handler.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

import httpx

from ..config.constants import CAMPAIGN_NOT_FOUND
from ..config.settings import RelayConfig
from ..core.boundary import BoundaryErrorHandler
from ..core.context import ContextEncoder, RequestEnvironment, freeze_environment
from ..core.interpreter import DirectiveInterpreter
from ..core.payloads import Clock, PayloadBuilder, utc_now
from ..core.requirements import check_requirements
from ..core.sink import ResponseSink
from ..models.cycle import ActionKind, CycleResult, DirectiveAction
from ..models.directive import Directive, parse_directive
from ..models.payload import HeaderSet, OutboundPayload
from ..observability.logging import RelayLogger, new_cycle_id
from ..observability.tracer import DiagnosticTracer
from ..transport.retrying import RetryingTransport

logger = RelayLogger("relay")


@dataclass
class CycleRecord:
    """Everything one decision call produced."""
    headers: HeaderSet
    payload: OutboundPayload
    result: CycleResult
    directive: Directive


@dataclass
class RelayResult:
    """Outcome of ``DecisionRelay.handle``."""
    sink: ResponseSink
    action: DirectiveAction
    cycle: Optional[CycleResult] = None
    cycle_id: Optional[str] = None

    @property
    def terminal(self) -> bool:
        return self.action.terminal


class DecisionRelay:
    """Runs decision cycles against one configured endpoint."""

    def __init__(
        self,
        config: RelayConfig,
        transport: Optional[RetryingTransport] = None,
        http_client: Optional[httpx.Client] = None,
        encoder: Optional[ContextEncoder] = None,
        interpreter: Optional[DirectiveInterpreter] = None,
        tracer: Optional[DiagnosticTracer] = None,
        boundary: Optional[BoundaryErrorHandler] = None,
        clock: Clock = utc_now,
        requirements_check: Callable[[], None] = check_requirements,
    ):
        """
        Args:
            config: Endpoint, identifiers, timeouts and trigger names
            transport: Transport to use instead of one built from ``config``
            http_client: httpx client handed to the default transport; it is
                used as given and must be built with TLS verification on
            encoder: Context encoder override
            interpreter: Directive interpreter override
            tracer: Debug tracer override
            boundary: Boundary error handler override
            clock: Source of the X-Timestamp value
            requirements_check: Runtime capability check
        """
        self.config = config
        self.transport = transport or RetryingTransport(
            policy=config.retry_policy(), client=http_client
        )
        self.encoder = encoder or ContextEncoder()
        self.interpreter = interpreter or DirectiveInterpreter()
        self.tracer = tracer or DiagnosticTracer()
        self.boundary = boundary or BoundaryErrorHandler()
        self.builder = PayloadBuilder(
            visitor_id=config.visitor_id,
            campaign_id=config.campaign_id,
            user_agent=config.user_agent,
            clock=clock,
        )
        self._requirements_check = requirements_check

    def is_debug(self, query: Mapping[str, Any]) -> bool:
        return self.config.debug_param in query

    def is_campaign_probe(self, query: Mapping[str, Any]) -> bool:
        return self.config.campaign_param in query

    def handle(
        self,
        environment: Mapping[Any, Any],
        query: Optional[Mapping[str, Any]] = None,
    ) -> RelayResult:
        """
        Run one full cycle for a visitor request.

        Args:
            environment: Ambient request environment (server variables, headers)
            query: Visitor query parameters, checked for the debug and
                campaign probe triggers

        Returns:
            RelayResult with the filled sink and the applied action
        """
        query = query or {}
        debug = self.is_debug(query)
        sink = ResponseSink()
        cycle_id = new_cycle_id()

        with logger.track_cycle(cycle_id) as metadata:
            try:
                result = self._handle(environment, query, debug, sink, cycle_id)
            except Exception as e:
                action = self.boundary.handle(e, sink, debug=debug, cycle_id=cycle_id)
                result = RelayResult(sink=sink, action=action, cycle_id=cycle_id)
            metadata['action'] = result.action.kind.value
        return result

    def _handle(
        self,
        environment: Mapping[Any, Any],
        query: Mapping[str, Any],
        debug: bool,
        sink: ResponseSink,
        cycle_id: str,
    ) -> RelayResult:
        self._requirements_check()

        if self.is_campaign_probe(query):
            sink.write(self.config.campaign_id or CAMPAIGN_NOT_FOUND, media_type="text/plain")
            return RelayResult(
                sink=sink,
                action=DirectiveAction.final(ActionKind.CAMPAIGN_PROBE),
                cycle_id=cycle_id,
            )

        record = self.run_cycle(freeze_environment(environment), cycle_id=cycle_id)

        if debug:
            action = self.tracer.emit(
                sink,
                endpoint=self.config.endpoint,
                headers=record.headers,
                payload=record.payload,
                result=record.result,
            )
        else:
            action = self.interpreter.apply(record.directive, sink, cycle_id=cycle_id)

        return RelayResult(sink=sink, action=action, cycle=record.result, cycle_id=cycle_id)

    def run_cycle(self, environment: RequestEnvironment, cycle_id: Optional[str] = None) -> CycleRecord:
        """
        Encode, build, send and decode, without touching any response.

        Transport exhaustion is not an error: the last attempt's outcome is
        decoded like any other.
        """
        encoded = self.encoder.encode(environment)
        payload = self.builder.payload(encoded)
        headers = self.builder.headers()

        outcome = self.transport.send(
            self.config.endpoint,
            payload,
            headers,
            connect_timeout=self.config.connect_timeout,
            response_timeout=self.config.response_timeout,
            cycle_id=cycle_id,
        )
        decoded, directive = parse_directive(outcome.raw_body)

        result = CycleResult(
            http_code=outcome.http_status,
            transport_error=outcome.transport_error,
            request_payload=payload,
            directive=decoded,
            attempts=outcome.attempt,
        )
        return CycleRecord(headers=headers, payload=payload, result=result, directive=directive)
