"""
Relay middleware.

Puts the relay in front of an existing ASGI application: terminal actions
answer the visitor directly, everything else continues to the wrapped app
with the sink's headers (for example ``Referrer-Policy``) merged in.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from ..api.client import DecisionRelay
from .api import run_relay, to_response


class RelayMiddleware(BaseHTTPMiddleware):
    """Consults the decision endpoint before the wrapped app runs."""

    def __init__(self, app: ASGIApp, relay: DecisionRelay):
        super().__init__(app)
        self.relay = relay

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        result = await run_relay(self.relay, request)
        if result.terminal:
            return to_response(result)

        response = await call_next(request)
        for name, value in result.sink.headers:
            response.headers[name] = value
        result.sink.commit()
        return response
