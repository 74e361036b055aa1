"""FastAPI HTTP surface for the decision relay.

Every request that reaches the catch-all route runs one relay cycle; the
cycle's response sink becomes the HTTP response.
"""

from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from starlette.concurrency import run_in_threadpool
from starlette.responses import Response

from ..api.client import DecisionRelay, RelayResult
from ..config.settings import RelayConfig
from .environment import environment_from_request

RELAY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

# Catch-all router; the relay instance is read from app.state
router = APIRouter()


def to_response(result: RelayResult) -> Response:
    """Turn a cycle's sink into a Starlette response and commit the sink."""
    sink = result.sink
    response = Response(
        content=sink.body,
        status_code=sink.status_code,
        media_type=sink.media_type,
    )
    for name, value in sink.headers:
        response.headers[name] = value
    sink.commit()
    return response


async def run_relay(relay: DecisionRelay, request: Request) -> RelayResult:
    """Run the synchronous cycle off the event loop."""
    environment = environment_from_request(request)
    return await run_in_threadpool(relay.handle, environment, request.query_params)


@router.api_route("/{path:path}", methods=RELAY_METHODS, include_in_schema=False)
async def relay_request(request: Request, path: str):
    """Apply the decision for this request."""
    relay: DecisionRelay = request.app.state.relay
    result = await run_relay(relay, request)
    return to_response(result)


def create_app(
    config: Optional[RelayConfig] = None,
    relay: Optional[DecisionRelay] = None,
) -> FastAPI:
    """
    Build a standalone relay application.

    Args:
        config: Relay configuration (read from the environment when omitted)
        relay: Prebuilt relay, takes precedence over ``config``

    Returns:
        FastAPI app whose every route is decided by the relay
    """
    if relay is None:
        relay = DecisionRelay(config or RelayConfig.from_env())

    app = FastAPI(title="Decision Relay", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.relay = relay
    app.include_router(router)
    return app
