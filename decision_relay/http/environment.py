"""
Request environment capture.

Builds the CGI-style server variable mapping (``REQUEST_METHOD``,
``QUERY_STRING``, ``REMOTE_ADDR``, ``HTTP_*`` ...) that a classic web server
hands to a script, from a Starlette request.
"""

import time
from typing import Any, Dict, Optional

from starlette.requests import Request

# Headers CGI exposes without the HTTP_ prefix
_UNPREFIXED_HEADERS = {"content-type": "CONTENT_TYPE", "content-length": "CONTENT_LENGTH"}


def header_variable(name: str) -> str:
    lowered = name.lower()
    if lowered in _UNPREFIXED_HEADERS:
        return _UNPREFIXED_HEADERS[lowered]
    return "HTTP_" + lowered.upper().replace("-", "_")


def environment_from_request(request: Request, now: Optional[float] = None) -> Dict[str, Any]:
    """
    Capture the request environment of ``request``.

    Args:
        request: Incoming Starlette/FastAPI request
        now: Request time override (seconds since the epoch)

    Returns:
        Dict of server variables, headers first, in a stable order
    """
    scope = request.scope
    environment: Dict[str, Any] = {}

    for name, value in request.headers.items():
        key = header_variable(name)
        if key in environment:
            environment[key] = f"{environment[key]}, {value}"
        else:
            environment[key] = value

    query_string = scope.get("query_string", b"").decode("latin-1")
    path = request.url.path
    server = scope.get("server") or (None, None)
    client = request.client
    request_time = time.time() if now is None else now

    environment.update({
        "SERVER_PROTOCOL": f"HTTP/{scope.get('http_version', '1.1')}",
        "REQUEST_METHOD": request.method,
        "REQUEST_SCHEME": request.url.scheme,
        "REQUEST_URI": f"{path}?{query_string}" if query_string else path,
        "SCRIPT_NAME": scope.get("root_path", ""),
        "PATH_INFO": path,
        "QUERY_STRING": query_string,
        "SERVER_NAME": server[0] if server[0] is not None else request.url.hostname,
        "SERVER_PORT": str(server[1]) if server[1] is not None else "",
        "REMOTE_ADDR": client.host if client else "",
        "REMOTE_PORT": str(client.port) if client else "",
        "REQUEST_TIME": int(request_time),
        "REQUEST_TIME_FLOAT": request_time,
    })
    if request.url.scheme == "https":
        environment["HTTPS"] = "on"
    return environment
