"""HTTP surface: standalone FastAPI app and middleware.

Requires FastAPI (installed with the package).
"""

from .api import create_app, router, to_response
from .environment import environment_from_request
from .middleware import RelayMiddleware

__all__ = [
    "create_app",
    "router",
    "to_response",
    "environment_from_request",
    "RelayMiddleware",
]
