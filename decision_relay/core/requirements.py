"""Runtime capability check performed before any outbound call."""

import sys

from ..errors import EnvironmentUnsupportedError

MIN_PYTHON = (3, 8)


def check_requirements(version_info=None) -> None:
    """
    Verify the runtime can make a verified TLS call to the decision endpoint.

    Raises:
        EnvironmentUnsupportedError: If the interpreter is too old or the
            ``ssl`` module is unavailable
    """
    version = tuple(version_info or sys.version_info)[:2]
    if version < MIN_PYTHON:
        raise EnvironmentUnsupportedError(
            "Python {}.{} or higher is required. Current version: {}.{}".format(*MIN_PYTHON, *version),
            component="requirements",
        )

    try:
        import ssl
    except ImportError as e:
        raise EnvironmentUnsupportedError(
            "TLS support (the ssl module) is not available.", component="requirements"
        ) from e

    if not getattr(ssl, "HAS_SNI", False):
        raise EnvironmentUnsupportedError(
            "The ssl module lacks SNI support required for verified TLS.", component="requirements"
        )
