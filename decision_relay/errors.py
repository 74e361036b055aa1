"""
Error taxonomy for the decision relay.

Transport failures and malformed remote responses are not exceptions: they
travel as data (see ``TransportOutcome`` and ``Directive``). The classes
below cover the faults that end a cycle through the boundary handler.
"""

from typing import Optional


class RelayError(Exception):
    """Base exception for relay faults."""

    def __init__(self, message: str, component: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.component = component


class EnvironmentUnsupportedError(RelayError):
    """The runtime lacks a capability the outbound call depends on."""
    pass


class ConfigurationError(RelayError):
    """Relay configuration is missing or invalid."""
    pass


class ContextDecodeError(RelayError):
    """An encoded request context could not be decoded."""
    pass
