"""Observability layer: structured logging and the debug trace."""

from .logging import RelayLogger, new_cycle_id
from .tracer import DiagnosticTracer

__all__ = [
    "RelayLogger",
    "new_cycle_id",
    "DiagnosticTracer",
]
