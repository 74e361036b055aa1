"""Public client API for the decision relay."""

from .client import CycleRecord, DecisionRelay, RelayResult

__all__ = [
    "DecisionRelay",
    "RelayResult",
    "CycleRecord",
]
