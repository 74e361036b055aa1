"""Reliability layer: attempt ceiling and backoff for the decision call."""

from .retry import RetryPolicy

__all__ = [
    "RetryPolicy",
]
