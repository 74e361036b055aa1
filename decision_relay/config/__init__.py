"""Configuration module for the decision relay."""

from .settings import RelayConfig

# Import all constants
from .constants import *

__all__ = [
    "RelayConfig",
]
