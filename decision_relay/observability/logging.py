"""
Structured logging for the relay.

Every relay component logs through a ``RelayLogger`` so lines carry the same
``[component=... cycle_id=...]`` prefix. Identifiers, payloads and response
bodies are never passed to it.
"""

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional


def new_cycle_id() -> str:
    return str(uuid.uuid4())[:8]


class RelayLogger:
    """Structured logger for relay components."""

    def __init__(self, component: str):
        """
        Initialize logger for a relay component.

        Args:
            component: Component name (e.g., "transport", "boundary")
        """
        self.component = component
        self.logger = logging.getLogger(f"decision_relay.{component}")

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with structured fields."""
        fields = [f"component={self.component}"]

        for key, value in kwargs.items():
            if value is not None:
                fields.append(f"{key}={value}")

        return f"[{' '.join(fields)}] {message}"

    def debug(self, message: str, cycle_id: Optional[str] = None, **kwargs):
        self.logger.debug(self._format_message(message, cycle_id=cycle_id, **kwargs))

    def info(self, message: str, cycle_id: Optional[str] = None, **kwargs):
        self.logger.info(self._format_message(message, cycle_id=cycle_id, **kwargs))

    def warning(self, message: str, cycle_id: Optional[str] = None, **kwargs):
        self.logger.warning(self._format_message(message, cycle_id=cycle_id, **kwargs))

    def error(self, message: str, cycle_id: Optional[str] = None,
              error: Optional[BaseException] = None, **kwargs):
        """Log error message; ``error`` adds its type and message as fields."""
        if error is not None:
            kwargs['error_type'] = type(error).__name__
            kwargs['error_msg'] = str(error)

        self.logger.error(self._format_message(message, cycle_id=cycle_id, **kwargs))

    @contextmanager
    def track_cycle(self, cycle_id: Optional[str] = None) -> Iterator[Dict[str, Any]]:
        """
        Context manager timing one relay cycle.

        Args:
            cycle_id: Optional cycle ID (generated if not provided)

        Yields:
            Dict with cycle metadata; callers may add an ``action`` entry
        """
        if cycle_id is None:
            cycle_id = new_cycle_id()

        start_time = time.time()
        self.debug("Starting relay cycle", cycle_id=cycle_id)

        metadata: Dict[str, Any] = {
            'cycle_id': cycle_id,
            'start_time': start_time,
        }

        try:
            yield metadata

            duration = time.time() - start_time
            self.info(
                "Completed relay cycle",
                cycle_id=cycle_id,
                action=metadata.get('action'),
                duration_ms=int(duration * 1000),
            )

        except Exception as e:
            duration = time.time() - start_time
            self.error(
                "Failed relay cycle",
                cycle_id=cycle_id,
                duration_ms=int(duration * 1000),
                error=e,
            )
            raise
