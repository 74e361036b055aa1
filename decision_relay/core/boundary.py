"""
Boundary error handling.

The only place that decides the failure text a visitor sees. Normal mode
gets a fixed generic message; debug mode gets the failure message and its
traceback.
"""

import logging
import traceback
from typing import Optional

from ..config.constants import GENERIC_FAILURE_MESSAGE
from ..models.cycle import ActionKind, DirectiveAction
from ..observability.logging import RelayLogger
from .pages import render_error
from .sink import ResponseSink

logger = RelayLogger("boundary")


class BoundaryErrorHandler:
    """Converts any failure of a cycle into one uniform terminal response."""

    status_code = 500

    def handle(
        self,
        error: BaseException,
        sink: ResponseSink,
        debug: bool = False,
        cycle_id: Optional[str] = None,
    ) -> DirectiveAction:
        """
        Write the failure response to ``sink``.

        Output that was already committed cannot be taken back; in that case
        the failure text is appended to it.

        Args:
            error: The failure that ended the cycle
            sink: Response capability for the current exchange
            debug: Reveal the message and traceback instead of the generic text
            cycle_id: Identifier used in log lines

        Returns:
            A terminal FAILURE action
        """
        logger.error("Relay cycle failed", cycle_id=cycle_id, error=error)
        if logger.logger.isEnabledFor(logging.DEBUG):
            logger.debug("".join(traceback.format_exception(type(error), error, error.__traceback__)),
                         cycle_id=cycle_id)

        if sink.committed:
            logger.warning("Failure after output was committed; response cannot be retracted",
                           cycle_id=cycle_id)
        else:
            sink.reset()
            sink.set_status(self.status_code)

        if debug:
            trace = "".join(traceback.format_tb(error.__traceback__))
            sink.write(render_error(str(error), trace), media_type="text/html")
        else:
            sink.write(GENERIC_FAILURE_MESSAGE, media_type="text/plain")
        return DirectiveAction.final(ActionKind.FAILURE)
