"""
Directive interpretation.

Applies exactly one decoded ``Directive`` to a ``ResponseSink``. Branches
are evaluated in a fixed order and the first match wins:

1. ``status == "error"``: the endpoint's message becomes the whole body.
2. ``status == "none"``: nothing happens, the caller passes through.
3. ``hide_referrer == 1``: add ``Referrer-Policy: no-referrer`` and keep going.
4. ``hide_referrer == 2``: emit the client-side redirect page. ``method`` is
   never consulted.
5. ``method``: ``"redirection"`` issues an HTTP redirect (or ends the
   exchange untouched when no URL came with it), ``"nrc"`` emits
   ``content`` verbatim, anything else has no effect.
"""

from typing import Optional

from ..config.constants import (
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_REDIRECT_CODE,
    HIDE_REFERRER_HEADER,
    HIDE_REFERRER_PAGE,
    METHOD_INLINE,
    METHOD_REDIRECT,
    STATUS_ERROR,
    STATUS_NONE,
)
from ..models.cycle import ActionKind, DirectiveAction
from ..models.directive import Directive
from ..observability.logging import RelayLogger
from .pages import render_referrer_redirect
from .sink import ResponseSink

logger = RelayLogger("interpreter")

HTML_MEDIA_TYPE = "text/html"


def redirect_status(http_code: Optional[int]) -> int:
    """
    Status for a server redirect.

    ``http_code`` is used as given; 302 when it is absent or cannot be sent
    as a final response status.
    """
    if http_code is None:
        return DEFAULT_REDIRECT_CODE
    if 200 <= http_code <= 599:
        return http_code
    logger.warning("Directive status cannot be sent as a response, using default",
                   http_code=http_code, status=DEFAULT_REDIRECT_CODE)
    return DEFAULT_REDIRECT_CODE


class DirectiveInterpreter:
    """State machine turning a Directive into one side effect on a sink."""

    def apply(
        self,
        directive: Directive,
        sink: ResponseSink,
        cycle_id: Optional[str] = None,
    ) -> DirectiveAction:
        """
        Apply ``directive`` to ``sink``.

        Args:
            directive: Decoded decision response
            sink: Response capability for the current exchange
            cycle_id: Identifier used in log lines

        Returns:
            DirectiveAction describing the effect and whether it is terminal
        """
        if directive.status == STATUS_ERROR:
            sink.write(directive.message or DEFAULT_ERROR_MESSAGE, media_type=HTML_MEDIA_TYPE)
            return DirectiveAction.final(ActionKind.ERROR_MESSAGE)

        if directive.status == STATUS_NONE:
            return DirectiveAction.proceed(ActionKind.PASS_THROUGH)

        if directive.hide_referrer == HIDE_REFERRER_HEADER:
            sink.set_header("Referrer-Policy", "no-referrer")

        if directive.hide_referrer == HIDE_REFERRER_PAGE:
            if not directive.url:
                logger.warning("Referrer hiding redirect requested without a URL", cycle_id=cycle_id)
            sink.set_header("Referrer-Policy", "no-referrer")
            sink.write(render_referrer_redirect(directive.url), media_type=HTML_MEDIA_TYPE)
            return DirectiveAction.final(ActionKind.REFERRER_PAGE)

        return self._dispatch_method(directive, sink, cycle_id)

    def _dispatch_method(
        self,
        directive: Directive,
        sink: ResponseSink,
        cycle_id: Optional[str],
    ) -> DirectiveAction:
        if directive.method == METHOD_REDIRECT:
            if not directive.url:
                logger.warning("Redirect directive without a URL, ending the exchange", cycle_id=cycle_id)
                return DirectiveAction.final(ActionKind.NO_EFFECT)
            sink.redirect(directive.url, redirect_status(directive.http_code))
            return DirectiveAction.final(ActionKind.REDIRECT)

        if directive.method == METHOD_INLINE:
            sink.write(directive.content or "", media_type=HTML_MEDIA_TYPE)
            return DirectiveAction.final(ActionKind.INLINE_CONTENT)

        return DirectiveAction.proceed(ActionKind.NO_EFFECT)
