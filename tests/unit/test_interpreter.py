"""Unit tests for directive interpretation."""

import logging

import pytest

from decision_relay.core.interpreter import DirectiveInterpreter, redirect_status
from decision_relay.core.pages import render_referrer_redirect
from decision_relay.core.sink import ResponseSink
from decision_relay.models.cycle import ActionKind
from decision_relay.models.directive import Directive


@pytest.fixture
def interpreter():
    return DirectiveInterpreter()


@pytest.fixture
def sink():
    return ResponseSink()


class TestDirectivePriority:
    """Test the fixed evaluation order."""

    def test_error_status_emits_message(self, interpreter, sink):
        action = interpreter.apply(Directive(status="error", message="Campaign paused"), sink)

        assert action.kind == ActionKind.ERROR_MESSAGE
        assert action.terminal
        assert sink.body == "Campaign paused"
        assert sink.status_code == 200

    def test_error_status_fallback_message(self, interpreter, sink):
        interpreter.apply(Directive(status="error"), sink)
        assert sink.body == "Unknown error"

    def test_error_status_ignores_every_other_field(self, interpreter, sink):
        directive = Directive(
            status="error", message="stop", hide_referrer=2,
            method="redirection", url="https://dest.example/x", http_code=301,
        )

        interpreter.apply(directive, sink)

        assert sink.body == "stop"
        assert sink.headers == []
        assert sink.status_code == 200

    def test_none_status_is_silent(self, interpreter, sink):
        """{"status":"none"}: no header changes, no body, cycle ends quietly."""
        action = interpreter.apply(
            Directive(status="none", hide_referrer=1, method="nrc", content="x"), sink
        )

        assert action.kind == ActionKind.PASS_THROUGH
        assert not action.terminal
        assert sink.headers == []
        assert sink.body == ""
        assert not sink.has_output

    def test_hide_referrer_header_combines_with_redirect(self, interpreter, sink):
        action = interpreter.apply(
            Directive(hide_referrer=1, method="redirection", url="https://dest.example/x"), sink
        )

        assert action.kind == ActionKind.REDIRECT
        assert sink.get_header("Referrer-Policy") == "no-referrer"
        assert sink.get_header("Location") == "https://dest.example/x"

    def test_hide_referrer_header_alone_is_not_terminal(self, interpreter, sink):
        action = interpreter.apply(Directive(hide_referrer=1), sink)

        assert action.kind == ActionKind.NO_EFFECT
        assert not action.terminal
        assert sink.get_header("Referrer-Policy") == "no-referrer"

    @pytest.mark.parametrize("method", ["redirection", "nrc", None, "other"])
    def test_hide_referrer_page_never_consults_method(self, interpreter, sink, method):
        directive = Directive(
            hide_referrer=2, url="https://dest.example/x", method=method,
            content="<p>inline</p>", http_code=301,
        )

        action = interpreter.apply(directive, sink)

        assert action.kind == ActionKind.REFERRER_PAGE
        assert action.terminal
        assert sink.status_code == 200
        assert sink.get_header("Location") is None
        assert "<p>inline</p>" not in sink.body
        assert 'location.replace("https://dest.example/x")' in sink.body


class TestMethodDispatch:
    """Test the method switch."""

    def test_redirect_with_code(self, interpreter, sink):
        action = interpreter.apply(
            Directive(method="redirection", url="https://dest.example/x", http_code=301), sink
        )

        assert action.kind == ActionKind.REDIRECT
        assert action.terminal
        assert sink.status_code == 301
        assert sink.get_header("Location") == "https://dest.example/x"
        assert sink.body == ""

    def test_redirect_defaults_to_302(self, interpreter, sink):
        interpreter.apply(Directive(method="redirection", url="https://dest.example/x"), sink)
        assert sink.status_code == 302

    def test_redirect_without_url_ends_exchange(self, interpreter, sink, caplog):
        with caplog.at_level(logging.WARNING, logger="decision_relay.interpreter"):
            action = interpreter.apply(Directive(method="redirection"), sink, cycle_id="c0ffee")

        assert action.kind == ActionKind.NO_EFFECT
        assert action.terminal
        assert sink.get_header("Location") is None
        assert sink.body == ""
        assert "component=interpreter" in caplog.text
        assert "cycle_id=c0ffee" in caplog.text

    def test_redirect_honours_non_3xx_code(self, interpreter, sink):
        action = interpreter.apply(
            Directive(method="redirection", url="https://dest.example/x", http_code=200), sink
        )

        assert action.kind == ActionKind.REDIRECT
        assert sink.status_code == 200
        assert sink.get_header("Location") == "https://dest.example/x"

    def test_inline_content_verbatim(self, interpreter, sink):
        action = interpreter.apply(Directive(method="nrc", content="<h1>hi</h1>"), sink)

        assert action.kind == ActionKind.INLINE_CONTENT
        assert action.terminal
        assert sink.body == "<h1>hi</h1>"

    def test_inline_without_content_is_empty(self, interpreter, sink):
        action = interpreter.apply(Directive(method="nrc"), sink)
        assert action.terminal
        assert sink.body == ""

    @pytest.mark.parametrize("directive", [
        Directive(),
        Directive(status="ok"),
        Directive(method="unknown", url="https://dest.example/x"),
        Directive(hide_referrer=0, method="Redirection", url="https://dest.example/x"),
    ])
    def test_no_directive(self, interpreter, sink, directive):
        action = interpreter.apply(directive, sink)

        assert action.kind == ActionKind.NO_EFFECT
        assert not action.terminal
        assert sink.headers == []
        assert sink.body == ""


class TestRedirectStatus:
    """Test redirect status selection."""

    @pytest.mark.parametrize("code,expected", [(None, 302), (301, 301), (307, 307), (308, 308),
                                               (200, 200), (500, 500), (100, 302), (0, 302),
                                               (600, 302), (-1, 302)])
    def test_code_used_as_given(self, code, expected):
        assert redirect_status(code) == expected


class TestReferrerRedirectPage:
    """Test the referrer hiding redirect page."""

    def test_missing_url_renders_invalid_message(self):
        page = render_referrer_redirect(None)

        assert "Invalid redirect URL." in page
        assert "location.replace" not in page
        assert "<a href" not in page

    def test_empty_url_renders_invalid_message(self, interpreter, sink):
        action = interpreter.apply(Directive(hide_referrer=2, url=""), sink)

        assert action.kind == ActionKind.REFERRER_PAGE
        assert "Invalid redirect URL." in sink.body
        assert "location.replace" not in sink.body

    def test_noscript_fallback_link(self):
        page = render_referrer_redirect("https://dest.example/a?b=1&c=2")

        assert '<a href="https://dest.example/a?b=1&amp;c=2"' in page
        assert "<noscript>" in page

    def test_url_cannot_break_out_of_script(self):
        hostile = 'https://dest.example/";alert(1);//</script><script>alert(2)</script>'

        page = render_referrer_redirect(hostile)

        assert "</script><script>" not in page
        assert 'location.replace("https://dest.example/\\";alert(1);//\\u003c/script\\u003e' in page
        assert "&#34;;alert(1)" in page
