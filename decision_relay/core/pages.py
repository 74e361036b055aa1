"""
HTML documents the relay can emit.

Rendered with jinja2 autoescaping. The redirect target in the referrer
hiding page is JSON encoded for the script block (``tojson`` also escapes
``<``, ``>``, ``&`` and ``'``) and HTML escaped for the fallback link.
"""

from typing import List, Optional, Tuple

from jinja2 import Environment, select_autoescape

_env = Environment(autoescape=select_autoescape(default=True, default_for_string=True))

REFERRER_REDIRECT_TEMPLATE = _env.from_string("""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="referrer" content="no-referrer">
    <title>Redirecting...</title>
{%- if url %}
    <script>
        window.onload = function() {
            location.replace({{ url|tojson }});
        };
    </script>
{%- endif %}
</head>
<body>
{%- if url %}
    Redirecting...<br>
    <noscript>
        JavaScript is disabled. <a href="{{ url }}" rel="noreferrer">Click here to continue.</a>
    </noscript>
{%- else %}
    Invalid redirect URL.
{%- endif %}
</body>
</html>
""")

TRACE_TEMPLATE = _env.from_string("""<pre>
=========== TRACE INFO ===========
Endpoint: {{ endpoint }}
--- Headers ---
{% for name, value in headers -%}
{{ name }}: {{ value }}
{% endfor -%}
--- Payload ---
{{ payload }}
--- Response ---
{{ response }}
==================================
</pre>
""")

ERROR_TEMPLATE = _env.from_string("<pre>ERROR: {{ message }}\n{{ trace }}</pre>")


def render_referrer_redirect(url: Optional[str]) -> str:
    """Client-side redirect page that does not leave a history entry."""
    return REFERRER_REDIRECT_TEMPLATE.render(url=url or None)


def render_trace(
    endpoint: str,
    headers: List[Tuple[str, str]],
    payload: str,
    response: str,
) -> str:
    return TRACE_TEMPLATE.render(endpoint=endpoint, headers=headers, payload=payload, response=response)


def render_error(message: str, trace: str) -> str:
    return ERROR_TEMPLATE.render(message=message, trace=trace)
