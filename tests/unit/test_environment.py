"""Unit tests for request environment capture."""

from starlette.requests import Request

from decision_relay.http.environment import environment_from_request, header_variable


def make_request(path="/landing", query=b"utm_source=mail", headers=None, scheme="https"):
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": "GET",
        "scheme": scheme,
        "path": path,
        "root_path": "",
        "query_string": query,
        "headers": headers if headers is not None else [
            (b"host", b"shop.example.test"),
            (b"user-agent", b"Mozilla/5.0"),
            (b"accept", b"text/html"),
            (b"accept", b"*/*"),
            (b"content-type", b"text/plain"),
        ],
        "client": ("203.0.113.7", 51234),
        "server": ("shop.example.test", 443),
    }
    return Request(scope)


class TestEnvironmentFromRequest:
    """Test CGI-style environment capture."""

    def test_server_variables(self):
        environment = environment_from_request(make_request(), now=1741944413.5)

        assert environment["REQUEST_METHOD"] == "GET"
        assert environment["REQUEST_URI"] == "/landing?utm_source=mail"
        assert environment["QUERY_STRING"] == "utm_source=mail"
        assert environment["PATH_INFO"] == "/landing"
        assert environment["SERVER_PROTOCOL"] == "HTTP/1.1"
        assert environment["SERVER_NAME"] == "shop.example.test"
        assert environment["SERVER_PORT"] == "443"
        assert environment["REMOTE_ADDR"] == "203.0.113.7"
        assert environment["REMOTE_PORT"] == "51234"
        assert environment["REQUEST_SCHEME"] == "https"
        assert environment["HTTPS"] == "on"
        assert environment["REQUEST_TIME"] == 1741944413
        assert environment["REQUEST_TIME_FLOAT"] == 1741944413.5

    def test_headers(self):
        environment = environment_from_request(make_request())

        assert environment["HTTP_HOST"] == "shop.example.test"
        assert environment["HTTP_USER_AGENT"] == "Mozilla/5.0"
        assert environment["HTTP_ACCEPT"] == "text/html, */*"
        assert environment["CONTENT_TYPE"] == "text/plain"
        assert "HTTP_CONTENT_TYPE" not in environment

    def test_headers_come_first(self):
        keys = list(environment_from_request(make_request()))
        assert keys[0] == "HTTP_HOST"

    def test_plain_http_without_query(self):
        environment = environment_from_request(make_request(query=b"", scheme="http"))

        assert environment["REQUEST_URI"] == "/landing"
        assert environment["QUERY_STRING"] == ""
        assert "HTTPS" not in environment


class TestHeaderVariable:
    """Test header name mapping."""

    def test_mapping(self):
        assert header_variable("X-Forwarded-For") == "HTTP_X_FORWARDED_FOR"
        assert header_variable("Content-Length") == "CONTENT_LENGTH"
