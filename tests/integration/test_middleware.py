"""End-to-end tests for the relay middleware in front of an existing app."""

import httpx
import pytest
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from decision_relay.http.middleware import RelayMiddleware


def build_app(relay) -> FastAPI:
    app = FastAPI()

    @app.get("/product")
    async def product():
        return PlainTextResponse("real destination")

    app.add_middleware(RelayMiddleware, relay=relay)
    return app


@pytest.fixture
def client_for(make_relay):
    def factory(endpoint):
        app = build_app(make_relay(endpoint))
        return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://shop.example.test")
    return factory


@pytest.mark.integration
class TestRelayMiddleware:
    """Pass-through reaches the wrapped app; terminal actions answer directly."""

    @pytest.mark.asyncio
    async def test_pass_through(self, client_for, endpoint_factory):
        async with client_for(endpoint_factory({"status": "none"})) as client:
            response = await client.get("/product")

        assert response.status_code == 200
        assert response.text == "real destination"

    @pytest.mark.asyncio
    async def test_no_directive_merges_referrer_policy(self, client_for, endpoint_factory):
        async with client_for(endpoint_factory({"hide_referrer": 1, "method": "other"})) as client:
            response = await client.get("/product")

        assert response.text == "real destination"
        assert response.headers["referrer-policy"] == "no-referrer"

    @pytest.mark.asyncio
    async def test_inline_content_replaces_destination(self, client_for, endpoint_factory):
        async with client_for(endpoint_factory({"method": "nrc", "content": "<p>substitute</p>"})) as client:
            response = await client.get("/product")

        assert response.text == "<p>substitute</p>"

    @pytest.mark.asyncio
    async def test_redirect(self, client_for, endpoint_factory):
        async with client_for(endpoint_factory(
            {"method": "redirection", "url": "https://dest.example/z", "http_code": 307}
        )) as client:
            response = await client.get("/product")

        assert response.status_code == 307
        assert response.headers["location"] == "https://dest.example/z"

    @pytest.mark.asyncio
    async def test_unreachable_endpoint_passes_through(self, client_for, endpoint_factory):
        endpoint = endpoint_factory(httpx.ConnectError("connection refused"))

        async with client_for(endpoint) as client:
            response = await client.get("/product")

        assert endpoint.calls == 5
        assert response.text == "real destination"
