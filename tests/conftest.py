"""Shared pytest fixtures for Decision Relay tests."""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

import pytest

from decision_relay.api.client import DecisionRelay
from decision_relay.config.settings import RelayConfig
from decision_relay.reliability.retry import RetryPolicy
from decision_relay.transport.retrying import RetryingTransport
from tests.helpers.endpoints import ScriptedEndpoint, Step

ENDPOINT = "https://decisions.example.test/api/v1/run"
FIXED_NOW = datetime(2025, 3, 14, 9, 26, 53, tzinfo=timezone.utc)


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: end-to-end tests through the HTTP surface")


@pytest.fixture
def endpoint_factory() -> Callable[..., ScriptedEndpoint]:
    def factory(*steps: Step) -> ScriptedEndpoint:
        return ScriptedEndpoint(list(steps) or [{}])
    return factory


@pytest.fixture
def relay_config() -> RelayConfig:
    """Relay configuration with both identifiers set."""
    return RelayConfig(
        endpoint=ENDPOINT,
        visitor_id="visitor-123",
        campaign_id="campaign-456",
        debug_param="debug",
        campaign_param="cid",
    )


@pytest.fixture
def sample_environment() -> Dict[str, Any]:
    return {
        "HTTP_HOST": "shop.example.test",
        "HTTP_USER_AGENT": "Mozilla/5.0 (X11; Linux x86_64)",
        "HTTP_ACCEPT_LANGUAGE": "en-US,en;q=0.9",
        "REQUEST_METHOD": "GET",
        "REQUEST_URI": "/landing?utm_source=newsletter",
        "QUERY_STRING": "utm_source=newsletter",
        "REMOTE_ADDR": "203.0.113.7",
        "REQUEST_TIME": 1741944413,
    }


@pytest.fixture
def make_relay(relay_config) -> Callable[..., DecisionRelay]:
    """Build a DecisionRelay wired to a scripted endpoint."""
    def factory(
        endpoint: ScriptedEndpoint,
        config: Optional[RelayConfig] = None,
        **kwargs,
    ) -> DecisionRelay:
        config = config or relay_config
        transport = RetryingTransport(
            policy=RetryPolicy(max_attempts=config.max_attempts),
            client=endpoint.client(),
            sleep=lambda _: None,
        )
        kwargs.setdefault("clock", lambda: FIXED_NOW)
        kwargs.setdefault("requirements_check", lambda: None)
        return DecisionRelay(config, transport=transport, **kwargs)
    return factory
