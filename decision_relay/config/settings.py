"""
Relay configuration.

The endpoint and both identifiers are fixed per deployment, so they are
carried by an immutable ``RelayConfig`` handed to ``DecisionRelay`` at
construction rather than kept as module state.
"""

import os
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import ConfigurationError
from .constants import (
    DEFAULT_CAMPAIGN_PARAM,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_DEBUG_PARAM,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RESPONSE_TIMEOUT,
    DEFAULT_RETRY_DELAY,
    DEFAULT_USER_AGENT,
    ENV_CAMPAIGN_ID,
    ENV_CAMPAIGN_PARAM,
    ENV_CONNECT_TIMEOUT,
    ENV_DEBUG_PARAM,
    ENV_ENDPOINT,
    ENV_MAX_ATTEMPTS,
    ENV_RESPONSE_TIMEOUT,
    ENV_RETRY_DELAY,
    ENV_USER_AGENT,
    ENV_VISITOR_ID,
)


class RelayConfig(BaseModel):
    """Immutable per-deployment relay settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    endpoint: str = Field(..., description="Decision endpoint URL")
    visitor_id: Optional[str] = Field(None, description="Static visitor identifier (uid)")
    campaign_id: Optional[str] = Field(None, description="Static campaign identifier (cid)")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)
    connect_timeout: float = Field(default=DEFAULT_CONNECT_TIMEOUT, gt=0)
    response_timeout: float = Field(default=DEFAULT_RESPONSE_TIMEOUT, gt=0)
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)
    retry_delay: float = Field(default=DEFAULT_RETRY_DELAY, ge=0)
    debug_param: str = Field(default=DEFAULT_DEBUG_PARAM, min_length=1)
    campaign_param: str = Field(default=DEFAULT_CAMPAIGN_PARAM, min_length=1)

    @field_validator("endpoint")
    def validate_endpoint(cls, v):
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"endpoint must be an absolute http(s) URL, got {v!r}")
        return v

    @field_validator("visitor_id", "campaign_id")
    def blank_identifier_is_absent(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    @classmethod
    def create(cls, **values: Any) -> "RelayConfig":
        """Build a config, raising ConfigurationError instead of ValidationError."""
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(_summarize(e), component="config") from e

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        load_dotenv_file: bool = True,
    ) -> "RelayConfig":
        """
        Build a config from ``DECISION_RELAY_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``
            load_dotenv_file: Load a ``.env`` file into ``os.environ`` first

        Returns:
            RelayConfig

        Raises:
            ConfigurationError: If the endpoint is missing or a value is invalid
        """
        if load_dotenv_file and environ is None:
            load_dotenv()
        env = os.environ if environ is None else environ

        endpoint = env.get(ENV_ENDPOINT)
        if not endpoint:
            raise ConfigurationError(f"{ENV_ENDPOINT} is not set", component="config")

        values: Dict[str, Any] = {"endpoint": endpoint}
        optional = {
            "visitor_id": ENV_VISITOR_ID,
            "campaign_id": ENV_CAMPAIGN_ID,
            "user_agent": ENV_USER_AGENT,
            "connect_timeout": ENV_CONNECT_TIMEOUT,
            "response_timeout": ENV_RESPONSE_TIMEOUT,
            "max_attempts": ENV_MAX_ATTEMPTS,
            "retry_delay": ENV_RETRY_DELAY,
            "debug_param": ENV_DEBUG_PARAM,
            "campaign_param": ENV_CAMPAIGN_PARAM,
        }
        for field_name, var in optional.items():
            raw = env.get(var)
            if raw is not None and raw != "":
                values[field_name] = raw

        return cls.create(**values)

    def retry_policy(self):
        from ..reliability.retry import RetryPolicy

        return RetryPolicy(max_attempts=self.max_attempts, initial_delay=self.retry_delay)


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ())) or "config"
        parts.append(f"{location}: {item.get('msg')}")
    return "Invalid relay configuration: " + "; ".join(parts)
