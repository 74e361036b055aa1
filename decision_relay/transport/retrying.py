"""
Retrying transport for the decision call.

One blocking POST per attempt, bounded by ``RetryPolicy.max_attempts``.
Each attempt has an overall deadline of ``response_timeout`` seconds, so a
body that trickles in slowly cannot hold an attempt open. Clients created
here always verify TLS certificates; an injected client is used as given
and must be built with verification on.
"""

import json
import time
from typing import Callable, Optional

import httpx

from ..config.constants import DEFAULT_CONNECT_TIMEOUT, DEFAULT_RESPONSE_TIMEOUT
from ..models.cycle import TransportOutcome
from ..models.payload import HeaderSet, OutboundPayload
from ..observability.logging import RelayLogger
from ..reliability.retry import RetryPolicy
from .errors import classify_status, classify_transport_error

logger = RelayLogger("transport")


def build_timeout(connect_timeout: float, response_timeout: float) -> httpx.Timeout:
    return httpx.Timeout(response_timeout, connect=connect_timeout)


class RetryingTransport:
    """
    Sends the outbound payload to the decision endpoint.

    An attempt fails when httpx raises a transport error or the status is
    outside [200, 300). Failed attempts are retried until the policy's
    ceiling; only the last attempt's outcome is kept.
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        client: Optional[httpx.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            policy: Attempt ceiling and backoff (default: 5 immediate attempts)
            client: httpx client to reuse; when omitted one is created and
                closed per ``send`` call
            sleep: Delay function, replaced in tests
            monotonic: Clock for the per-attempt deadline, replaced in tests
        """
        self.policy = policy or RetryPolicy()
        self._client = client
        self._sleep = sleep
        self._monotonic = monotonic

    def send(
        self,
        endpoint: str,
        payload: OutboundPayload,
        headers: HeaderSet,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        response_timeout: float = DEFAULT_RESPONSE_TIMEOUT,
        cycle_id: Optional[str] = None,
    ) -> TransportOutcome:
        """
        POST ``payload`` to ``endpoint`` with bounded retries.

        Args:
            endpoint: Decision endpoint URL
            payload: Outbound payload, serialized as JSON
            headers: Ordered header set
            connect_timeout: Seconds allowed to establish a connection
            response_timeout: Seconds allowed for a whole attempt, body included
            cycle_id: Identifier used in log lines

        Returns:
            TransportOutcome of the last attempt made
        """
        body = json.dumps(payload.to_wire())
        timeout = build_timeout(connect_timeout, response_timeout)

        if self._client is not None:
            return self._send_with_retry(
                self._client, endpoint, body, headers, timeout, response_timeout, cycle_id
            )

        with httpx.Client(verify=True, timeout=timeout, follow_redirects=False) as client:
            return self._send_with_retry(
                client, endpoint, body, headers, timeout, response_timeout, cycle_id
            )

    def _send_with_retry(
        self,
        client: httpx.Client,
        endpoint: str,
        body: str,
        headers: HeaderSet,
        timeout: httpx.Timeout,
        response_timeout: float,
        cycle_id: Optional[str],
    ) -> TransportOutcome:
        attempt = 0
        while True:
            attempt += 1
            outcome = self._attempt(client, endpoint, body, headers, timeout, response_timeout, attempt)

            if not self.policy.should_retry(attempt, outcome.failed):
                break

            delay = self.policy.delay_for(attempt)
            if delay > 0:
                self._sleep(delay)

        if outcome.failed:
            status_category = classify_status(outcome.http_status)
            logger.warning(
                "Decision call failed after all attempts",
                cycle_id=cycle_id,
                attempts=attempt,
                http_status=outcome.http_status,
                reason="transport" if outcome.transport_error else status_category.value,
            )
        elif attempt > 1:
            logger.info("Decision call succeeded after retries", cycle_id=cycle_id, attempts=attempt)
        return outcome

    def _attempt(
        self,
        client: httpx.Client,
        endpoint: str,
        body: str,
        headers: HeaderSet,
        timeout: httpx.Timeout,
        response_timeout: float,
        attempt: int,
    ) -> TransportOutcome:
        deadline = self._monotonic() + response_timeout
        try:
            with client.stream(
                "POST", endpoint, content=body, headers=headers, timeout=timeout
            ) as response:
                chunks = []
                for chunk in response.iter_bytes():
                    chunks.append(chunk)
                    if self._monotonic() > deadline:
                        raise httpx.ReadTimeout(
                            f"no complete response within {response_timeout}s",
                            request=response.request,
                        )
        except httpx.HTTPError as e:
            classification = classify_transport_error(e)
            return TransportOutcome(
                http_status=0,
                transport_error=classification.description,
                raw_body=None,
                attempt=attempt,
            )

        return TransportOutcome(
            http_status=response.status_code,
            transport_error="",
            raw_body=b"".join(chunks),
            attempt=attempt,
        )
