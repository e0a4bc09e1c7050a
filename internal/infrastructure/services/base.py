"""
Base client for calls to other internal services.

One GET per lookup with an explicit timeout and no retries. A per-client
circuit breaker fails fast while the remote service keeps erroring.
"""
import time
from typing import Any, Optional

import httpx
from circuitbreaker import CircuitBreaker, CircuitBreakerError

from internal.domain.errors import UpstreamError
from internal.domain.value_objects import BearerToken
from internal.infrastructure.metrics import UPSTREAM_REQUESTS, UPSTREAM_REQUEST_DURATION
from pkg.logger.logger import get_logger


logger = get_logger(__name__)


# Defaults, overridden from Settings in the entry points
DEFAULT_TIMEOUT = 5.0
FAILURE_THRESHOLD = 5
RECOVERY_TIMEOUT = 30


class InternalServiceClient:
    """
    JSON-over-HTTP client for another internal service.

    Subclasses set ``service_name`` and turn failures into their own
    UpstreamError subclass via ``_lookup_error``.
    """

    service_name = "internal-service"

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        failure_threshold: int = FAILURE_THRESHOLD,
        recovery_timeout: int = RECOVERY_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Root URL of the remote service.
            timeout: Per-request timeout in seconds.
            failure_threshold: Consecutive failures before the circuit opens.
            recovery_timeout: Seconds the circuit stays open.
            transport: Optional httpx transport (used by tests).
        """
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )
        self._breaker = CircuitBreaker(
            failure_threshold=failure_threshold,
            recovery_timeout=recovery_timeout,
            expected_exception=httpx.HTTPError,
            name=self.service_name,
        )
        self._send = self._breaker(self._send_once)

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def _send_once(self, path: str, headers: dict[str, str]) -> httpx.Response:
        response = await self._client.get(path, headers=headers)
        # Only 5xx counts against the breaker; 4xx depends on the caller
        if response.is_server_error:
            response.raise_for_status()
        return response

    async def _get_json(
        self,
        path: str,
        entity_id: int,
        token: Optional[BearerToken],
    ) -> Optional[dict[str, Any]]:
        """
        GET a JSON object.

        Args:
            path: Path relative to the base URL.
            entity_id: Identifier being looked up, for errors and logs.
            token: Bearer token to forward, if any.

        Returns:
            Decoded body, or None on 404.

        Raises:
            UpstreamError: On transport failure, a non-404 error status or a malformed body.
        """
        headers = token.as_header() if token else {}
        start_time = time.time()

        try:
            response = await self._send(path, headers)
        except CircuitBreakerError as e:
            UPSTREAM_REQUESTS.labels(service=self.service_name, outcome="circuit_open").inc()
            logger.warning("Circuit open, call rejected", service=self.service_name)
            raise self._lookup_error(entity_id, str(e)) from e
        except httpx.HTTPError as e:
            UPSTREAM_REQUESTS.labels(service=self.service_name, outcome="error").inc()
            logger.error(
                "Upstream call failed",
                service=self.service_name,
                path=path,
                error=str(e),
            )
            raise self._lookup_error(entity_id, str(e)) from e
        finally:
            UPSTREAM_REQUEST_DURATION.labels(service=self.service_name).observe(
                time.time() - start_time
            )

        if response.status_code == httpx.codes.NOT_FOUND:
            UPSTREAM_REQUESTS.labels(service=self.service_name, outcome="not_found").inc()
            return None

        if not response.is_success:
            UPSTREAM_REQUESTS.labels(service=self.service_name, outcome="rejected").inc()
            logger.warning(
                "Upstream rejected call",
                service=self.service_name,
                path=path,
                status_code=response.status_code,
            )
            raise self._lookup_error(entity_id, f"unexpected status {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            UPSTREAM_REQUESTS.labels(service=self.service_name, outcome="error").inc()
            raise self._lookup_error(entity_id, "invalid JSON body") from e

        if not isinstance(body, dict):
            UPSTREAM_REQUESTS.labels(service=self.service_name, outcome="error").inc()
            raise self._lookup_error(entity_id, "expected a JSON object")

        UPSTREAM_REQUESTS.labels(service=self.service_name, outcome="ok").inc()
        return body

    def _lookup_error(self, entity_id: int, reason: str) -> UpstreamError:
        return UpstreamError(self.service_name, reason)
