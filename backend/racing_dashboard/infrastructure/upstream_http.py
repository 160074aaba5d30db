"""Upstream HTTP — the shared request and error-mapping path for every external function.

Invariants:
    - Every call sends the capability's shared secret as x-api-key
    - Every call is bounded by an explicit timeout; no call is retried
    - Timeout, network failure, non-2xx status and non-JSON bodies all map to
      UpstreamUnavailableError carrying only a generic client-facing message
    - An unconfigured capability raises UpstreamNotConfiguredError before any IO

Design Decisions:
    - One httpx.AsyncClient shared by all capabilities: created at startup,
      closed at shutdown, injected into each client
    - Status code and response body are logged, never surfaced to the caller
"""

import logging
from typing import Any

import httpx

from racing_dashboard.config import UpstreamEndpoint
from racing_dashboard.core.errors import ErrorContext, UpstreamUnavailableError

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


class UpstreamNotConfiguredError(UpstreamUnavailableError):
    """Capability URL or secret missing from configuration."""


class UpstreamClient:
    """Base for one external capability.

    Subclasses set `failure_message` and `failure_status`, the generic text and
    HTTP status the Gateway returns when this capability fails.
    """

    failure_message = "Upstream service unavailable"
    failure_status = 502

    def __init__(self, http: httpx.AsyncClient, endpoint: UpstreamEndpoint):
        self._http = http
        self.endpoint = endpoint

    @property
    def name(self) -> str:
        return self.endpoint.name

    async def _request(
        self,
        method: str,
        *,
        params: dict[str, str] | None = None,
        json: dict | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Call the capability and return its decoded JSON body."""
        if not self.endpoint.configured:
            raise UpstreamNotConfiguredError(
                self.name, self.failure_message, self.failure_status,
                ErrorContext(debug_info="not configured"),
            )
        try:
            response = await self._http.request(
                method,
                self.endpoint.url,
                params=params,
                json=json,
                headers={API_KEY_HEADER: self.endpoint.api_key},
                timeout=timeout or self.endpoint.timeout_seconds,
            )
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise self._failure(f"timeout: {e!r}") from e
        except httpx.HTTPStatusError as e:
            raise self._failure(
                f"status {e.response.status_code}: {e.response.text[:500]}",
            ) from e
        except httpx.HTTPError as e:
            raise self._failure(f"network: {e!r}") from e
        except ValueError as e:
            raise self._failure(f"invalid JSON body: {e}") from e

    def _failure(self, detail: str) -> UpstreamUnavailableError:
        logger.error(
            f"Upstream call failed: {detail}",
            extra={"upstream": self.name},
        )
        return UpstreamUnavailableError(
            self.name, self.failure_message, self.failure_status,
            ErrorContext(debug_info=detail),
        )
