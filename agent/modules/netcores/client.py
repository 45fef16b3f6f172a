"""NetCores HTTP API client with bounded retry and exponential backoff."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from modules.netcores.errors import APIConnectionError, APIError, APIServerError
from shared.config import Settings

logger = structlog.get_logger()

DEFAULT_API_URL = "https://netcores.fi.uba.ar"
USER_AGENT = "netcores-mcp/1.0.1"
DEFAULT_IP_VERSIONS = ("ipv4", "ipv6")

# Client-side statuses that are still worth another attempt. Every other 4xx
# means the request itself is wrong and fails on the first try.
RETRYABLE_CLIENT_STATUSES = frozenset({408, 429})


def is_retryable_status(status_code: int) -> bool:
    """Return True for statuses a later attempt may succeed on."""
    return status_code >= 500 or status_code in RETRYABLE_CLIENT_STATUSES


def _error_message(response: httpx.Response) -> str:
    """Extract the server's error message, falling back to a generic one."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if value:
                return value if isinstance(value, str) else str(value)

    return f"Request failed with status code {response.status_code}"


@dataclass(frozen=True)
class ConnectionReport:
    """Outcome of ``NetCoresClient.test_connection``."""

    success: bool
    base_url: str
    status: str | None = None
    version: str | None = None
    data_status: str | None = None
    error: str | None = None
    error_kind: str | None = None


class NetCoresClient:
    """Async client for the NetCores k-core analysis API.

    Configuration is fixed at construction. Every call opens its own
    ``httpx.AsyncClient``, so concurrent calls share no mutable state.

    Args:
        base_url: API root; a trailing ``/`` is stripped.
        timeout: Per-attempt timeout in seconds.
        retry_attempts: Total tries per request, including the first.
        retry_delay: Base backoff in seconds. The wait after failed attempt
            ``n`` is ``retry_delay * 2 ** (n - 1)``.
        transport: Optional httpx transport, mainly for tests.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        *,
        timeout: float = 30.0,
        retry_attempts: int = 3,
        retry_delay: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if retry_attempts < 1:
            raise ValueError("retry_attempts must be at least 1")
        if retry_delay < 0:
            raise ValueError("retry_delay must not be negative")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay
        self._transport = transport
        self._headers = {
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    @classmethod
    def from_settings(
        cls, settings: Settings, base_url: str | None = None, **kwargs: Any
    ) -> NetCoresClient:
        """Build a client from ``Settings``; ``base_url`` overrides the URL."""
        return cls(
            base_url or settings.netcores_api_url,
            timeout=settings.netcores_timeout,
            retry_attempts=settings.netcores_retry_attempts,
            retry_delay=settings.netcores_retry_delay_ms / 1000,
            **kwargs,
        )

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number ``attempt`` (1-based)."""
        return self.retry_delay * 2 ** (attempt - 1)

    async def request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        json_body: dict | None = None,
    ) -> Any:
        """Send a request, retrying transient failures.

        Returns the decoded JSON body unmodified.

        Raises:
            APIConnectionError: No response after the last attempt.
            APIServerError: Error status (immediately for non-retryable
                statuses, otherwise after the last attempt).
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        attempt = 1
        while True:
            try:
                return await self._send(method, path, params or None, json_body)
            except APIError as e:
                if not e.retryable or attempt >= self.retry_attempts:
                    logger.warning(
                        "netcores_request_failed",
                        method=method,
                        path=path,
                        attempt=attempt,
                        status=e.status_code,
                        retryable=e.retryable,
                        error=e.message,
                    )
                    raise
                delay = self.backoff_delay(attempt)
                logger.info(
                    "netcores_request_retry",
                    method=method,
                    path=path,
                    attempt=attempt,
                    delay=delay,
                    status=e.status_code,
                    error=e.message,
                )
                await asyncio.sleep(delay)
                attempt += 1

    async def _send(
        self,
        method: str,
        path: str,
        params: dict | None,
        json_body: dict | None,
    ) -> Any:
        """One attempt: send, classify failures, decode the body."""
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self._headers,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                resp = await client.request(method, path, params=params, json=json_body)
        except httpx.TimeoutException as e:
            raise APIConnectionError(f"Request timed out after {self.timeout:g}s") from e
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            # Malformed base URL or one without an http(s) scheme
            raise APIConnectionError(str(e), retryable=False) from e
        except httpx.RequestError as e:
            raise APIConnectionError(str(e) or type(e).__name__) from e

        if resp.is_error:
            raise APIServerError(
                _error_message(resp),
                status_code=resp.status_code,
                retryable=is_retryable_status(resp.status_code),
            )

        try:
            return resp.json()
        except ValueError as e:
            raise APIServerError(
                "Response body is not valid JSON",
                status_code=resp.status_code,
            ) from e

    async def health_check(self) -> dict:
        """System and data status."""
        return await self.request("GET", "/api/health")

    async def get_data_summary(self) -> dict:
        """Per-IP-version dataset summary."""
        return await self.request("GET", "/api/summary")

    async def get_asn_trend(
        self,
        asn: int,
        ip_version: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> dict:
        """Shell index time series for one ASN."""
        return await self.request(
            "GET",
            f"/api/trends/{asn}",
            params={
                "ip_version": ip_version,
                "start_date": start_date,
                "end_date": end_date,
            },
        )

    async def get_multiple_asn_trends(
        self,
        asns: list[int],
        ip_version: str = "ipv4",
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> dict:
        """Shell index time series for several ASNs in one call."""
        body: dict[str, Any] = {"asns": list(asns), "ip_version": ip_version or "ipv4"}
        if start_date:
            body["start_date"] = start_date
        if end_date:
            body["end_date"] = end_date
        return await self.request("POST", "/api/trends", json_body=body)

    async def get_snapshots(self, ip_version: str | None = None) -> dict:
        """Available snapshots, optionally for one IP version."""
        return await self.request(
            "GET", "/api/snapshots", params={"ip_version": ip_version}
        )

    async def refresh_data(self, ip_versions: list[str] | None = None) -> dict:
        """Trigger ingestion of new CAIDA data."""
        versions = list(ip_versions) if ip_versions else list(DEFAULT_IP_VERSIONS)
        return await self.request(
            "POST", "/api/refresh", json_body={"ip_versions": versions}
        )

    async def get_scheduler_status(self) -> dict:
        return await self.request("GET", "/api/scheduler/status")

    async def trigger_update(self) -> dict:
        return await self.request("POST", "/api/scheduler/update")

    async def test_connection(self) -> ConnectionReport:
        """Probe ``/api/health``. Never raises; failures land in the report."""
        try:
            health = await self.health_check()
        except APIError as e:
            return ConnectionReport(
                success=False,
                base_url=self.base_url,
                error=str(e),
                error_kind=e.kind,
            )

        if not isinstance(health, dict):
            return ConnectionReport(
                success=False,
                base_url=self.base_url,
                error="Unexpected health payload",
                error_kind="formatter",
            )

        return ConnectionReport(
            success=True,
            base_url=self.base_url,
            status=health.get("status"),
            version=health.get("version"),
            data_status=health.get("data_status"),
        )
