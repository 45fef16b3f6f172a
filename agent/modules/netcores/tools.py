"""NetCores tool implementations.

Each handler takes already-validated arguments, calls the API through
``NetCoresClient`` and returns formatted text. Handlers let errors
propagate; the dispatcher turns them into failure text.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

import structlog

from modules.netcores import formatting
from modules.netcores.client import NetCoresClient

logger = structlog.get_logger()

ToolHandler = Callable[..., Awaitable[str]]


class NetCoresTools:
    """Tool implementations for NetCores network analysis."""

    def __init__(self, client: NetCoresClient):
        self.client = client

    async def health_check(self) -> str:
        return formatting.format_health(await self.client.health_check())

    async def data_summary(self) -> str:
        return formatting.format_data_summary(await self.client.get_data_summary())

    async def asn_trend(
        self,
        asn: int,
        ip_version: str = "ipv4",
        start_date: str | None = None,
        end_date: str | None = None,
        limit: int = 20,
    ) -> str:
        """Trend for one ASN, tail-limited to ``limit`` points (0 = all)."""
        payload = await self.client.get_asn_trend(
            asn, ip_version=ip_version, start_date=start_date, end_date=end_date
        )
        return formatting.format_asn_trend(asn, payload, limit)

    async def multiple_asn_trends(
        self,
        asns: list[int],
        ip_version: str = "ipv4",
        start_date: str | None = None,
        end_date: str | None = None,
        limit: int = 10,
    ) -> str:
        """Trends for several ASNs in one request, rendered in ``asns`` order."""
        payload = await self.client.get_multiple_asn_trends(
            asns, ip_version=ip_version, start_date=start_date, end_date=end_date
        )
        return formatting.format_multiple_asn_trends(asns, payload, limit)

    async def snapshots(self, ip_version: str | None = None) -> str:
        return formatting.format_snapshots(await self.client.get_snapshots(ip_version))

    async def refresh_data(self, ip_versions: list[str] | None = None) -> str:
        logger.info("netcores_refresh_requested", ip_versions=ip_versions)
        payload = await self.client.refresh_data(ip_versions)
        return formatting.format_refresh_results(payload)

    async def scheduler_status(self) -> str:
        return formatting.format_scheduler_status(
            await self.client.get_scheduler_status()
        )

    async def trigger_update(self) -> str:
        logger.info("netcores_update_triggered")
        return formatting.format_update_results(await self.client.trigger_update())

    def handlers(self) -> dict[str, ToolHandler]:
        """Map each manifest tool name to its handler."""
        return {
            "netcores_health_check": self.health_check,
            "netcores_data_summary": self.data_summary,
            "netcores_asn_trend": self.asn_trend,
            "netcores_multiple_asn_trends": self.multiple_asn_trends,
            "netcores_snapshots": self.snapshots,
            "netcores_refresh_data": self.refresh_data,
            "netcores_scheduler_status": self.scheduler_status,
            "netcores_trigger_update": self.trigger_update,
        }
