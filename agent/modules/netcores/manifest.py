"""NetCores module manifest: tool definitions."""

from shared.schemas.tools import (
    ModuleManifest,
    ToolDefinition,
    ToolParameter,
    ToolParameterItems,
)

IP_VERSIONS = ("ipv4", "ipv6")
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def _ip_version_param(description: str = "IP version (ipv4 or ipv6)", default: str | None = "ipv4") -> ToolParameter:
    return ToolParameter(
        name="ip_version",
        type="string",
        description=description,
        required=False,
        enum=IP_VERSIONS,
        default=default,
    )


def _date_param(name: str, label: str) -> ToolParameter:
    return ToolParameter(
        name=name,
        type="string",
        description=f"{label} date in YYYY-MM-DD format",
        required=False,
        pattern=DATE_PATTERN,
    )


def _limit_param(default: int, per_asn: bool = False) -> ToolParameter:
    scope = " per ASN" if per_asn else ""
    return ToolParameter(
        name="limit",
        type="integer",
        description=(
            f"Maximum number of most recent data points to display{scope} "
            f"(default: {default}, use 0 for all data)"
        ),
        required=False,
        minimum=0,
        maximum=1000,
        default=default,
    )


MANIFEST = ModuleManifest(
    module_name="netcores",
    description=(
        "Analyze Autonomous System k-core decomposition data from the NetCores "
        "service: system health, dataset summaries, per-ASN shell index trends, "
        "snapshots, and the data refresh scheduler."
    ),
    version="1.0.1",
    tools=[
        ToolDefinition(
            name="netcores_health_check",
            description="Check the health and status of the NetCores system",
        ),
        ToolDefinition(
            name="netcores_data_summary",
            description="Get summary of available network data across IP versions",
        ),
        ToolDefinition(
            name="netcores_asn_trend",
            description=(
                "Analyze k-core shell index trends for a specific ASN over time. "
                "Example: 'How has AS15169 evolved in the IPv4 k-core?'"
            ),
            parameters=(
                ToolParameter(
                    name="asn",
                    type="integer",
                    description="ASN number to analyze",
                    minimum=0,
                ),
                _ip_version_param(),
                _date_param("start_date", "Start"),
                _date_param("end_date", "End"),
                _limit_param(20),
            ),
        ),
        ToolDefinition(
            name="netcores_multiple_asn_trends",
            description=(
                "Compare k-core shell index trends for multiple ASNs over time. "
                "Example: 'Compare Google (15169) and Meta (32934).'"
            ),
            parameters=(
                ToolParameter(
                    name="asns",
                    type="array",
                    description="List of ASN numbers to analyze",
                    items=ToolParameterItems(type="integer"),
                    min_items=1,
                    max_items=10,
                ),
                _ip_version_param(),
                _date_param("start_date", "Start"),
                _date_param("end_date", "End"),
                _limit_param(10, per_asn=True),
            ),
        ),
        ToolDefinition(
            name="netcores_snapshots",
            description="Get information about available network snapshots",
            parameters=(
                _ip_version_param(
                    "IP version to filter by (ipv4, ipv6, or omit for all)",
                    default=None,
                ),
            ),
        ),
        ToolDefinition(
            name="netcores_refresh_data",
            description="Trigger data refresh from CAIDA sources",
            parameters=(
                ToolParameter(
                    name="ip_versions",
                    type="array",
                    description="IP versions to refresh",
                    required=False,
                    items=ToolParameterItems(type="string", enum=IP_VERSIONS),
                    min_items=1,
                    default=list(IP_VERSIONS),
                ),
            ),
        ),
        ToolDefinition(
            name="netcores_scheduler_status",
            description="Check the status of the automatic data update scheduler",
        ),
        ToolDefinition(
            name="netcores_trigger_update",
            description="Manually trigger a scheduled data update check",
        ),
    ],
)
