"""Render NetCores API payloads as text for the calling agent.

All functions are pure and deterministic. Every expected field is printed,
with a placeholder when the payload omits it. A payload of the wrong shape
raises ``FormatterError``.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

from modules.netcores.errors import FormatterError

F = TypeVar("F", bound=Callable[..., str])

IP_ICONS = {"ipv4": "🌐", "ipv6": "🌍"}

# Degraded states in success output use WARN_ICON, never ERROR_MARKER.
OK_ICON = "✅"
WARN_ICON = "⚠️"


def _formatter(label: str) -> Callable[[F], F]:
    """Convert shape errors raised while rendering into ``FormatterError``."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> str:
            try:
                return func(*args, **kwargs)
            except FormatterError:
                raise
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise FormatterError(f"Unexpected {label} payload: {e}") from e

        return wrapper  # type: ignore[return-value]

    return decorator


def _mapping(value: Any, label: str) -> Mapping:
    if not isinstance(value, Mapping):
        raise FormatterError(
            f"Unexpected {label} payload: expected an object, got {type(value).__name__}"
        )
    return value


def _sequence(value: Any, label: str) -> Sequence:
    if value is None:
        return []
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        raise FormatterError(
            f"Unexpected {label} payload: expected a list, got {type(value).__name__}"
        )
    return value


def _text(value: Any, placeholder: str) -> str:
    return str(value) if value not in (None, "") else placeholder


def _count(value: Any) -> str:
    return f"{int(value or 0):,}"


def _flag(value: Any) -> str:
    return "true" if value else "false"


def _ip_heading(ip_version: str) -> str:
    return f"**{ip_version.upper()} {IP_ICONS.get(ip_version, '🌍')}:**"


def _date_range(payload: Mapping) -> str:
    date_range = payload.get("date_range") or {}
    start = _text(date_range.get("start"), "N/A")
    end = _text(date_range.get("end"), "N/A")
    return f"{start} to {end}"


def _shell(point: Mapping) -> str:
    shell = point.get("shell_index") or 0
    max_shell = point.get("max_shell_index") or 0
    normalized = float(point.get("normalized_shell_index") or 0.0)
    return f"Shell {shell}/{max_shell} (normalized: {normalized:.3f})"


def _point(point: Mapping) -> str:
    return f"{_text(point.get('date'), 'N/A')}: {_shell(point)}"


def select_tail(points: Sequence, limit: int) -> list:
    """Return the last ``limit`` points in their original order.

    ``limit == 0`` returns every point.
    """
    if limit < 0:
        raise ValueError("limit must not be negative")
    if limit == 0:
        return list(points)
    return list(points[-limit:])


@_formatter("health")
def format_health(payload: Any) -> str:
    payload = _mapping(payload, "health")
    status = payload.get("status")
    data_status = payload.get("data_status")
    database = payload.get("database") or {}

    status_icon = OK_ICON if status == "healthy" else WARN_ICON
    data_icon = "📊" if data_status == "available" else WARN_ICON

    lines = [
        f"🏥 NetCores Health Check {status_icon}",
        "",
        f"**System Status:** {_text(status, 'unknown')}",
        f"**Version:** {_text(payload.get('version'), 'unknown')}",
        f"**Data Status:** {_text(data_status, 'unknown')} {data_icon}",
        "",
        "**Database Health:**",
        f"- Status: {_text(database.get('status'), 'unknown')}",
        f"- Connection: {_text(database.get('connection'), 'unknown')}",
        f"- Tables: {database.get('tables') or 0}",
    ]
    return "\n".join(lines)


@_formatter("data summary")
def format_data_summary(payload: Any) -> str:
    payload = _mapping(payload, "data summary")
    lines = ["📊 NetCores Data Summary", ""]

    if not payload:
        lines.append("No datasets available.")

    for ip_version, data in payload.items():
        data = _mapping(data, f"{ip_version} summary")
        lines.extend([
            _ip_heading(ip_version),
            f"- Snapshots: {data.get('snapshot_count') or 0}",
            f"- Date Range: {_date_range(data)}",
            f"- Total ASNs: {_count(data.get('total_asns'))}",
            f"- Max Shell Index: {data.get('max_shell_index') or 0}",
            "",
        ])

    return "\n".join(lines)


@_formatter("ASN trend")
def format_asn_trend(asn: int, payload: Any, limit: int) -> str:
    """Render one ASN's trend, showing a tail window of ``limit`` points."""
    payload = _mapping(payload, "ASN trend")
    points = _sequence(payload.get("trend_data"), "ASN trend")

    lines = [
        f"📈 ASN {asn} Trend Analysis",
        "",
        f"**IP Version:** {_text(payload.get('ip_version'), 'unknown')}",
        f"**Date Range:** {_date_range(payload)}",
    ]

    if not points:
        lines.append("**No trend data available for this ASN and date range.**")
        return "\n".join(lines) + "\n"

    shown = select_tail(points, limit)
    lines.append(f"**Total Data Points:** {len(points)}")
    if len(shown) < len(points):
        lines.append(f"**Showing:** Most recent {len(shown)} of {len(points)} data points")
        lines.append("*Use limit=0 to see all data*")
    else:
        lines.append(f"**Showing:** All {len(points)} data points")

    lines.extend(["", "**Trend Data:**"])
    lines.extend(f"- {_point(_mapping(p, 'trend point'))}" for p in shown)
    return "\n".join(lines) + "\n"


def _series_for(trend_data: Mapping, asn: int) -> Any:
    # JSON object keys arrive as strings; tolerate integer keys too
    if str(asn) in trend_data:
        return trend_data[str(asn)]
    return trend_data.get(asn)


@_formatter("multiple ASN trend")
def format_multiple_asn_trends(asns: Sequence[int], payload: Any, limit: int) -> str:
    """Render several ASN trends in the caller's ASN order."""
    payload = _mapping(payload, "multiple ASN trend")
    trend_data = _mapping(payload.get("trend_data") or {}, "multiple ASN trend")

    lines = [
        "📊 Multiple ASN Trend Analysis",
        "",
        f"**ASNs:** {', '.join(str(a) for a in asns)}",
        f"**IP Version:** {_text(payload.get('ip_version'), 'unknown')}",
        f"**Date Range:** {_date_range(payload)}",
    ]
    if limit == 0:
        lines.append("**Showing:** All available data points per ASN")
    else:
        lines.append(f"**Showing:** Up to {limit} most recent data points per ASN")
        lines.append("*Use limit=0 to see all data*")
    lines.append("")

    for asn in asns:
        points = _sequence(_series_for(trend_data, asn), f"ASN {asn} trend")
        lines.append(f"**ASN {asn}:**")
        if not points:
            lines.extend(["- No data available", ""])
            continue

        shown = select_tail(points, limit)
        lines.append(f"- Total data points: {len(points)}")
        if len(shown) == 1:
            latest = _mapping(shown[0], "trend point")
            lines.append(f"- Latest ({_text(latest.get('date'), 'N/A')}): {_shell(latest)}")
        else:
            if len(shown) < len(points):
                lines.append(f"- Showing most recent {len(shown)} of {len(points)} points:")
            else:
                lines.append(f"- Showing all {len(points)} points:")
            lines.extend(f"  - {_point(_mapping(p, 'trend point'))}" for p in shown)
        lines.append("")

    return "\n".join(lines)


@_formatter("snapshots")
def format_snapshots(payload: Any) -> str:
    payload = _mapping(payload, "snapshots")
    lines = ["📷 Network Snapshots", ""]

    if not payload:
        lines.append("No snapshots available.")

    for ip_version, snapshots in payload.items():
        snapshots = _sequence(snapshots, f"{ip_version} snapshots")
        lines.append(_ip_heading(ip_version))
        if not snapshots:
            lines.extend(["- No snapshots available", ""])
            continue

        # Snapshots are ordered oldest first
        oldest = _mapping(snapshots[0], "snapshot")
        latest = _mapping(snapshots[-1], "snapshot")
        lines.extend([
            f"- Total snapshots: {len(snapshots)}",
            f"- Latest: {_text(latest.get('date'), 'N/A')}",
            f"- Max shell index: {latest.get('max_shell_index') or 0}",
            f"- Unique ASNs: {_count(latest.get('unique_asns'))}",
            f"- Oldest: {_text(oldest.get('date'), 'N/A')}",
            "",
        ])

    return "\n".join(lines)


@_formatter("refresh")
def format_refresh_results(payload: Any) -> str:
    payload = _mapping(payload, "refresh")
    lines = ["🔄 Data Refresh Results", ""]

    for ip_version, result in payload.items():
        result = _mapping(result, f"{ip_version} refresh")
        lines.append(_ip_heading(ip_version))
        if result.get("success"):
            processed = _sequence(result.get("processed_dates"), "processed dates")
            lines.append(f"{OK_ICON} Refresh completed successfully")
            lines.append(
                f"- Processed dates: {', '.join(str(d) for d in processed) or 'none'}"
            )
        else:
            lines.append(f"{WARN_ICON} Refresh failed")
            lines.append(f"- Error: {_text(result.get('error'), 'Unknown error')}")
        lines.append("")

    return "\n".join(lines)


@_formatter("scheduler status")
def format_scheduler_status(payload: Any) -> str:
    payload = _mapping(payload, "scheduler status")
    running = bool(payload.get("running"))
    enabled = bool(payload.get("enabled"))
    running_icon = "🟢" if running else "🔴"
    enabled_icon = OK_ICON if enabled else "⛔"

    lines = [
        f"⏰ Scheduler Status {running_icon}",
        "",
        f"**Running:** {_flag(running)} {running_icon}",
        f"**Enabled:** {_flag(enabled)} {enabled_icon}",
        f"**Schedule:** {_text(payload.get('schedule'), 'N/A')}",
        f"**Next Run:** {_text(payload.get('next_run'), 'Not scheduled')}",
    ]
    return "\n".join(lines)


@_formatter("update")
def format_update_results(payload: Any) -> str:
    payload = _mapping(payload, "update")
    results = _mapping(payload.get("results") or {}, "update results")

    lines = [
        "🚀 Manual Update Triggered",
        "",
        f"**Triggered:** {_flag(payload.get('triggered'))}",
        f"**Timestamp:** {_text(payload.get('timestamp'), 'N/A')}",
        "",
    ]

    if not results:
        lines.append("**Update Results:** none")
        return "\n".join(lines)

    lines.append("**Update Results:**")
    for ip_version, result in results.items():
        result = _mapping(result, f"{ip_version} update")
        status = f"{OK_ICON} Success" if result.get("success") else f"{WARN_ICON} Failed"
        lines.append(f"- {ip_version.upper()} {IP_ICONS.get(ip_version, '🌍')}: {status}")

    return "\n".join(lines)
