"""Canned NetCores API payloads and a recording fake of the API."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

import httpx

BASE_URL = "http://netcores.test"

HEALTH_RESPONSE = {
    "status": "healthy",
    "version": "2.3.0",
    "data_status": "available",
    "database": {"status": "ok", "connection": "active", "tables": 4},
}

HEALTH_RESPONSE_SPARSE = {"status": "degraded"}

SUMMARY_RESPONSE = {
    "ipv4": {
        "snapshot_count": 312,
        "date_range": {"start": "1998-01-01", "end": "2024-01-01"},
        "total_asns": 84213,
        "max_shell_index": 98,
    },
    "ipv6": {
        "snapshot_count": 150,
        "total_asns": 31017,
        "max_shell_index": 61,
    },
}


def make_trend_points(count: int, start: date = date(1998, 1, 1)) -> list[dict]:
    """``count`` monthly points in ascending date order."""
    points = []
    for i in range(count):
        points.append({
            "date": (start + timedelta(days=30 * i)).isoformat(),
            "shell_index": 40 + i % 50,
            "max_shell_index": 98,
            "normalized_shell_index": (40 + i % 50) / 98,
        })
    return points


TREND_POINTS_312 = make_trend_points(312)

TREND_RESPONSE_312 = {
    "asn": 15169,
    "ip_version": "ipv4",
    "date_range": {"start": TREND_POINTS_312[0]["date"], "end": TREND_POINTS_312[-1]["date"]},
    "trend_data": TREND_POINTS_312,
}

TREND_RESPONSE_EMPTY = {
    "asn": 64512,
    "ip_version": "ipv6",
    "trend_data": [],
}

# Keys deliberately not in request order
MULTI_TREND_RESPONSE = {
    "ip_version": "ipv4",
    "date_range": {"start": "2023-01-01", "end": "2023-06-01"},
    "trend_data": {
        "3356": make_trend_points(3, start=date(2023, 1, 1)),
        "15169": make_trend_points(6, start=date(2023, 1, 1)),
        "32934": make_trend_points(1, start=date(2023, 6, 1)),
    },
}

SNAPSHOTS_RESPONSE = {
    "ipv4": [
        {"date": "2023-01-01", "max_shell_index": 95, "unique_asns": 74000},
        {"date": "2024-01-01", "max_shell_index": 98, "unique_asns": 76102},
    ],
    "ipv6": [],
}

REFRESH_RESPONSE = {
    "ipv4": {"success": True, "processed_dates": ["2024-02-01", "2024-03-01"]},
    "ipv6": {"success": False, "error": "CAIDA archive unavailable"},
}

SCHEDULER_RESPONSE = {
    "running": True,
    "enabled": True,
    "schedule": "monthly on day 2 at 03:00",
    "next_run": "2024-04-02T03:00:00",
}

UPDATE_RESPONSE = {
    "triggered": True,
    "timestamp": "2024-03-15T10:00:00",
    "results": {
        "ipv4": {"success": True},
        "ipv6": {"success": False},
    },
}


class FakeNetCoresAPI:
    """Handler for ``httpx.MockTransport`` that serves canned routes.

    Every request is recorded in ``requests``. Unknown routes answer 404.
    A route may instead raise an exception (e.g. ``httpx.ConnectError``) or
    cycle through several responses.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[Any]] = {}

    def add(self, method: str, path: str, json: Any = None, status: int = 200) -> None:
        self._routes.setdefault((method, path), []).append((status, json))

    def fail(self, method: str, path: str, exc: Exception) -> None:
        self._routes.setdefault((method, path), []).append(exc)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"detail": "Not Found"})

        # The last entry repeats once earlier ones are used up
        entry = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(entry, Exception):
            raise entry
        status, body = entry
        return httpx.Response(status, json=body)
