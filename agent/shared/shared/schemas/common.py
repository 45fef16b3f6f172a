"""Common schemas used across services."""

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness response of the module service itself.

    ``upstream`` is the NetCores API base URL the service talks to; it is not
    probed here (use the ``netcores_health_check`` tool for that).
    """

    status: str = "ok"
    service: str = "netcores"
    upstream: str | None = None
