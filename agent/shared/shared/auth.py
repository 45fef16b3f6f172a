"""Bearer-token guard for the NetCores module service.

The orchestrator calling ``/manifest`` and ``/execute`` must send
``Authorization: Bearer <SERVICE_AUTH_TOKEN>``.  When no token is configured
the guard is a no-op, which is what local runs and the test suite rely on.

Usage::

    from shared.auth import require_service_auth

    @app.post("/execute")
    async def execute(call: ToolCall, _=Depends(require_service_auth)):
        ...
"""

from __future__ import annotations

import hmac

import structlog
from fastapi import HTTPException, Request

from shared.config import get_settings

logger = structlog.get_logger()

_BEARER_PREFIX = "Bearer "


async def require_service_auth(request: Request) -> None:
    """FastAPI dependency that validates the service auth token.

    Raises 401 if the token is missing or does not match.
    """
    expected = get_settings().service_auth_token
    if not expected:
        logger.debug("service_auth_disabled", path=request.url.path)
        return

    auth_header = request.headers.get("authorization", "")
    if not auth_header.startswith(_BEARER_PREFIX):
        raise HTTPException(status_code=401, detail="Missing service auth token")

    token = auth_header[len(_BEARER_PREFIX):]
    if not hmac.compare_digest(token, expected):
        logger.warning(
            "service_auth_failed",
            path=request.url.path,
            remote=request.client.host if request.client else "unknown",
        )
        raise HTTPException(status_code=401, detail="Invalid service auth token")
