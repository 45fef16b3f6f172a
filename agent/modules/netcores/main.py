"""NetCores module: FastAPI service."""

from __future__ import annotations

import structlog
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from modules.netcores.client import NetCoresClient
from modules.netcores.dispatcher import Dispatcher
from modules.netcores.manifest import MANIFEST
from shared.auth import require_service_auth
from shared.config import get_settings
from shared.log_config import configure_logging
from shared.schemas.common import HealthResponse
from shared.schemas.tools import ModuleManifest, ToolCall, ToolResult

logger = structlog.get_logger()
app = FastAPI(title="NetCores Module", version=MANIFEST.version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

dispatcher: Dispatcher | None = None


@app.on_event("startup")
async def startup():
    global dispatcher
    settings = get_settings()
    configure_logging(settings.log_level)

    client = NetCoresClient.from_settings(settings)
    dispatcher = Dispatcher.for_client(client)
    logger.info(
        "netcores_module_ready",
        api_url=client.base_url,
        tools=len(dispatcher.registry),
    )


@app.get("/manifest", response_model=ModuleManifest)
async def manifest(_=Depends(require_service_auth)):
    """Return the module manifest."""
    return MANIFEST


@app.post("/execute", response_model=ToolResult)
async def execute(call: ToolCall, _=Depends(require_service_auth)):
    """Execute a tool call. Failures are reported in the body, never as 5xx."""
    if dispatcher is None:
        return ToolResult(tool_name=call.tool_name, success=False, error="Module not ready")

    outcome = await dispatcher.run(call.tool_name, call.arguments)
    if outcome.success:
        return ToolResult(tool_name=call.tool_name, success=True, result=outcome.text)
    return ToolResult(
        tool_name=call.tool_name,
        success=False,
        result=outcome.text,
        error=outcome.text,
    )


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok", upstream=get_settings().netcores_api_url)
