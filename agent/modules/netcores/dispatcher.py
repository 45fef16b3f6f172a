"""Single entry point for tool calls: look up, validate, run, normalize.

``Dispatcher.execute`` always returns one text block. Failures of any kind
come back as text starting with ``ERROR_MARKER``; no exception escapes.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import structlog

from modules.netcores.client import NetCoresClient
from modules.netcores.errors import (
    ERROR_MARKER,
    InvalidArgumentsError,
    NetCoresError,
    UnknownToolError,
)
from modules.netcores.registry import ToolRegistry, default_registry
from modules.netcores.tools import NetCoresTools, ToolHandler
from modules.netcores.validation import build_argument_model, validate_arguments

logger = structlog.get_logger()


@dataclass(frozen=True)
class ToolOutcome:
    """Result of one tool invocation.

    ``error_kind`` is None on success, else the failing error's ``kind``.
    """

    tool_name: str
    success: bool
    text: str
    error_kind: str | None = None


def failure_text(tool_name: str, error: Exception) -> str:
    """Render any failure as marker-prefixed text."""
    if isinstance(error, UnknownToolError):
        return f"{ERROR_MARKER} {error.message}"
    if isinstance(error, InvalidArgumentsError):
        return f"{ERROR_MARKER} Invalid arguments for {tool_name}: {error.message}"
    message = str(error) or type(error).__name__
    return f"{ERROR_MARKER} Error executing {tool_name}: {message}"


class Dispatcher:
    """Routes tool calls to handlers and turns every outcome into text."""

    def __init__(self, registry: ToolRegistry, handlers: Mapping[str, ToolHandler]):
        missing = [name for name in registry.names() if name not in handlers]
        if missing:
            raise ValueError(f"No handler bound for tools: {', '.join(missing)}")

        self.registry = registry
        self._handlers = dict(handlers)
        self._models = {d.name: build_argument_model(d) for d in registry}

    @classmethod
    def for_client(
        cls, client: NetCoresClient, registry: ToolRegistry | None = None
    ) -> Dispatcher:
        """Dispatcher over the NetCores tools backed by ``client``."""
        tools = NetCoresTools(client)
        return cls(registry or default_registry(), tools.handlers())

    async def execute(self, tool_name: str, arguments: Any = None) -> str:
        """Run a tool and return its text, success or failure."""
        outcome = await self.run(tool_name, arguments)
        return outcome.text

    async def run(self, tool_name: str, arguments: Any = None) -> ToolOutcome:
        """Run a tool and return the tagged outcome."""
        started = time.perf_counter()
        try:
            if self.registry.find(tool_name) is None:
                raise UnknownToolError(tool_name)
            kwargs = validate_arguments(self._models[tool_name], arguments)
            text = await self._handlers[tool_name](**kwargs)
        except NetCoresError as e:
            logger.warning(
                "tool_failed",
                tool=tool_name,
                kind=e.kind,
                error=str(e),
                duration_ms=_elapsed_ms(started),
            )
            return ToolOutcome(tool_name, False, failure_text(tool_name, e), e.kind)
        except Exception as e:
            logger.error(
                "tool_execution_error",
                tool=tool_name,
                error=str(e),
                duration_ms=_elapsed_ms(started),
                exc_info=True,
            )
            return ToolOutcome(tool_name, False, failure_text(tool_name, e), "internal")

        logger.info("tool_executed", tool=tool_name, duration_ms=_elapsed_ms(started))
        return ToolOutcome(tool_name, True, text)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 1)
