"""Error taxonomy for the NetCores tools.

Every failure a tool call can end in is a ``NetCoresError`` subclass with a
stable ``kind`` string, so callers can branch on the kind instead of parsing
messages.
"""

from __future__ import annotations

# Prefix of every failure text the dispatcher returns. Successful output
# never contains it.
ERROR_MARKER = "❌"


class NetCoresError(Exception):
    """Base class for all NetCores tool failures."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownToolError(NetCoresError):
    """The requested tool name is not in the registry."""

    kind = "unknown_tool"

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class InvalidArgumentsError(NetCoresError):
    """Tool arguments do not match the tool's declared parameters."""

    kind = "invalid_arguments"


class FormatterError(NetCoresError):
    """A remote payload did not have the shape the formatter expects."""

    kind = "formatter"


class APIError(NetCoresError):
    """A call to the NetCores API failed.

    ``retryable`` tells the client whether another attempt can help.
    """

    kind = "api"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.retryable = retryable

    def __str__(self) -> str:
        return f"NetCores API Error: {self.message}"


class APIConnectionError(APIError):
    """No response reached us: DNS, refused connection, timeout."""

    kind = "connection"

    def __init__(self, message: str, retryable: bool = True):
        super().__init__(message, status_code=None, retryable=retryable)

    def __str__(self) -> str:
        return f"NetCores API Connection Error: {self.message}"


class APIServerError(APIError):
    """The API answered with an error status or an undecodable body."""

    kind = "server"

    def __str__(self) -> str:
        if self.status_code is None:
            return f"NetCores API Error: {self.message}"
        return f"NetCores API Error ({self.status_code}): {self.message}"
