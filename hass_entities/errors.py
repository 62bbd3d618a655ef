"""Error types raised by the server and their MCP error codes."""
from typing import Any, Optional

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, ErrorData


class HassMcpError(Exception):
    """Base class for errors reported back to the calling agent."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str, data: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.data = data

    def to_error_data(self) -> ErrorData:
        """Convert the error into the JSON-RPC error payload."""
        return ErrorData(code=self.code, message=self.message, data=self.data)


class ConfigurationError(HassMcpError):
    """A required environment value is missing."""


class BackendError(HassMcpError):
    """Home Assistant answered with a non-2xx status or could not be reached."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message, data={"status": status} if status is not None else None)
        self.status = status


class ParseError(HassMcpError):
    """The Home Assistant response body did not have the expected shape."""


class PromptNotFound(HassMcpError):
    """No prompt is registered under the requested name."""

    code = INVALID_PARAMS

    def __init__(self, name: str):
        super().__init__("prompt_not_found", data={"name": name})
        self.name = name


class MissingArgument(HassMcpError):
    """A required prompt argument was not supplied."""

    code = INVALID_PARAMS

    def __init__(self, argument: str):
        super().__init__(f"Required argument '{argument}' missing")
        self.argument = argument


class UnknownTool(HassMcpError):
    """No tool is served under the requested name."""

    code = INVALID_PARAMS

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}", data={"name": name})
        self.name = name


class InvalidToolArguments(HassMcpError):
    """The tool arguments do not match the tool parameters."""

    code = INVALID_PARAMS
