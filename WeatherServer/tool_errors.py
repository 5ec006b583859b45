"""Errors that cross the tool boundary, each tied to a JSON-RPC error code."""
from mcp.types import INVALID_PARAMS, METHOD_NOT_FOUND


class ToolError(Exception):
    """Base class for failures reported to the caller as protocol errors."""
    code: int = INVALID_PARAMS


class InvalidParamsError(ToolError):
    """Tool arguments are missing or malformed."""
    code = INVALID_PARAMS


class UnknownToolError(ToolError):
    """The requested tool name isn't served by this process."""
    code = METHOD_NOT_FOUND
