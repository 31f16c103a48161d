# =============================================================================
# core/errors.py  -  Exception hierarchy
# =============================================================================
#
# Every failure the server can report derives from BlinkoError.  Nothing here
# is caught and downgraded inside core/; the tools/ layer hands each error to
# the MCP host as a failed tool call.
# =============================================================================

from typing import Optional


class BlinkoError(Exception):
    """Base error for everything raised by this package."""
    pass


class ConfigurationError(BlinkoError):
    """Domain or API key missing, or a setting could not be parsed."""
    pass


class ValidationError(BlinkoError):
    """A tool argument is missing or malformed.  No request was sent."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class RemoteError(BlinkoError):
    """The Blinko service answered with a non-success status (or not at all).

    ``status`` is None when the request never got a response, e.g. the
    connection was refused.
    """

    def __init__(self, status: Optional[int], body: str):
        self.status = status
        self.body = body
        if status is None:
            message = f"request failed: {body}"
        else:
            message = f"request failed with status {status}: {body}"
        super().__init__(message)


class UnknownToolError(BlinkoError):
    """The requested tool name is not in the catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class OperationFailedError(BlinkoError):
    """The service acknowledged the request but reported failure."""
    pass
