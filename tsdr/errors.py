# =============================================================================
# tsdr/errors.py  -  Error taxonomy for trademark lookups
# =============================================================================
#
# Every failure a tool call can hit is one of these exceptions.  They are
# raised inside the client or the dispatcher and caught at exactly one place: the
# dispatcher (tsdr/trademarks.py), which turns them into a ToolOutcome.
#
# Each exception carries an ErrorKind tag so the outcome can say WHAT went
# wrong without the caller having to parse message text.
# =============================================================================

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    UPSTREAM_AUTH = "upstream_auth"
    UPSTREAM = "upstream"
    TRANSPORT = "transport"
    UNKNOWN_TOOL = "unknown_tool"
    INTERNAL = "internal"


class TsdrError(Exception):
    """Base class for all trademark lookup failures."""

    kind = ErrorKind.INTERNAL


class ConfigurationError(TsdrError):
    """The server is missing configuration required to call upstream."""

    kind = ErrorKind.CONFIGURATION


class UpstreamError(TsdrError):
    """TSDR answered with a non-2xx status (or an unusable body)."""

    kind = ErrorKind.UPSTREAM

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class UpstreamAuthError(UpstreamError):
    """TSDR rejected the request because the API key is missing or unknown."""

    kind = ErrorKind.UPSTREAM_AUTH


class TransportFailure(TsdrError):
    """The request never got an HTTP answer (DNS, reset, timeout...)."""

    kind = ErrorKind.TRANSPORT
