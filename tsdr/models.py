# =============================================================================
# tsdr/models.py  -  Data Models (the "nouns" of a tool call)
# =============================================================================
#
# Every entity here lives for exactly one tool invocation.  Nothing is cached
# or shared between calls.
#
#   ToolRequest      what the caller asked for (tool name + raw arguments)
#   UpstreamRequest  the single HTTP request we are about to send to TSDR
#   UpstreamResponse what TSDR sent back (status + body text)
#   ToolOutcome      tagged result: success text, or error kind + detail
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from tsdr.errors import ErrorKind


class ResponseFormat(str, Enum):
    JSON = "json"
    XML = "xml"


class NumberKind(str, Enum):
    """Which identifier a case-status lookup is keyed on."""

    SERIAL = "sn"
    REGISTRATION = "rn"


@dataclass
class ToolRequest:
    tool_name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UpstreamRequest:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class UpstreamResponse:
    status_code: int
    reason_phrase: str
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


# -----------------------------------------------------------------------------
# ToolOutcome - the internal result of a dispatch
# -----------------------------------------------------------------------------
# Success and failure are distinguished by `ok` and `error_kind`.  Only the
# MCP adapter collapses an outcome into its plain `text`, because the MCP
# tool contract is "one text value per call".
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolOutcome:
    ok: bool
    text: str
    error_kind: Optional[ErrorKind] = None
    detail: Optional[str] = None

    @classmethod
    def success(cls, text: str) -> "ToolOutcome":
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, kind: ErrorKind, text: str, detail: Optional[str] = None) -> "ToolOutcome":
        return cls(ok=False, text=text, error_kind=kind, detail=detail)
