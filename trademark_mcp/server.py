# =============================================================================
# trademark_mcp/server.py  -  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the five USPTO trademark lookups as MCP tools.  Each tool is a
#   thin wrapper around TrademarkDispatcher.dispatch_text() in tsdr/trademarks.py:
#   it logs the call, dispatches, logs the answer and returns the text.
#
# HOW IT WORKS (the flow):
#   1. An MCP client (Claude Desktop, an agent framework...) calls a tool
#      by name, e.g. "trademark_search_by_serial"
#   2. FastMCP routes the call to the decorated function below
#   3. The function hands the raw arguments to the dispatcher, which
#      validates them, checks the API key and talks to TSDR
#   4. Whatever happened, the client gets ONE text value back
#
# ARGUMENT VALIDATION:
#   The parameters are plain `str`.  Length and enum checks happen in
#   tsdr/validation.py, and a bad serial number comes back as a text
#   result, not as a protocol-level error.
#
# RUNNING THIS SERVER:
#   a) stdio (for MCP hosts):   trademark-mcp-server
#   b) HTTP (for deployment):   trademark-mcp-server-http
#   c) module:                  python -m trademark_mcp.server
# =============================================================================

import logging
import sys
from typing import Annotated, Optional

from fastmcp import FastMCP
from pydantic import Field

from tsdr.config import SERVER_NAME, SERVER_VERSION, Settings, load_settings
from tsdr.models import ToolRequest
from tsdr.trademarks import TrademarkDispatcher
from tsdr.validation import FORMAT, REGISTRATION_NUMBER, SERIAL_NUMBER

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR.  In stdio mode STDOUT carries the MCP JSON-RPC stream,
# and a single stray log line there would corrupt it.
#
# ANSI colours in the terminal:
#   CYAN    incoming tool calls with their arguments
#   GREEN   tool responses
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_RESET = "\033[0m"

_RESPONSE_PREVIEW_CHARS = 500

logger = logging.getLogger("trademark_mcp")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_response(tool_name: str, result: str) -> str:
    """Log the (truncated) tool response in GREEN, then return it."""
    preview = result if len(result) <= _RESPONSE_PREVIEW_CHARS else result[:_RESPONSE_PREVIEW_CHARS] + "..."
    logger.info(f"{_GREEN}  ← {tool_name} response: {preview!r}{_RESET}")
    return result


SERVER_INSTRUCTIONS = """
This MCP server provides tools for searching and retrieving USPTO trademark information using the TSDR API.

Available tools:
- trademark_search_by_serial: Case status data (JSON or XML) by 8-digit serial number
- trademark_search_by_registration: Case status data (JSON or XML) by 7-8 digit registration number
- trademark_status: Status report (HTML page title and link) for a serial number
- trademark_image: Trademark image URL for a serial number
- trademark_documents: Document bundle (PDF) URL for a serial number

The server uses the USPTO TSDR (Trademark Status & Document Retrieval) API to provide real-time trademark data.
A USPTO API key (USPTO_API_KEY) is required.
Rate limits: 60 requests per minute for general API calls, 4 requests per minute for PDF/ZIP downloads.
"""

SerialNumber = Annotated[str, Field(description=SERIAL_NUMBER.description)]
RegistrationNumber = Annotated[str, Field(description=REGISTRATION_NUMBER.description)]
# The enum is advertised only; out-of-range values still reach the validator.
Format = Annotated[
    str,
    Field(description=FORMAT.description, json_schema_extra={"enum": list(FORMAT.choices)}),
]


def _annotations(title: str) -> dict:
    return {"title": title, "readOnlyHint": True, "openWorldHint": True}


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
# The dispatcher (and through it the Settings with the API key) is injected
# here.  The tool functions close over it; nothing reads the environment
# after startup.
# =============================================================================
def create_server(
    settings: Optional[Settings] = None,
    dispatcher: Optional[TrademarkDispatcher] = None,
) -> FastMCP:
    settings = settings or load_settings()
    dispatcher = dispatcher or TrademarkDispatcher(settings)
    specs = dispatcher.registry

    mcp = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS, version=SERVER_VERSION)

    async def _call(tool_name: str, **arguments) -> str:
        _log_request(tool_name, **arguments)
        text = await dispatcher.dispatch_text(ToolRequest(tool_name, arguments))
        return _log_response(tool_name, text)

    # -------------------------------------------------------------------------
    # TOOL 1: trademark_search_by_serial
    # -------------------------------------------------------------------------
    spec = specs["trademark_search_by_serial"]

    @mcp.tool(name=spec.name, description=spec.description, annotations=_annotations(spec.title))
    async def trademark_search_by_serial(serialNumber: SerialNumber, format: Format = "json") -> str:
        return await _call("trademark_search_by_serial", serialNumber=serialNumber, format=format)

    # -------------------------------------------------------------------------
    # TOOL 2: trademark_search_by_registration
    # -------------------------------------------------------------------------
    spec = specs["trademark_search_by_registration"]

    @mcp.tool(name=spec.name, description=spec.description, annotations=_annotations(spec.title))
    async def trademark_search_by_registration(
        registrationNumber: RegistrationNumber,
        format: Format = "json",
    ) -> str:
        return await _call(
            "trademark_search_by_registration",
            registrationNumber=registrationNumber,
            format=format,
        )

    # -------------------------------------------------------------------------
    # TOOL 3: trademark_status
    # -------------------------------------------------------------------------
    spec = specs["trademark_status"]

    @mcp.tool(name=spec.name, description=spec.description, annotations=_annotations(spec.title))
    async def trademark_status(serialNumber: SerialNumber) -> str:
        return await _call("trademark_status", serialNumber=serialNumber)

    # -------------------------------------------------------------------------
    # TOOL 4: trademark_image
    # -------------------------------------------------------------------------
    spec = specs["trademark_image"]

    @mcp.tool(name=spec.name, description=spec.description, annotations=_annotations(spec.title))
    async def trademark_image(serialNumber: SerialNumber) -> str:
        return await _call("trademark_image", serialNumber=serialNumber)

    # -------------------------------------------------------------------------
    # TOOL 5: trademark_documents
    # -------------------------------------------------------------------------
    # No TSDR request is made: the bundle URL is built locally.
    spec = specs["trademark_documents"]

    @mcp.tool(name=spec.name, description=spec.description, annotations=_annotations(spec.title))
    async def trademark_documents(serialNumber: SerialNumber) -> str:
        return await _call("trademark_documents", serialNumber=serialNumber)

    return mcp


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    from main import run_stdio

    run_stdio()
