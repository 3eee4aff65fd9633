# =============================================================================
# tsdr/__init__.py
# =============================================================================
# This package contains ALL trademark lookup logic: configuration, argument
# validation, the TSDR HTTP client and the tool dispatcher.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, Starlette or uvicorn.  The only
#   third-party import is httpx (for the upstream calls).  The MCP layer in
#   trademark_mcp/ wraps these functions; it never re-implements them.
# =============================================================================

__version__ = "1.0.0"
