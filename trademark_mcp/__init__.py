# =============================================================================
# trademark_mcp/__init__.py
# =============================================================================
# This package contains the MCP-facing layer of the trademark server.
#
# ARCHITECTURAL ROLE:
#   trademark_mcp/ is the translation layer between MCP clients and the
#   lookup logic in tsdr/.  It:
#     1. Declares each tool (name, description, parameters, annotations)
#     2. Forwards every call to tsdr.trademarks.TrademarkDispatcher
#     3. Serves the tools over stdio or HTTP (server.py / http_app.py)
#
# WHAT THIS PACKAGE DOES NOT DO:
#   - It does NOT validate arguments or build TSDR URLs (that's in tsdr/)
#   - It does NOT decide what an error message says (that's in tsdr/)
# =============================================================================
