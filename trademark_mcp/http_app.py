# =============================================================================
# trademark_mcp/http_app.py  -  HTTP transport (health check + MCP endpoint)
# =============================================================================
#
# ROUTES:
#   GET  /health   liveness document {status, timestamp, version, service}
#   GET  /         service description with the endpoint paths
#   *    /mcp      FastMCP streamable HTTP endpoint (the same five tools)
#   anything else  404 {"error": "Not found"}
#
# CORS is wide open (any origin, GET/POST/OPTIONS) so browser-based MCP
# clients can call the server directly.
# =============================================================================

from datetime import datetime, timezone
from typing import Optional

from fastmcp import FastMCP
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from tsdr.config import SERVER_NAME, SERVER_VERSION, Settings, load_settings
from trademark_mcp.server import create_server

MCP_PATH = "/mcp"
HEALTH_PATH = "/health"


def health_document() -> dict:
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "version": SERVER_VERSION,
        "service": SERVER_NAME,
    }


def service_document(settings: Settings) -> dict:
    return {
        "name": SERVER_NAME,
        "version": SERVER_VERSION,
        "description": "USPTO Trademark MCP Server",
        "environment": settings.environment,
        "endpoints": {
            "health": HEALTH_PATH,
            "mcp": MCP_PATH,
        },
    }


async def _not_found(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse({"error": "Not found"}, status_code=404)


def create_http_app(
    settings: Optional[Settings] = None,
    server: Optional[FastMCP] = None,
) -> Starlette:
    """Build the ASGI app served by uvicorn in HTTP mode."""
    settings = settings or load_settings()
    server = server or create_server(settings)

    @server.custom_route(HEALTH_PATH, methods=["GET"])
    async def health(request: Request) -> JSONResponse:
        return JSONResponse(health_document())

    @server.custom_route("/", methods=["GET"])
    async def index(request: Request) -> JSONResponse:
        return JSONResponse(service_document(settings))

    app = server.http_app(
        path=MCP_PATH,
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=["*"],
                allow_methods=["GET", "POST", "OPTIONS"],
                allow_headers=["*"],
                expose_headers=["mcp-session-id"],
            )
        ],
    )
    app.add_exception_handler(404, _not_found)
    return app
