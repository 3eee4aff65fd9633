# =============================================================================
# main.py  -  Entry points for the USPTO Trademark MCP Server
# =============================================================================
#
# HOW TO RUN:
#   trademark-mcp-server         stdio transport (spawned by an MCP host)
#   trademark-mcp-server-http    HTTP transport on $PORT (default 3000)
#
#   or, without installing the scripts:
#   uv run python main.py [stdio|http]
#
# WHAT HAPPENS:
#   1. .env is loaded (USPTO_API_KEY, PORT, LOG_LEVEL...)
#   2. Settings are read ONCE and injected into the server
#   3. The chosen transport runs until SIGINT/SIGTERM
#
# STDOUT IS RESERVED:
#   In stdio mode stdout carries the MCP protocol, so every message printed
#   here goes to stderr through logging.
# =============================================================================

import logging
import signal
import sys

from dotenv import load_dotenv

from tsdr.config import Settings, load_settings
from trademark_mcp.server import configure_logging, create_server

logger = logging.getLogger("trademark_mcp")

_UVICORN_LOG_LEVELS = {"critical", "error", "warning", "info", "debug", "trace"}


def _bootstrap() -> Settings:
    # Load environment variables from .env BEFORE reading settings.
    load_dotenv()
    settings = load_settings()
    configure_logging(settings.log_level)
    if not settings.has_api_key:
        logger.warning("USPTO_API_KEY is not set; every tool call will return a configuration error")
    return settings


def _handle_shutdown_signal(signum, frame) -> None:
    name = signal.Signals(signum).name
    logger.info(f"Received {name}, shutting down gracefully...")
    sys.exit(0)


def _install_signal_handlers() -> None:
    signal.signal(signal.SIGINT, _handle_shutdown_signal)
    signal.signal(signal.SIGTERM, _handle_shutdown_signal)


def run_stdio() -> None:
    """Serve the tools over stdin/stdout for an MCP host."""
    settings = _bootstrap()
    _install_signal_handlers()
    server = create_server(settings)
    server.run(transport="stdio", show_banner=False)


def run_http() -> None:
    """Serve /health, / and the /mcp endpoint with uvicorn."""
    import uvicorn

    from trademark_mcp.http_app import HEALTH_PATH, MCP_PATH, create_http_app

    settings = _bootstrap()
    app = create_http_app(settings)

    base = f"http://localhost:{settings.port}"
    logger.info(f"🚀 Trademark MCP Server running on {base}")
    logger.info(f"📋 Health check: {base}{HEALTH_PATH}")
    logger.info(f"🔍 MCP endpoint: {base}{MCP_PATH}")

    log_level = settings.log_level.lower()
    if log_level not in _UVICORN_LOG_LEVELS:
        log_level = "info"
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=log_level)


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    mode = sys.argv[1] if len(sys.argv) > 1 else "stdio"
    if mode == "http":
        run_http()
    elif mode == "stdio":
        run_stdio()
    else:
        sys.stderr.write(f"Unknown transport {mode!r}. Use 'stdio' or 'http'.\n")
        sys.exit(2)
