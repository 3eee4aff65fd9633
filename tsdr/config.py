# =============================================================================
# tsdr/config.py  -  Runtime configuration (read once, never mutated)
# =============================================================================
#
# All configuration comes from environment variables.  The entry points in
# main.py call load_dotenv() first, so a local .env file works too.
#
# Settings is a FROZEN dataclass: it is built once at startup and handed to
# the dispatcher and the client.  Handlers never call os.getenv themselves.
#
# VARIABLES:
#   USPTO_API_KEY          TSDR API key (required for any real lookup)
#   USPTO_TSDR_BASE_URL    Override the TSDR base URL (tests / stubs)
#   USPTO_TIMEOUT_SECONDS  Optional client timeout; unset = no timeout
#   PORT / HOST            HTTP transport listen address
#   NODE_ENV               Deployment label, informational only
#   LOG_LEVEL              Logging level name (default INFO)
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

SERVER_NAME = "trademark-mcp-server"
SERVER_VERSION = "1.0.0"
TSDR_BASE_URL = "https://tsdrapi.uspto.gov/ts/cd"
DEFAULT_PORT = 3000


@dataclass(frozen=True)
class Settings:
    """Immutable server configuration."""

    api_key: str = ""
    base_url: str = TSDR_BASE_URL
    timeout_seconds: Optional[float] = None
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def user_agent(self) -> str:
        return f"{SERVER_NAME}/{SERVER_VERSION}"

    def redacted_api_key(self) -> str:
        """First 8 characters of the key followed by '...'."""
        if not self.api_key:
            return "(not set)"
        return f"{self.api_key[:8]}..."


def _parse_timeout(raw: str) -> Optional[float]:
    raw = raw.strip()
    if not raw:
        return None
    value = float(raw)
    return value if value > 0 else None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the process environment (or a given mapping)."""
    env = os.environ if environ is None else environ

    port_raw = env.get("PORT", "").strip()
    try:
        port = int(port_raw) if port_raw else DEFAULT_PORT
    except ValueError:
        raise ValueError(f"Invalid PORT: {port_raw!r}. Expected an integer.")

    try:
        timeout = _parse_timeout(env.get("USPTO_TIMEOUT_SECONDS", ""))
    except ValueError:
        raise ValueError(
            f"Invalid USPTO_TIMEOUT_SECONDS: {env.get('USPTO_TIMEOUT_SECONDS')!r}. Expected a number."
        )

    return Settings(
        api_key=env.get("USPTO_API_KEY", "").strip(),
        base_url=(env.get("USPTO_TSDR_BASE_URL", "").strip() or TSDR_BASE_URL).rstrip("/"),
        timeout_seconds=timeout,
        host=env.get("HOST", "").strip() or "0.0.0.0",
        port=port,
        environment=env.get("NODE_ENV", "").strip() or "development",
        log_level=(env.get("LOG_LEVEL", "").strip() or "INFO").upper(),
    )
