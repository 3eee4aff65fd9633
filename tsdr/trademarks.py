# =============================================================================
# tsdr/trademarks.py  -  Trademark tool handlers & dispatcher
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Defines the five trademark lookups and the dispatcher that runs them.
#
# HOW A CALL FLOWS THROUGH dispatch():
#   1. Look up the tool in the registry          (unknown -> failure)
#   2. Validate arguments against its schema     (bad    -> failure, no I/O)
#   3. Check that an API key is configured       (none   -> failure, no I/O)
#   4. Run the handler (at most ONE TSDR request)
#   5. Catch everything and return a ToolOutcome
#
#   dispatch() never raises.  The MCP layer only ever sees a ToolOutcome.
#
# THE FIVE TOOLS:
#   trademark_search_by_serial        case status JSON/XML by serial number
#   trademark_search_by_registration  case status JSON/XML by registration
#   trademark_status                  HTML status page title + link
#   trademark_image                   image URL (HEAD check first)
#   trademark_documents               document bundle URL (no request)
# =============================================================================

import json
import logging
import re
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from tsdr.client import TsdrClient
from tsdr.config import Settings
from tsdr.errors import (
    ConfigurationError,
    ErrorKind,
    TsdrError,
    UpstreamAuthError,
    UpstreamError,
)
from tsdr.models import NumberKind, ResponseFormat, ToolOutcome, ToolRequest
from tsdr.validation import (
    REGISTRATION_SEARCH_SCHEMA,
    SERIAL_ONLY_SCHEMA,
    SERIAL_SEARCH_SCHEMA,
    FieldSpec,
    validate_arguments,
)

logger = logging.getLogger(__name__)

SUPPORT_EMAIL = "APIhelp@uspto.gov"
API_MANAGER_URL = "https://account.uspto.gov/api-manager/"

API_KEY_MISSING_MESSAGE = (
    "Error: USPTO API key is not configured.\n\n"
    "The USPTO TSDR API requires an API key for every request. To get one:\n"
    f"1. Register for a free account at {API_MANAGER_URL}\n"
    "2. Set the USPTO_API_KEY environment variable to your key\n"
    "3. Restart the trademark MCP server"
)

_TITLE_RE = re.compile(r"<title>(.*?)</title>", re.IGNORECASE | re.DOTALL)

Handler = Callable[[TsdrClient, dict], Awaitable[str]]


def api_key_rejected_message(settings: Settings) -> str:
    """Remediation text for a 401 'need to register for an API key' answer."""
    return (
        f"Error: The USPTO API rejected the configured API key ({settings.redacted_api_key()}).\n\n"
        "USPTO response: you need to register for an API key.\n\n"
        "To fix this:\n"
        f"1. Verify your key at {API_MANAGER_URL}\n"
        "2. Make sure USPTO_API_KEY holds the full key, without quotes or spaces\n"
        "3. If the key was just issued, wait a few minutes for it to activate\n\n"
        f"For further help, contact USPTO API support at {SUPPORT_EMAIL}"
    )


# =============================================================================
# Handlers
# =============================================================================
# Each handler receives already-validated arguments and may raise any
# TsdrError; the dispatcher turns those into failure outcomes.
# =============================================================================
def _format_case_status(body: str, fmt: ResponseFormat) -> str:
    if fmt is ResponseFormat.XML:
        return body
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise UpstreamError(f"Invalid JSON in USPTO response: {exc}") from exc
    return json.dumps(data, indent=2, ensure_ascii=False)


async def search_by_serial(client: TsdrClient, args: dict) -> str:
    fmt = ResponseFormat(args["format"])
    url = client.case_status_url(NumberKind.SERIAL, args["serialNumber"], fmt)
    response = await client.fetch(url)
    return _format_case_status(response.text, fmt)


async def search_by_registration(client: TsdrClient, args: dict) -> str:
    fmt = ResponseFormat(args["format"])
    url = client.case_status_url(NumberKind.REGISTRATION, args["registrationNumber"], fmt)
    response = await client.fetch(url)
    return _format_case_status(response.text, fmt)


async def status(client: TsdrClient, args: dict) -> str:
    serial = args["serialNumber"]
    url = client.status_content_url(serial)
    response = await client.fetch(url)

    match = _TITLE_RE.search(response.text)
    title = match.group(1).strip() if match else "No title found"

    return (
        f"Trademark Status Report for Serial Number: {serial}\n\n"
        f"Title: {title}\n\n"
        f"Full HTML content available at: {url}\n\n"
        "Note: This tool returns the HTML content from the USPTO. "
        "For structured data, use trademark_search_by_serial instead."
    )


async def image(client: TsdrClient, args: dict) -> str:
    serial = args["serialNumber"]
    url = client.image_url(serial)
    if not await client.exists(url):
        return f"No image found for trademark serial number: {serial}"
    return (
        f"Trademark image URL for serial number {serial}: {url}\n\n"
        "You can view this image by opening the URL in a web browser."
    )


async def documents(client: TsdrClient, args: dict) -> str:
    serial = args["serialNumber"]
    url = client.documents_url(serial)
    return (
        f"Document bundle URL for trademark serial number {serial}: {url}\n\n"
        "This URL provides a PDF containing all documents related to this trademark application.\n\n"
        "Note: Document downloads are rate-limited to 4 requests per minute per API key."
    )


# =============================================================================
# Registry
# =============================================================================
@dataclass(frozen=True)
class ToolSpec:
    name: str
    title: str
    description: str
    schema: tuple[FieldSpec, ...]
    handler: Handler
    error_prefix: str


TOOL_SPECS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="trademark_search_by_serial",
        title="Trademark Search by Serial Number",
        description="Search for trademark information using a serial number",
        schema=SERIAL_SEARCH_SCHEMA,
        handler=search_by_serial,
        error_prefix="Error fetching trademark data: ",
    ),
    ToolSpec(
        name="trademark_search_by_registration",
        title="Trademark Search by Registration Number",
        description="Search for trademark information using a registration number",
        schema=REGISTRATION_SEARCH_SCHEMA,
        handler=search_by_registration,
        error_prefix="Error fetching trademark data by registration number: ",
    ),
    ToolSpec(
        name="trademark_status",
        title="Trademark Status Lookup",
        description="Get comprehensive status information for a trademark by serial number",
        schema=SERIAL_ONLY_SCHEMA,
        handler=status,
        error_prefix="Error fetching trademark status: ",
    ),
    ToolSpec(
        name="trademark_image",
        title="Trademark Image Retrieval",
        description="Get the image URL for a trademark by serial number",
        schema=SERIAL_ONLY_SCHEMA,
        handler=image,
        error_prefix="Error retrieving trademark image: ",
    ),
    ToolSpec(
        name="trademark_documents",
        title="Trademark Documents Bundle",
        description="Get the document bundle URL for a trademark by serial number",
        schema=SERIAL_ONLY_SCHEMA,
        handler=documents,
        error_prefix="Error generating document bundle URL: ",
    ),
)


class TrademarkDispatcher:
    """Routes a tool name + arguments to its validator and handler."""

    def __init__(self, settings: Settings, client: Optional[TsdrClient] = None):
        self.settings = settings
        self.client = client or TsdrClient(settings)
        self.registry: dict[str, ToolSpec] = {spec.name: spec for spec in TOOL_SPECS}

    async def dispatch(self, tool_name: str, arguments: Optional[dict] = None) -> ToolOutcome:
        spec = self.registry.get(tool_name)
        if spec is None:
            return ToolOutcome.failure(ErrorKind.UNKNOWN_TOOL, f"Unknown tool: {tool_name}")

        validation = validate_arguments(spec.schema, arguments)
        if not validation.ok:
            detail = "; ".join(validation.errors)
            logger.info("%s rejected arguments: %s", tool_name, detail)
            return ToolOutcome.failure(ErrorKind.VALIDATION, f"Validation error: {detail}", detail)

        try:
            self._require_api_key()
            text = await spec.handler(self.client, validation.values)
        except ConfigurationError:
            return ToolOutcome.failure(ErrorKind.CONFIGURATION, API_KEY_MISSING_MESSAGE)
        except UpstreamAuthError as exc:
            logger.warning("%s: USPTO rejected the API key (%s)", tool_name, exc)
            return ToolOutcome.failure(exc.kind, api_key_rejected_message(self.settings), exc.body)
        except TsdrError as exc:
            logger.warning("%s failed: %s", tool_name, exc)
            return ToolOutcome.failure(exc.kind, f"{spec.error_prefix}{exc}", str(exc))
        except Exception as exc:
            logger.exception("%s failed unexpectedly", tool_name)
            return ToolOutcome.failure(ErrorKind.INTERNAL, f"{spec.error_prefix}{exc}", str(exc))

        return ToolOutcome.success(text)

    async def dispatch_text(self, request: ToolRequest) -> str:
        """Dispatch `request` and flatten the outcome to its text payload."""
        outcome = await self.dispatch(request.tool_name, request.arguments)
        return outcome.text

    def _require_api_key(self) -> None:
        if not self.settings.has_api_key:
            raise ConfigurationError(API_KEY_MISSING_MESSAGE)
