# =============================================================================
# tsdr/client.py  -  TSDR REST API client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Builds TSDR URLs from the fixed path templates, attaches the headers
#   (User-Agent, USPTO-API-KEY), sends ONE request and hands back the status
#   and body.  It knows nothing about MCP or about tools.
#
# PATH TEMPLATES (relative to https://tsdrapi.uspto.gov/ts/cd):
#   /casestatus/sn{serial}/info.{json|xml}   case status by serial number
#   /casestatus/rn{reg}/info.{json|xml}      case status by registration
#   /casestatus/sn{serial}/content           case status as HTML
#   /rawImage/{serial}                       mark image (checked with HEAD)
#   /casedocs/bundle.pdf?sn={serial}         documents bundle (URL only)
#
# FAILURES:
#   - 2xx                                    -> UpstreamResponse
#   - 401 body "need to register for an API key" -> UpstreamAuthError
#   - any other non-2xx                      -> UpstreamError
#   - httpx network exceptions               -> TransportFailure
#   There is no retry and no backoff: one attempt per tool call.
# =============================================================================

import logging
from typing import Optional

import httpx

from tsdr.config import Settings
from tsdr.errors import TransportFailure, UpstreamAuthError, UpstreamError
from tsdr.models import NumberKind, ResponseFormat, UpstreamRequest, UpstreamResponse

logger = logging.getLogger(__name__)

API_KEY_HEADER = "USPTO-API-KEY"
REGISTER_MARKER = "need to register for an API key"


class TsdrClient:
    """Stateless TSDR client.

    A fresh httpx.AsyncClient is opened for every request, so two concurrent
    tool calls never share a connection or any other mutable object.
    `transport` lets tests plug in an httpx.MockTransport.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    # -------------------------------------------------------------------------
    # URL construction
    # -------------------------------------------------------------------------
    @property
    def base_url(self) -> str:
        return self.settings.base_url

    def case_status_url(self, kind: NumberKind, number: str, fmt: ResponseFormat = ResponseFormat.JSON) -> str:
        return f"{self.base_url}/casestatus/{kind.value}{number}/info.{ResponseFormat(fmt).value}"

    def status_content_url(self, serial_number: str) -> str:
        return f"{self.base_url}/casestatus/sn{serial_number}/content"

    def image_url(self, serial_number: str) -> str:
        return f"{self.base_url}/rawImage/{serial_number}"

    def documents_url(self, serial_number: str) -> str:
        return f"{self.base_url}/casedocs/bundle.pdf?sn={serial_number}"

    def build_request(self, method: str, url: str) -> UpstreamRequest:
        headers = {"User-Agent": self.settings.user_agent}
        if self.settings.has_api_key:
            headers[API_KEY_HEADER] = self.settings.api_key
        return UpstreamRequest(method=method, url=url, headers=headers)

    # -------------------------------------------------------------------------
    # Network calls
    # -------------------------------------------------------------------------
    async def _send(self, request: UpstreamRequest) -> httpx.Response:
        timeout = httpx.Timeout(self.settings.timeout_seconds)
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=timeout) as client:
                return await client.request(request.method, request.url, headers=request.headers)
        except httpx.HTTPError as exc:
            logger.warning("TSDR %s %s failed: %s", request.method, request.url, exc)
            raise TransportFailure(str(exc) or type(exc).__name__) from exc

    async def fetch(self, url: str) -> UpstreamResponse:
        """GET `url` and return the body; raise on any non-2xx status."""
        response = await self._send(self.build_request("GET", url))
        result = UpstreamResponse(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            text=response.text,
        )
        logger.debug("TSDR GET %s -> %s", url, result.status_code)

        if not result.ok:
            if result.status_code == 401 and REGISTER_MARKER in result.text:
                raise UpstreamAuthError(
                    f"USPTO API returned {result.status_code}: {result.reason_phrase}",
                    status_code=result.status_code,
                    body=result.text,
                )
            raise UpstreamError(
                f"USPTO API returned {result.status_code}: {result.reason_phrase}. Error: {result.text}",
                status_code=result.status_code,
                body=result.text,
            )
        return result

    async def exists(self, url: str) -> bool:
        """HEAD `url`; any 2xx means the resource exists."""
        response = await self._send(self.build_request("HEAD", url))
        if 200 <= response.status_code < 300:
            return True
        logger.info("TSDR HEAD %s -> %s, treating as not found", url, response.status_code)
        return False
