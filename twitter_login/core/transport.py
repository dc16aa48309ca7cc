import asyncio
from typing import Dict, Optional, Protocol

import aiohttp
from yarl import URL

from ..exceptions import TransportError
from ..models.oauth_models import HttpResponse
from ..utils.logger import get_logger

logger = get_logger(__name__)

class HttpTransport(Protocol):
    """Anything able to send one HTTP request and return its response."""

    async def send(self,
                   method: str,
                   url: str,
                   headers: Dict[str, str],
                   body: Optional[bytes] = None) -> HttpResponse:
        ...

class AiohttpTransport:
    """
    HTTP transport backed by aiohttp.

    Network failures and timeouts are raised as ``TransportError`` with the
    aiohttp exception chained. Cancellation is left untouched.
    """

    def __init__(self,
                 timeout: Optional[float] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        """
        Args:
            timeout: Total time allowed per request, in seconds
            session: Shared session to send requests with. When omitted a
                session is opened and closed for each request.
        """
        self._timeout = aiohttp.ClientTimeout(total=timeout) if timeout else None
        self._session = session

    async def send(self,
                   method: str,
                   url: str,
                   headers: Dict[str, str],
                   body: Optional[bytes] = None) -> HttpResponse:
        try:
            if self._session is not None:
                return await self._send(self._session, method, url, headers, body)

            async with aiohttp.ClientSession() as session:
                return await self._send(session, method, url, headers, body)

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            message = str(e) or e.__class__.__name__
            logger.error(f"{method} {url} failed: {message}")
            raise TransportError(message) from e

    async def _send(self,
                    session: aiohttp.ClientSession,
                    method: str,
                    url: str,
                    headers: Dict[str, str],
                    body: Optional[bytes]) -> HttpResponse:
        options = {"headers": headers, "data": body}
        if self._timeout is not None:
            options["timeout"] = self._timeout

        # The URL must reach the wire exactly as it was signed
        async with session.request(method, URL(url, encoded=True), **options) as response:
            payload = await response.read()
            logger.debug(f"{method} {url} -> {response.status} ({len(payload)} bytes)")
            return HttpResponse(status=response.status, body=payload)
