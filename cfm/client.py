# CFM portal — HTTP transport
# Source: https://portal.cfm.org.br/busca-medicos
#
# Flow:
#   1. POST the JSON search body to buscar_medicos with the portal's XHR headers
#   2. Decode the JSON answer ({"status": ..., "dados": [...]})
# Interpreting "status" and the rows is the parser's job.

import asyncio
import json
import logging
from typing import Any, Optional

import aiohttp

from cfm.config import settings
from cfm.constants import API_HEADERS
from cfm.errors import NetworkError, UpstreamError

logger = logging.getLogger(__name__)


class CFMClient:
    """Thin aiohttp wrapper around the CFM search endpoint."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.url = url or settings.CFM_API_URL
        self.timeout = timeout if timeout is not None else settings.CFM_REQUEST_TIMEOUT
        self._session = session

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": settings.CFM_USER_AGENT},
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self._session

    async def post(self, body: str) -> dict[str, Any]:
        """POST a search body and return the decoded JSON object."""
        try:
            session = await self._get_session()
            async with session.post(self.url, data=body, headers=API_HEADERS) as resp:
                if resp.status != 200:
                    logger.error(f"CFM POST failed: HTTP {resp.status}")
                    raise NetworkError(f"Network error: HTTP {resp.status}")
                text = await resp.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"CFM request error: {e!r}")
            raise NetworkError(f"Network error: {e}", cause=e) from e

        # The portal answers with a text/html content type, so decode by hand
        try:
            data = json.loads(text)
        except ValueError as e:
            logger.error(f"CFM returned a non-JSON body ({len(text)} bytes)")
            raise UpstreamError("API returned a non-JSON response", cause=e) from e

        if not isinstance(data, dict):
            raise UpstreamError(
                f"API returned an unexpected {type(data).__name__} payload"
            )
        return data

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "CFMClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
