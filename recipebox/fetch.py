"""
HTTP collaborators of the import pipeline.

HtmlSource fetches a recipe page as text; ImageFetcher fetches image bytes
on a best-effort basis. Both accept an injected httpx.AsyncClient so tests
can swap in a mock transport.
"""

from typing import Dict, Optional

import httpx

from .config import settings
from .errors import FetchFailed
from .logging_utils import get_logger

logger = get_logger(__name__)

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
IMAGE_ACCEPT = "image/*,*/*;q=0.8"


def browser_headers(user_agent: Optional[str] = None, accept: str = HTML_ACCEPT) -> Dict[str, str]:
    return {
        "User-Agent": user_agent or settings.user_agent,
        "Accept": accept,
        "Accept-Language": "en-US,en;q=0.9",
    }


class _HttpCollaborator:
    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.client = client
        self.user_agent = user_agent
        self.timeout = timeout or settings.fetch_timeout

    async def _get(self, url: str, headers: Dict[str, str]) -> httpx.Response:
        if self.client is not None:
            response = await self.client.get(url, headers=headers, follow_redirects=True)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, headers=headers, follow_redirects=True)
        response.raise_for_status()
        return response


class HtmlSource(_HttpCollaborator):
    async def fetch(self, url: str) -> str:
        try:
            response = await self._get(url, browser_headers(self.user_agent))
        except httpx.HTTPStatusError as exc:
            raise FetchFailed(f"HTTP {exc.response.status_code}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchFailed(str(exc) or exc.__class__.__name__) from exc

        logger.info(
            "Fetch %s -> HTTP %d, %d bytes", url, response.status_code, len(response.content)
        )
        try:
            return response.text
        except (LookupError, UnicodeDecodeError) as exc:
            raise FetchFailed("Could not decode HTML") from exc


class ImageFetcher(_HttpCollaborator):
    async def fetch(self, url: Optional[str]) -> Optional[bytes]:
        """Return the image bytes, or None when the image can't be had."""
        if not url:
            return None
        try:
            headers = browser_headers(self.user_agent, accept=IMAGE_ACCEPT)
            response = await self._get(url, headers)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Image fetch failed for %s: %s", url, exc)
            return None
        return response.content or None
