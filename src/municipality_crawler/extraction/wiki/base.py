from urllib.parse import urljoin

import httpx

from municipality_crawler.config import Config
from municipality_crawler.utils.logging import get_logger, log_api_call


def create_http_client(config: Config) -> httpx.AsyncClient:
    """Create the shared HTTP client used for every wiki request."""
    return httpx.AsyncClient(headers={"User-Agent": config.user_agent}, follow_redirects=True)


class BaseWikiExtractor:
    """Base class for anything that reads pages from the wiki. Holds the httpx client
    and knows how to turn wiki-relative links into absolute URLs."""

    def __init__(self, config: Config, client: httpx.AsyncClient | None = None):
        self.config = config
        self.base_url = config.wiki_base_url.rstrip("/")
        self.http_client = client or create_http_client(config)  # Allow for dependency injection
        self.logger = get_logger(__name__)

    def absolute_url(self, href: str) -> str:
        """Resolve ``href`` against the wiki base URL.

        Protocol-relative links (``//upload...``) get ``https:``, root-relative
        links get the base URL, absolute links are returned unchanged.
        """
        if href.startswith("//"):
            return "https:" + href
        if href.startswith("/"):
            return self.base_url + href
        return urljoin(self.base_url + "/", href)

    @log_api_call("wiki")
    async def fetch_html(self, url: str) -> str:
        """GET a page and return its markup.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
            httpx.TransportError: When the request itself fails
        """
        response = await self.http_client.get(self.absolute_url(url))
        response.raise_for_status()
        return response.text

    async def close(self) -> None:
        await self.http_client.aclose()
