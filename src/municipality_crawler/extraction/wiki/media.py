# ABOUTME: Resolves wiki file description pages to the original full-resolution media URL
# ABOUTME: Failures are logged and reported as None so a missing photo never fails a record

from bs4 import BeautifulSoup

from municipality_crawler.extraction.wiki.base import BaseWikiExtractor
from municipality_crawler.utils.logging import get_logger


class WikiMediaResolver(BaseWikiExtractor):
    """Looks up the "Originaldatei" link on a Datei:/File: page."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.logger = get_logger(__name__)

    async def resolve_original_url(self, file_page_url: str) -> str | None:
        """Return the absolute URL of the original file, or None if it cannot be found."""
        try:
            html = await self.fetch_html(file_page_url)
            soup = BeautifulSoup(html, "html.parser")

            link = soup.select_one(".fullMedia a")
            href = link.get("href") if link else None
            if not href:
                self.logger.info("No original file link on file page", file_page_url=file_page_url)
                return None

            return self.absolute_url(href)

        except Exception as e:
            self.logger.warning(
                "Error fetching high-res image",
                file_page_url=file_page_url,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None
