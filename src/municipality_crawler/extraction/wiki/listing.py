# ABOUTME: Parser for the "Liste Schweizer Gemeinden" index page
# ABOUTME: Yields (name, url) pairs for every table row whose first cell links to an article

from collections.abc import Iterator

from bs4 import BeautifulSoup

from municipality_crawler.core.models import MunicipalityLink
from municipality_crawler.extraction.wiki.base import BaseWikiExtractor
from municipality_crawler.utils.logging import get_logger

ARTICLE_PREFIX = "/wiki/"

logger = get_logger(__name__)


def is_article_href(href: str | None) -> bool:
    """Article links start with /wiki/ and carry no namespace colon (Datei:, Kategorie:, ...)."""
    return bool(href) and href.startswith(ARTICLE_PREFIX) and ":" not in href


def parse_municipality_links(html: str, base_url: str) -> Iterator[MunicipalityLink]:
    """Lazily yield one link per ``table.wikitable`` row whose first cell holds an article link.

    Rows are yielded in document order and are not deduplicated. A page without
    the expected table yields nothing.
    """
    soup = BeautifulSoup(html, "html.parser")
    rows = soup.select("table.wikitable tr")
    if not rows:
        logger.warning("No municipality table found on index page")
        return

    base_url = base_url.rstrip("/")
    for row in rows:
        first_cell = row.find("td")
        if first_cell is None:
            continue
        link = first_cell.find("a")
        if link is None:
            continue

        href = link.get("href")
        if not is_article_href(href):
            continue

        yield MunicipalityLink(name=link.get_text().strip(), url=base_url + href)


class MunicipalityListExtractor(BaseWikiExtractor):
    """Fetches the municipality index page and parses it into links."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.logger = get_logger(__name__)

    async def get_municipality_links(self) -> list[MunicipalityLink]:
        """Fetch and parse the index page. Fetch errors propagate to the caller."""
        list_url = self.config.municipalities_list_url
        self.logger.info("Fetching list of municipalities", url=list_url)

        html = await self.fetch_html(list_url)
        links = list(parse_municipality_links(html, self.base_url))

        self.logger.info("Found municipalities", count=len(links))
        return links
