# ABOUTME: Extracts a MunicipalityRecord from a municipality article using the Gemini text model
# ABOUTME: Infobox + leading paragraphs -> prompt -> JSON answer -> resolved images -> stylized image

import httpx
from bs4 import BeautifulSoup
from google import genai
from google.genai import types
from pydantic import ValidationError

from municipality_crawler.config import Config
from municipality_crawler.core.models import ExtractedFacts, MunicipalityRecord
from municipality_crawler.extraction.analysis.prompts import build_extraction_prompt
from municipality_crawler.extraction.analysis.response import Parsed, interpret_text_response
from municipality_crawler.extraction.base import ExtractionError
from municipality_crawler.extraction.wiki.base import BaseWikiExtractor
from municipality_crawler.extraction.wiki.media import WikiMediaResolver
from municipality_crawler.services.genai import user_turn
from municipality_crawler.services.imaging.stylizer import ImageStylizer, StylizeRequest
from municipality_crawler.utils.logging import get_logger, log_api_call, with_municipality_context

ARTICLE_PARAGRAPH_SELECTOR = "#mw-content-text .mw-parser-output > p"
MAX_PARAGRAPHS = 5
MIN_PARAGRAPH_LENGTH = 50


def parse_article(html: str) -> tuple[str, str]:
    """Split an article into infobox markup and leading article text.

    Only the first five paragraphs are considered; short ones (50 characters
    or less) are dropped.

    Raises:
        ExtractionError: If the page has no infobox
    """
    soup = BeautifulSoup(html, "html.parser")

    infobox = soup.select_one(".infobox")
    if infobox is None:
        raise ExtractionError("No infobox found")

    paragraphs = []
    for element in soup.select(ARTICLE_PARAGRAPH_SELECTOR)[:MAX_PARAGRAPHS]:
        text = element.get_text().strip()
        if len(text) > MIN_PARAGRAPH_LENGTH:
            paragraphs.append(text)

    return infobox.decode_contents(), "\n\n".join(paragraphs)


class MunicipalityDetailExtractor(BaseWikiExtractor):
    """Builds one dataset record per municipality article.

    Every failure is logged with the municipality name and turned into ``None``;
    nothing propagates to the orchestrator.
    """

    def __init__(
        self,
        config: Config,
        genai_client: genai.Client,
        stylizer: ImageStylizer | None = None,
        media_resolver: WikiMediaResolver | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(config, client)
        self.genai_client = genai_client
        self.stylizer = stylizer
        self.media_resolver = media_resolver or WikiMediaResolver(config, client=self.http_client)
        self.logger = get_logger(__name__)

    async def extract(self, url: str, name: str) -> MunicipalityRecord | None:
        with with_municipality_context(name) as logger:
            try:
                logger.info("Processing municipality", url=url)
                return await self._extract(url, name)

            except ExtractionError as e:
                logger.warning("Extraction failed", reason=str(e))
                return None

            except Exception as e:
                logger.error("Error processing municipality", error=str(e), error_type=type(e).__name__)
                return None

    async def _extract(self, url: str, name: str) -> MunicipalityRecord:
        html = await self.fetch_html(url)
        infobox_html, article_content = parse_article(html)

        prompt = build_extraction_prompt(infobox_html, article_content, extract_flag=self.config.extract_flag)
        facts = await self.extract_facts(prompt)

        image_url = await self._resolve_media(facts.image_page_url)
        flag_url = await self._resolve_media(facts.flag_page_url) if self.config.extract_flag else None

        record = MunicipalityRecord(
            name=name,
            bfs_id=facts.bfs_id or "",
            source_url=url,
            image_url=image_url,
            flag_url=flag_url,
            geography=facts.geography or None,
            appearance=facts.appearance or None,
            points_of_interest=facts.points_of_interest or None,
        )

        if self.stylizer is not None:
            stylized_path = await self.stylizer.generate(
                StylizeRequest(
                    name=name,
                    geography=facts.geography,
                    points_of_interest=facts.points_of_interest or [],
                    image_url=image_url,
                    flag_url=flag_url,
                )
            )
            if stylized_path:
                record = record.model_copy(update={"stylized_image_path": stylized_path})

        self.logger.info(
            "Extracted municipality",
            municipality=name,
            bfs_id=record.bfs_id,
            has_image=record.image_url is not None,
            has_stylized=record.stylized_image_path is not None,
            points_of_interest=len(record.points_of_interest or []),
        )
        return record

    async def extract_facts(self, prompt: str) -> ExtractedFacts:
        """Ask the text model for the facts and validate its JSON answer.

        Raises:
            ExtractionError: If the answer has no usable JSON object
        """
        response = await self._generate_content(prompt)

        result = interpret_text_response(response)
        if not isinstance(result, Parsed):
            raise ExtractionError(result.reason)

        try:
            return ExtractedFacts.model_validate(result.value)
        except ValidationError as e:
            raise ExtractionError(f"Unexpected JSON shape in response: {e.error_count()} errors") from e

    @log_api_call("gemini-text")
    async def _generate_content(self, prompt: str):
        return await self.genai_client.aio.models.generate_content(
            model=self.config.text_model,
            contents=user_turn([types.Part.from_text(text=prompt)]),
        )

    async def _resolve_media(self, file_page_url: str | None) -> str | None:
        if not file_page_url:
            return None
        return await self.media_resolver.resolve_original_url(file_page_url)
