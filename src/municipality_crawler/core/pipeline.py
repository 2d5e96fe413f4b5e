# ABOUTME: Crawl orchestrator driving discovery, resume, batched extraction and persistence
# ABOUTME: Processes pending municipalities in fixed-size concurrent batches and saves after each batch

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

import httpx

from municipality_crawler.config import Config
from municipality_crawler.core.models import MunicipalityLink, MunicipalityRecord
from municipality_crawler.extraction.analysis.details import MunicipalityDetailExtractor
from municipality_crawler.extraction.base import MunicipalityExtractor
from municipality_crawler.extraction.wiki.base import create_http_client
from municipality_crawler.extraction.wiki.listing import MunicipalityListExtractor
from municipality_crawler.extraction.wiki.media import WikiMediaResolver
from municipality_crawler.persistence.store import JsonResultStore
from municipality_crawler.services.genai import create_genai_client
from municipality_crawler.services.imaging.references import ReferenceImageLoader
from municipality_crawler.services.imaging.stylizer import ImageStylizer
from municipality_crawler.utils.logging import get_logger

T = TypeVar("T")

BatchCallback = Callable[[int, int, int], None]


@dataclass(frozen=True, slots=True)
class CrawlSummary:
    """Outcome of one crawl run."""

    discovered: int
    already_done: int
    attempted: int
    succeeded: int
    batches: int
    total: int
    with_image: int
    with_stylized: int
    output_path: Path

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded


def compute_pending(
    links: Iterable[MunicipalityLink], existing: Iterable[MunicipalityRecord]
) -> list[MunicipalityLink]:
    """Links whose name is not already in the dataset, in discovery order."""
    processed_names = {record.name for record in existing}
    return [link for link in links if link.name not in processed_names]


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Split ``items`` into consecutive chunks of at most ``size``."""
    for start in range(0, len(items), size):
        yield items[start : start + size]


class CrawlOrchestrator:
    """Runs the whole crawl: discover, resume, batch, persist, summarize."""

    def __init__(
        self,
        config: Config,
        list_extractor: MunicipalityListExtractor,
        detail_extractor: MunicipalityExtractor,
        store: JsonResultStore,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.config = config
        self.list_extractor = list_extractor
        self.detail_extractor = detail_extractor
        self.store = store
        self._sleep = sleep
        self._http_client = http_client
        self.logger = get_logger(__name__)

    @classmethod
    def from_config(cls, config: Config) -> "CrawlOrchestrator":
        """Wire up every component around one shared HTTP client and one Gemini client."""
        http_client = create_http_client(config)
        genai_client = create_genai_client(config)

        stylizer = None
        if config.stylize_images:
            stylizer = ImageStylizer(
                config, genai_client, reference_loader=ReferenceImageLoader(http_client)
            )

        detail_extractor = MunicipalityDetailExtractor(
            config,
            genai_client,
            stylizer=stylizer,
            media_resolver=WikiMediaResolver(config, client=http_client),
            client=http_client,
        )

        return cls(
            config=config,
            list_extractor=MunicipalityListExtractor(config, client=http_client),
            detail_extractor=detail_extractor,
            store=JsonResultStore(config.results_path),
            http_client=http_client,
        )

    async def run(self, on_batch: BatchCallback | None = None) -> CrawlSummary:
        """Run the crawl to completion.

        Args:
            on_batch: Called after each saved batch with (batch number, batch count, records saved)

        Raises:
            Exception: Anything raised while fetching the municipality list
        """
        self.logger.info(
            "Starting crawl",
            project=self.config.google_cloud_project,
            location=self.config.google_cloud_location,
            batch_size=self.config.batch_size,
        )

        links = await self.list_extractor.get_municipality_links()

        municipalities = self.store.load()
        already_done = len({record.name for record in municipalities})

        if self.config.skip_processed:
            pending = compute_pending(links, municipalities)
        else:
            pending = list(links)

        self.logger.info("Municipalities to process", pending=len(pending), already_done=already_done)

        batches = list(chunked(pending, self.config.batch_size))
        succeeded = 0

        for index, batch in enumerate(batches, start=1):
            self.logger.info("Processing batch", batch=index, batches=len(batches), size=len(batch))

            results = await asyncio.gather(*(self.detail_extractor.extract(link.url, link.name) for link in batch))
            new_records = [record for record in results if record is not None]
            municipalities.extend(new_records)
            succeeded += len(new_records)

            self.store.save(municipalities)
            self.logger.info("Saved municipalities so far", count=len(municipalities))
            if on_batch is not None:
                on_batch(index, len(batches), len(municipalities))

            if index < len(batches):
                await self._sleep(self.config.batch_delay_seconds)

        summary = CrawlSummary(
            discovered=len(links),
            already_done=already_done,
            attempted=len(pending),
            succeeded=succeeded,
            batches=len(batches),
            total=len(municipalities),
            with_image=sum(1 for record in municipalities if record.image_url),
            with_stylized=sum(1 for record in municipalities if record.stylized_image_path),
            output_path=self.store.path,
        )

        self.logger.info(
            "Crawling complete",
            total=summary.total,
            with_images=summary.with_image,
            with_stylized=summary.with_stylized,
            failed=summary.failed,
            output=str(summary.output_path),
        )
        return summary

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
