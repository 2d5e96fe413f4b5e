# ABOUTME: Shared protocol and error type for municipality extraction
# ABOUTME: Lets the orchestrator depend on "something that turns a page into a record"

from typing import Protocol

from municipality_crawler.core.models import MunicipalityRecord


class MunicipalityExtractor(Protocol):
    """Protocol for turning a municipality article into a dataset record."""

    async def extract(self, url: str, name: str) -> MunicipalityRecord | None:
        """Extract a record for the municipality at ``url``.

        Returns:
            The record, or None when extraction failed (failures are logged, never raised)
        """
        ...


class ExtractionError(Exception):
    """Raised when municipality data extraction fails."""

    pass
