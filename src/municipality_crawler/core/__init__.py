# ABOUTME: Domain models and crawl orchestration
# ABOUTME: Pipeline Stage 3: extracted records -> batched, resumable dataset

"""
Core Layer: Business logic and workflow orchestration

This layer handles:
- Domain models shared by every stage
- Discovery, resume filtering and batch scheduling
- Run summaries

Data Flow: extraction/ records -> batches -> persistence/
"""

from .models import ExtractedFacts, MunicipalityLink, MunicipalityRecord, sanitize_filename

# Import the orchestrator on demand to avoid circular imports
# Use: from municipality_crawler.core.pipeline import CrawlOrchestrator

__all__ = [
    "ExtractedFacts",
    "MunicipalityLink",
    "MunicipalityRecord",
    "sanitize_filename",
]
