# ABOUTME: JSON file persistence for the municipality dataset
# ABOUTME: Whole-file rewrite after every batch; unreadable files load as an empty dataset

import json
from pathlib import Path

from pydantic import ValidationError

from municipality_crawler.core.models import MunicipalityRecord
from municipality_crawler.utils.logging import get_logger


class JsonResultStore:
    """Reads and rewrites the dataset file (a JSON array of records in processing order)."""

    def __init__(self, path: Path):
        self.path = path
        self.logger = get_logger(__name__)

    def load(self) -> list[MunicipalityRecord]:
        """Load previously saved records.

        A missing, unreadable or malformed file means "no prior state" and
        yields an empty list. Single entries that fail validation are skipped.
        """
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(raw, list):
                raise ValueError(f"expected a JSON array, got {type(raw).__name__}")
        except FileNotFoundError:
            self.logger.info("No existing data found, starting fresh", path=str(self.path))
            return []
        except Exception as e:
            self.logger.warning(
                "Existing data could not be read, starting fresh",
                path=str(self.path),
                error=str(e),
                error_type=type(e).__name__,
            )
            return []

        records = []
        for index, item in enumerate(raw):
            try:
                records.append(MunicipalityRecord.model_validate(item))
            except ValidationError as e:
                self.logger.warning(
                    "Skipping invalid municipality entry", index=index, error_count=e.error_count(), path=str(self.path)
                )

        self.logger.info("Loaded existing municipalities", count=len(records), path=str(self.path))
        return records

    def save(self, records: list[MunicipalityRecord]) -> None:
        """Rewrite the whole file with ``records``."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [record.to_json_dict() for record in records]
        self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        self.logger.debug("Saved municipalities", count=len(records), path=str(self.path))
