# ABOUTME: Pydantic data models shared across the crawl pipeline
# ABOUTME: MunicipalityLink (index entry), ExtractedFacts (model answer) and MunicipalityRecord (dataset row)

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")


def sanitize_filename(name: str) -> str:
    """Replace every character outside ``[A-Za-z0-9]`` with an underscore.

    Generated image names depend on this staying stable across runs.
    """
    return _NON_ALPHANUMERIC.sub("_", name)


class MunicipalityLink(BaseModel):
    """One row of the municipality index page."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str


class ExtractedFacts(BaseModel):
    """Facts the text model returns for a municipality article.

    Every field is nullable; a missing or null value means the model found nothing.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    bfs_id: str | None = Field(default=None, description="BFS municipality number")
    image_page_url: str | None = Field(default=None, description="Wiki file page of the best photo")
    flag_page_url: str | None = Field(default=None, description="Wiki file page of the coat of arms")
    geography: str | None = None
    appearance: str | None = None
    points_of_interest: list[str] | None = None

    @field_validator("bfs_id", mode="before")
    @classmethod
    def _coerce_bfs_id(cls, value):
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(int(value))
        return value

    @field_validator("points_of_interest", mode="before")
    @classmethod
    def _drop_blank_points(cls, value):
        if isinstance(value, list):
            return [str(item).strip() for item in value if item is not None and str(item).strip()]
        return value


class MunicipalityRecord(BaseModel):
    """A single municipality in the persisted dataset.

    Serialized with camelCase keys; optional fields that were not found are
    left out of the JSON entirely.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: str
    bfs_id: str = ""
    source_url: str
    image_url: str | None = None
    flag_url: str | None = None
    stylized_image_path: str | None = None
    geography: str | None = None
    appearance: str | None = None
    points_of_interest: list[str] | None = None

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
