# ABOUTME: Generates a stylized isometric diorama for a municipality with the Gemini image model
# ABOUTME: Skips work when an image already exists, retries transient API errors with exponential backoff

import asyncio
import base64
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
from google import genai
from google.genai import types

from municipality_crawler.config import Config
from municipality_crawler.core.models import sanitize_filename
from municipality_crawler.extraction.wiki.base import create_http_client
from municipality_crawler.services.genai import user_turn
from municipality_crawler.services.imaging.references import ReferenceImage, ReferenceImageLoader
from municipality_crawler.utils.logging import get_logger, log_api_call
from municipality_crawler.utils.retry import generation_retrying, is_transient_generation_error

DEFAULT_GEOGRAPHY = "rolling hills and forests"
DEFAULT_LANDMARKS = "The scene features traditional Swiss architecture and buildings."


@dataclass(slots=True)
class StylizeRequest:
    """What the stylizer knows about a municipality."""

    name: str
    geography: str | None = None
    points_of_interest: list[str] = field(default_factory=list)
    image_url: str | None = None
    flag_url: str | None = None


@dataclass(frozen=True, slots=True)
class GeneratedImage:
    data: bytes
    mime_type: str

    @property
    def extension(self) -> str:
        return "jpg" if "jpeg" in self.mime_type else "png"


def describe_landmarks(points_of_interest: list[str] | None) -> str:
    """English list grammar for the landmark sentence (Oxford comma for three or more)."""
    pois = points_of_interest or []
    if not pois:
        return DEFAULT_LANDMARKS
    if len(pois) == 1:
        return f"The scene prominently features {pois[0]}."
    if len(pois) == 2:
        return f"The scene prominently features {pois[0]} and {pois[1]}."
    return f"The scene prominently features {', '.join(pois[:-1])}, and {pois[-1]}."


def build_stylized_prompt(request: StylizeRequest, with_photo: bool = False, with_flag: bool = False) -> str:
    """Build the image generation prompt.

    Args:
        request: Municipality facts
        with_photo: A reference photo is attached to the request
        with_flag: A coat of arms image is attached to the request
    """
    geography = request.geography or DEFAULT_GEOGRAPHY

    prompt = (
        f"A stylized 3D isometric diorama of the municipality {request.name}, "
        "visualized as a cute miniature floating island on a square base."
    )
    if with_photo:
        prompt += (
            " Use the reference photograph to capture the architectural style and landscape features"
            " of the real location."
        )

    prompt += (
        f" The scene features {geography}. {describe_landmarks(request.points_of_interest)}"
        " Surround this with cluster of traditional Swiss houses, green trees, and winding roads."
    )

    if with_flag:
        prompt += (
            " Include the municipality's coat of arms flag (shown in the reference image) on a flagpole"
            " or displayed on one of the buildings."
        )

    prompt += (
        " The style is low-poly, smooth, vibrant, and toy-like."
        f" The name '{request.name}' is written in large, bold, dark-grey sans-serif text floating above the scene."
        " Soft, bright lighting with a clean pastel background."
    )
    return prompt


def stylized_image_path(images_dir: Path, name: str, extension: str) -> Path:
    return images_dir / f"{sanitize_filename(name)}_stylized.{extension}"


def find_existing_stylized_image(images_dir: Path, name: str) -> Path | None:
    """Return a previously generated image for ``name``; PNG wins over JPEG."""
    for extension in ("png", "jpg"):
        candidate = stylized_image_path(images_dir, name, extension)
        if candidate.exists():
            return candidate
    return None


def find_inline_image(response: Any) -> GeneratedImage | None:
    """Pick the first part of the first candidate that carries inline image data."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates or candidates[0].content is None:
        return None

    for part in candidates[0].content.parts or []:
        inline = getattr(part, "inline_data", None)
        if inline is None or not inline.data:
            continue
        data = inline.data
        if isinstance(data, str):
            data = base64.b64decode(data)
        return GeneratedImage(data=data, mime_type=inline.mime_type or "image/png")

    return None


class ImageStylizer:
    """Turns municipality facts into an AI-generated diorama on disk."""

    def __init__(
        self,
        config: Config,
        genai_client: genai.Client,
        http_client: httpx.AsyncClient | None = None,
        reference_loader: ReferenceImageLoader | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.config = config
        self.genai_client = genai_client
        self.images_dir = config.images_dir
        self._owned_client = None
        if reference_loader is None and http_client is None:
            self._owned_client = http_client = create_http_client(config)
        self.reference_loader = reference_loader or ReferenceImageLoader(http_client)
        self._sleep = sleep
        self.logger = get_logger(__name__)

    async def generate(self, request: StylizeRequest) -> str | None:
        """Generate (or reuse) the stylized image for a municipality.

        Returns:
            Path of the image file, or None when nothing could be generated
        """
        existing = find_existing_stylized_image(self.images_dir, request.name)
        if existing is not None:
            self.logger.info("Stylized image already exists", municipality=request.name, path=str(existing))
            return str(existing)

        photo, flag = await self._load_references(request)
        prompt = build_stylized_prompt(request, with_photo=photo is not None, with_flag=flag is not None)

        parts = [types.Part.from_text(text=prompt)]
        for reference in (photo, flag):
            if reference is not None:
                parts.append(types.Part.from_bytes(data=reference.data, mime_type=reference.mime_type))

        try:
            async for attempt in generation_retrying(
                self.config.max_image_attempts, sleep=self._sleep, label=request.name
            ):
                with attempt:
                    response = await self._generate_content(parts)
        except Exception as e:
            if is_transient_generation_error(e):
                self.logger.warning(
                    "Could not generate stylized image (API error)",
                    municipality=request.name,
                    attempts=self.config.max_image_attempts,
                    error=str(e),
                )
            else:
                self.logger.warning("Error generating stylized image", municipality=request.name, error=str(e))
            return None

        try:
            image = find_inline_image(response)
            if image is None:
                self.logger.warning("No image generated", municipality=request.name)
                return None

            path = self._save(request.name, image)
        except Exception as e:
            self.logger.warning("Error generating stylized image", municipality=request.name, error=str(e))
            return None

        self.logger.info("Generated stylized image", municipality=request.name, path=str(path))
        return str(path)

    async def _load_references(self, request: StylizeRequest) -> tuple[ReferenceImage | None, ReferenceImage | None]:
        photo = await self.reference_loader.load_photo(request.image_url) if request.image_url else None
        flag = await self.reference_loader.load_flag(request.flag_url) if request.flag_url else None
        return photo, flag

    @log_api_call("gemini-image")
    async def _generate_content(self, parts: list[types.Part]):
        return await self.genai_client.aio.models.generate_content(
            model=self.config.image_model,
            contents=user_turn(parts),
            config=types.GenerateContentConfig(response_modalities=["TEXT", "IMAGE"]),
        )

    def _save(self, name: str, image: GeneratedImage) -> Path:
        self.images_dir.mkdir(parents=True, exist_ok=True)
        path = stylized_image_path(self.images_dir, name, image.extension)
        path.write_bytes(image.data)
        return path

    async def close(self) -> None:
        """Close the HTTP client this stylizer created for itself, if any."""
        if self._owned_client is not None:
            await self._owned_client.aclose()
