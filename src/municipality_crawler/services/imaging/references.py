# ABOUTME: Loads the reference photo and coat of arms that condition image generation
# ABOUTME: Rasterizes SVG flags to a padded 512x512 PNG; any failure skips the reference

import io
from dataclasses import dataclass
from pathlib import Path

import httpx
from PIL import Image, ImageOps

from municipality_crawler.utils.logging import get_logger

FLAG_CANVAS_SIZE = (512, 512)
SVG_RENDER_DPI = 300
# JPEGs smaller than this are error pages or placeholders rather than photos
MIN_PHOTO_BYTES = 1000


@dataclass(frozen=True, slots=True)
class ReferenceImage:
    """Image bytes ready to be attached inline to a generation request."""

    data: bytes
    mime_type: str


def guess_mime_type(location: str) -> str:
    """Mime type from the file extension; JPEG when unknown."""
    lowered = location.lower()
    if lowered.endswith(".png"):
        return "image/png"
    return "image/jpeg"


def rasterize_svg(svg_bytes: bytes, size: tuple[int, int] = FLAG_CANVAS_SIZE) -> bytes:
    """Render an SVG and fit it onto a transparent canvas of ``size``, keeping the aspect ratio."""
    # Imported here: cairosvg needs the system cairo library, which only flag rasterizing uses
    import cairosvg

    rendered = cairosvg.svg2png(bytestring=svg_bytes, dpi=SVG_RENDER_DPI)
    with Image.open(io.BytesIO(rendered)) as image:
        fitted = ImageOps.contain(image.convert("RGBA"), size)

    canvas = Image.new("RGBA", size, (0, 0, 0, 0))
    offset = ((size[0] - fitted.width) // 2, (size[1] - fitted.height) // 2)
    canvas.paste(fitted, offset, fitted)

    buffer = io.BytesIO()
    canvas.save(buffer, format="PNG")
    return buffer.getvalue()


class ReferenceImageLoader:
    """Fetches reference images over HTTP (or from disk) for the image model."""

    def __init__(self, http_client: httpx.AsyncClient):
        self.http_client = http_client
        self.logger = get_logger(__name__)

    async def _read_bytes(self, location: str, label: str) -> bytes | None:
        if not location.startswith("http"):
            return Path(location).read_bytes()

        response = await self.http_client.get(location)
        if not response.is_success:
            self.logger.info(f"{label} fetch failed, skipping", status_code=response.status_code, url=location)
            return None
        return response.content

    async def load_photo(self, location: str) -> ReferenceImage | None:
        """Load the municipality photo; None when it is missing, empty or not a usable raster image."""
        try:
            data = await self._read_bytes(location, "Municipality photo")
            if not data:
                self.logger.info("Municipality photo is empty or fetch failed, skipping", url=location)
                return None

            mime_type = guess_mime_type(location)
            if ".svg" in location.lower() or (mime_type == "image/jpeg" and len(data) < MIN_PHOTO_BYTES):
                self.logger.info("Municipality photo may be invalid format, skipping", url=location, size=len(data))
                return None

            return ReferenceImage(data=data, mime_type=mime_type)

        except Exception as e:
            self.logger.info("Could not load municipality photo, continuing without it", url=location, error=str(e))
            return None

    async def load_flag(self, location: str) -> ReferenceImage | None:
        """Load the coat of arms; SVGs are rasterized to PNG first."""
        try:
            data = await self._read_bytes(location, "Flag")
            if not data:
                self.logger.info("Flag image is empty or fetch failed, skipping", url=location)
                return None

            if location.lower().endswith(".svg"):
                return ReferenceImage(data=rasterize_svg(data), mime_type="image/png")

            return ReferenceImage(data=data, mime_type=guess_mime_type(location))

        except Exception as e:
            self.logger.info("Could not load flag image, continuing without it", url=location, error=str(e))
            return None
