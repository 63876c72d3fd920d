"""Turn uploaded photos into inline data URLs bounded in height."""

from __future__ import annotations

import asyncio
import base64
import binascii
from io import BytesIO
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from wardrobe_app.config import DEFAULT_IMAGE_QUALITY, DEFAULT_MAX_IMAGE_HEIGHT
from wardrobe_app.errors import ImageIngestionError
from wardrobe_app.logging_config import get_logger

logger = get_logger(__name__)

FALLBACK_MIME = "application/octet-stream"
RESIZED_MIME = "image/jpeg"

# Multi-picture JPEGs from phone cameras are plain JPEG to a renderer.
MIME_OVERRIDES = {"MPO": RESIZED_MIME}


def encode_data_url(payload: bytes, mime: str) -> str:
    return f"data:{mime};base64,{base64.b64encode(payload).decode('ascii')}"


def decode_data_url(data_url: str) -> Tuple[str, bytes]:
    """Split a base64 data URL into its MIME type and raw bytes."""

    if not data_url.startswith("data:") or "," not in data_url:
        raise ValueError("Not a data URL")
    header, encoded = data_url[5:].split(",", 1)
    if not header.endswith(";base64"):
        raise ValueError("Only base64 data URLs are supported")
    mime = header[: -len(";base64")] or FALLBACK_MIME
    try:
        return mime, base64.b64decode(encoded, validate=True)
    except binascii.Error as exc:
        raise ValueError("Malformed base64 payload") from exc


def _scaled_size(width: int, height: int, max_height: int) -> Tuple[int, int]:
    ratio = max_height / height
    return max(1, int(width * ratio)), max(1, int(height * ratio))


def ingest(
    file_bytes: bytes,
    max_height: int = DEFAULT_MAX_IMAGE_HEIGHT,
    quality: float = DEFAULT_IMAGE_QUALITY,
) -> str:
    """Return an embeddable data URL for an uploaded photo.

    Photos at or under ``max_height`` pass through byte for byte under their
    detected MIME type. Taller photos are scaled down proportionally and
    re-encoded as JPEG at ``quality`` (0..1).
    """

    if not file_bytes:
        raise ImageIngestionError("Uploaded file is empty")
    try:
        with Image.open(BytesIO(file_bytes)) as img:
            img.load()
            width, height = img.size
            fmt = img.format or ""
            mime = MIME_OVERRIDES.get(fmt) or Image.MIME.get(fmt, FALLBACK_MIME)
            if height <= max_height:
                logger.info("Keeping %sx%s %s image as uploaded", width, height, mime)
                return encode_data_url(file_bytes, mime)

            new_size = _scaled_size(width, height, max_height)
            resized = img.convert("RGB").resize(new_size, Image.Resampling.LANCZOS)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise ImageIngestionError(f"Uploaded file is not a supported image: {exc}") from exc

    buffer = BytesIO()
    resized.save(buffer, format="JPEG", quality=round(quality * 100))
    logger.info("Downscaled %sx%s image to %sx%s", width, height, new_size[0], new_size[1])
    return encode_data_url(buffer.getvalue(), RESIZED_MIME)


async def ingest_async(
    file_bytes: bytes,
    max_height: int = DEFAULT_MAX_IMAGE_HEIGHT,
    quality: float = DEFAULT_IMAGE_QUALITY,
) -> str:
    """Run :func:`ingest` off the event loop."""

    return await asyncio.to_thread(ingest, file_bytes, max_height, quality)


__all__ = ["ingest", "ingest_async", "encode_data_url", "decode_data_url"]
