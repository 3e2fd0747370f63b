"""
Image preprocessing for the vision request.

Downsamples and recompresses a menu photo so the base64-encoded request
stays under the provider's payload ceiling.
"""

import io
import logging

from PIL import Image, ImageOps, UnidentifiedImageError

from menusnap.core.exceptions import ImageEncodingFailed

logger = logging.getLogger(__name__)

MEDIA_TYPE = "image/jpeg"

# JPEG quality in percent; 80 → 10 in steps of 10
INITIAL_QUALITY = 80
MIN_QUALITY = 10
QUALITY_STEP = 10

HISTORY_QUALITY = 70


def _open(data: bytes) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ImageEncodingFailed("decode_failed", details={"error": str(e)}) from e
    return image


def _to_rgb(image: Image.Image) -> Image.Image:
    try:
        image = ImageOps.exif_transpose(image)
        if image.mode != "RGB":
            image = image.convert("RGB")
    except (OSError, ValueError) as e:
        raise ImageEncodingFailed("convert_failed", details={"error": str(e)}) from e
    return image


def _encode_jpeg(image: Image.Image, quality: int) -> bytes:
    buf = io.BytesIO()
    try:
        image.save(buf, format="JPEG", quality=quality)
    except (OSError, ValueError) as e:
        raise ImageEncodingFailed("encode_failed", details={"error": str(e)}) from e
    return buf.getvalue()


def resize_to_fit(image: Image.Image, max_dimension: int) -> Image.Image:
    """
    Scale down so neither side exceeds ``max_dimension``, preserving aspect ratio.

    Uses the smaller of the per-axis ratios so the larger side lands exactly
    on the cap. Images already within bounds are returned as-is.
    """
    width, height = image.size
    if width <= max_dimension and height <= max_dimension:
        return image

    ratio = min(max_dimension / width, max_dimension / height)
    new_size = (max(1, round(width * ratio)), max(1, round(height * ratio)))
    logger.debug(f"Resizing image {width}x{height} -> {new_size[0]}x{new_size[1]}")
    return image.resize(new_size, Image.Resampling.LANCZOS)


def prepare(
    image: Image.Image | bytes,
    max_dimension: int,
    max_bytes: int,
) -> bytes:
    """
    Produce JPEG bytes that satisfy both the dimension and byte budgets.

    Args:
        image: Raw encoded image bytes or a decoded PIL image
        max_dimension: Maximum width/height in pixels
        max_bytes: Maximum encoded size in bytes

    Returns:
        JPEG-encoded bytes. A JPEG input that already fits both budgets is
        returned unchanged.

    Raises:
        ImageEncodingFailed: If the image cannot be decoded or encoded, or
            no quality down to the floor fits ``max_bytes``
    """
    if isinstance(image, (bytes, bytearray)):
        data = bytes(image)
        if not data:
            raise ImageEncodingFailed("empty_image")
        decoded = _open(data)
        width, height = decoded.size
        if (
            decoded.format == "JPEG"
            and width <= max_dimension
            and height <= max_dimension
            and len(data) <= max_bytes
        ):
            logger.debug(f"Image already within budget ({width}x{height}, {len(data)} bytes)")
            return data
        image = decoded

    prepared = resize_to_fit(_to_rgb(image), max_dimension)

    quality = INITIAL_QUALITY
    encoded = _encode_jpeg(prepared, quality)
    while len(encoded) > max_bytes and quality > MIN_QUALITY:
        quality -= QUALITY_STEP
        encoded = _encode_jpeg(prepared, quality)

    if len(encoded) > max_bytes:
        raise ImageEncodingFailed(
            "over_budget",
            details={"size_bytes": len(encoded), "max_bytes": max_bytes, "quality": quality},
        )

    logger.info(
        f"Prepared image {prepared.size[0]}x{prepared.size[1]} "
        f"at quality {quality}: {len(encoded)} bytes"
    )
    return encoded


def compress_for_history(image: Image.Image | bytes) -> bytes:
    """Re-encode a menu photo at reduced quality for the scan history."""
    if isinstance(image, (bytes, bytearray)):
        image = _open(bytes(image))
    return _encode_jpeg(_to_rgb(image), HISTORY_QUALITY)
