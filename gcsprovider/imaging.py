"""
Image variants for uploaded pictures.

Pipeline:
- Decode the upload buffer; undecodable data is treated as a non-image.
- Scale down to fit a bounding box, preserving aspect ratio. Images already
  inside the box are kept at their size, never enlarged.
- Re-encode in the format matching the file extension, quality 85.

Pure-Pillow, deterministic and side-effect free.
"""

import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".tiff", ".bmp", ".gif"})

QUALITY = 85

# Extension -> Pillow format; anything else is written as GIF
_FORMATS = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".bmp": "BMP",
    ".tiff": "TIFF",
}

# Modes each writer accepts without conversion
_WRITABLE_MODES = {
    "JPEG": {"L", "RGB", "CMYK"},
    "PNG": {"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"},
    "BMP": {"1", "L", "P", "RGB", "RGBA"},
}


@dataclass(frozen=True)
class Variant:
    """A resized rendition and the UploadFile field receiving its URL."""

    suffix: str
    field: str
    max_width: int
    max_height: int


LARGE = Variant("LG", "url_lg", 1024, 768)
MEDIUM = Variant("MD", "url_md", 640, 480)
SMALL = Variant("SM", "url_sm", 320, 240)
THUMBNAIL = Variant("Thumb", "url_thumb", 100, 100)
ORIGINAL = Variant("", "url", 1024, 1024)

VARIANTS = (LARGE, MEDIUM, SMALL, THUMBNAIL)


def is_image_extension(ext: str) -> bool:
    # Case-insensitive: ".JPG" from a camera is an image too
    return ext.lower() in IMAGE_EXTENSIONS


def output_format(ext: str) -> str:
    """Return the Pillow format name used to encode a file extension."""
    return _FORMATS.get(ext.lower(), "GIF")


def read_image(buffer: bytes) -> Image.Image | None:
    """Decode an image buffer. Returns None if it is not a readable image."""
    try:
        image = Image.open(io.BytesIO(buffer))
        image.load()
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        logger.debug(f"Buffer is not a readable image: {e}")
        return None
    # Apply the EXIF orientation; re-encoding drops the tag
    return ImageOps.exif_transpose(image)


def scale_to_fit(image: Image.Image, max_width: int, max_height: int) -> Image.Image:
    """Return a copy of image scaled down to fit max_width x max_height."""
    width, height = image.size
    if width <= max_width and height <= max_height:
        return image.copy()

    ratio = min(max_width / width, max_height / height)
    size = (max(1, round(width * ratio)), max(1, round(height * ratio)))
    return image.resize(size, Image.Resampling.LANCZOS)


def _prepare(image: Image.Image, fmt: str) -> Image.Image:
    modes = _WRITABLE_MODES.get(fmt)
    if modes is None or image.mode in modes:
        return image
    if fmt == "PNG" and image.mode == "PA":
        return image.convert("RGBA")
    return image.convert("RGB")


def encode(image: Image.Image, fmt: str, quality: int = QUALITY) -> bytes:
    """Encode image in the given Pillow format."""
    params = {"quality": quality} if fmt == "JPEG" else {}
    out = io.BytesIO()
    _prepare(image, fmt).save(out, format=fmt, **params)
    return out.getvalue()


def render(image: Image.Image, variant: Variant, fmt: str) -> bytes:
    """Scale image for a variant and encode it."""
    return encode(scale_to_fit(image, variant.max_width, variant.max_height), fmt)
