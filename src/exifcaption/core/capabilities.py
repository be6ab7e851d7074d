"""Thin wrappers around the image codec, EXIF parser and text renderer.

Everything format-specific is delegated to Pillow and piexif; the rest of
the package only sees a :data:`TagSet` mapping and Pillow images.
"""

from __future__ import annotations

import io
import logging
import struct
from typing import Dict, Tuple

import piexif
from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from .errors import ImageDecodeError, ImageEncodeError, MalformedMetadataError
from .models import TagSet

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int, int]

# Tag name -> (piexif IFD name, tag id)
TAG_LOCATIONS: Dict[str, Tuple[str, int]] = {
    "Model": ("0th", piexif.ImageIFD.Model),
    "LensModel": ("Exif", piexif.ExifIFD.LensModel),
    "ShutterSpeedValue": ("Exif", piexif.ExifIFD.ShutterSpeedValue),
    "ApertureValue": ("Exif", piexif.ExifIFD.ApertureValue),
    "FocalLength": ("Exif", piexif.ExifIFD.FocalLength),
    "ISOSpeedRatings": ("Exif", piexif.ExifIFD.ISOSpeedRatings),
}

_JPEG_MAGIC = b"\xff\xd8"
_TIFF_MAGICS = (b"II*\x00", b"MM\x00*")
_EXIF_IFDS = ("0th", "Exif", "GPS", "Interop", "1st")
_FORMAT_ALIASES = {"JPG": "JPEG", "TIF": "TIFF"}


def _raw_exif_from_container(data: bytes) -> bytes:
    try:
        with Image.open(io.BytesIO(data)) as image:
            raw_exif = image.info.get("exif")
    except (UnidentifiedImageError, OSError) as exc:
        raise MalformedMetadataError(f"Unrecognised image container: {exc}") from exc
    if not raw_exif:
        raise MalformedMetadataError("Image carries no EXIF block")
    return raw_exif


def _load_exif(data: bytes) -> Dict[str, object]:
    # piexif reads JPEG and TIFF directly; other containers go through Pillow
    if data[:2] == _JPEG_MAGIC or data[:4] in _TIFF_MAGICS:
        source = data
    else:
        source = _raw_exif_from_container(data)
    try:
        return piexif.load(source)
    except (piexif.InvalidImageDataError, IndexError, ValueError, struct.error) as exc:
        raise MalformedMetadataError(f"EXIF block could not be parsed: {exc}") from exc


def decode_metadata(data: bytes) -> TagSet:
    """Return the exposure tags present in the EXIF block of *data*."""

    exif = _load_exif(data)
    if not any(exif.get(ifd_name) for ifd_name in _EXIF_IFDS):
        raise MalformedMetadataError("Image carries no EXIF block")

    tags: TagSet = {}
    for name, (ifd_name, tag_id) in TAG_LOCATIONS.items():
        value = (exif.get(ifd_name) or {}).get(tag_id)
        if value is not None:
            tags[name] = value
    logger.debug("Decoded EXIF tags: %s", sorted(tags))
    return tags


def decode_image(data: bytes) -> Image.Image:
    """Decode *data* into a fully loaded Pillow image."""

    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageDecodeError(f"Image data could not be decoded: {exc}") from exc
    return image


def normalise_format(image_format: str) -> str:
    name = image_format.strip().upper()
    return _FORMAT_ALIASES.get(name, name)


def encode_image(image: Image.Image, image_format: str = "PNG") -> bytes:
    """Encode *image* with the named Pillow format."""

    image_format = normalise_format(image_format)
    if image_format == "JPEG" and image.mode != "RGB":
        # JPEG has no alpha channel
        image = image.convert("RGB")
    buffer = io.BytesIO()
    try:
        image.save(buffer, format=image_format)
    except (KeyError, OSError, ValueError) as exc:
        raise ImageEncodeError(
            f"Cannot encode {image.mode} canvas as {image_format}: {exc}"
        ) from exc
    return buffer.getvalue()


def draw_text(
    canvas: Image.Image,
    font: ImageFont.ImageFont,
    color: Color,
    position: Tuple[int, int],
    text: str,
) -> Image.Image:
    ImageDraw.Draw(canvas).text(position, text, font=font, fill=color)
    return canvas
