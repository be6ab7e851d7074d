"""Exceptions raised while reading exposure metadata."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ExifCaptionError(Exception):
    """Base class for every failure in the caption pipeline."""


class FileAccessError(ExifCaptionError):
    """The source image could not be opened or read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot read {path}: {reason}")


class MalformedMetadataError(ExifCaptionError):
    """No parseable EXIF block was found in the image data."""


class MissingTagError(ExifCaptionError):
    """A required EXIF tag is absent from the metadata block."""

    def __init__(self, tag: str, source: Optional[Path] = None) -> None:
        self.tag = tag
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Required EXIF tag '{tag}' not found{where}")


class ImageDecodeError(ExifCaptionError):
    """The image pixels could not be decoded for annotation."""


class ImageEncodeError(ExifCaptionError):
    """The annotated canvas could not be encoded in the requested format."""


class ValueConversionError(ExifCaptionError):
    """A tag value could not be turned into a number or a string."""

    def __init__(self, tag: str, value: object, reason: str) -> None:
        self.tag = tag
        self.value = value
        super().__init__(f"Cannot convert {tag}={value!r}: {reason}")
