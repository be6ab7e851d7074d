"""Core exposure-caption logic."""

from .apex import aperture_from_apex, round_apex, shutter_speed_from_apex
from .caption import format_caption
from .errors import (
    ExifCaptionError,
    FileAccessError,
    ImageDecodeError,
    ImageEncodeError,
    MalformedMetadataError,
    MissingTagError,
    ValueConversionError,
)
from .models import ShotInfo

__all__ = [
    "ExifCaptionError",
    "FileAccessError",
    "ImageDecodeError",
    "ImageEncodeError",
    "MalformedMetadataError",
    "MissingTagError",
    "ShotInfo",
    "ValueConversionError",
    "aperture_from_apex",
    "format_caption",
    "round_apex",
    "shutter_speed_from_apex",
]
