"""Resolve a :class:`ShotInfo` from the EXIF block of an image."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Tuple

from .apex import (
    aperture_from_apex,
    rational_pair,
    rational_to_float,
    round_apex,
    shutter_speed_from_apex,
)
from .capabilities import decode_metadata
from .errors import FileAccessError, MissingTagError, ValueConversionError
from .models import ShotInfo, TagSet

logger = logging.getLogger(__name__)

MetadataDecoder = Callable[[bytes], TagSet]

REQUIRED_TAGS: Tuple[str, ...] = (
    "Model",
    "LensModel",
    "ShutterSpeedValue",
    "ApertureValue",
    "FocalLength",
    "ISOSpeedRatings",
)


def _tag_string(tag: str, value: object) -> str:
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueConversionError(tag, value, "not valid UTF-8") from exc
    if not isinstance(value, str):
        raise ValueConversionError(tag, value, "expected a string value")
    return value.rstrip("\x00").strip()


def _iso_string(value: object) -> str:
    if isinstance(value, (tuple, list)):
        if not value:
            raise ValueConversionError("ISOSpeedRatings", value, "empty value")
        if len(value) == 1:
            return str(value[0])
        return "[" + ",".join(str(item) for item in value) + "]"
    if isinstance(value, bytes):
        return _tag_string("ISOSpeedRatings", value)
    return str(value)


def _focal_length_mm(value: object) -> int:
    num, den = rational_pair(value, "FocalLength")
    millimetres = num // den
    if millimetres <= 0:
        raise ValueConversionError("FocalLength", value, "not a positive length")
    return millimetres


def extract_shot_info(
    data: bytes,
    *,
    decoder: MetadataDecoder = decode_metadata,
    source: Optional[Path] = None,
) -> ShotInfo:
    """Build a :class:`ShotInfo` from raw image bytes.

    Raises ``MalformedMetadataError`` when the decoder finds no EXIF block,
    ``MissingTagError`` for the first absent required tag and
    ``ValueConversionError`` for values that cannot be interpreted.
    """

    tags = decoder(data)
    for tag in REQUIRED_TAGS:
        if tags.get(tag) is None:
            raise MissingTagError(tag, source)

    shutter_apex = round_apex(
        rational_to_float(tags["ShutterSpeedValue"], "ShutterSpeedValue")
    )
    aperture_apex = round_apex(
        rational_to_float(tags["ApertureValue"], "ApertureValue")
    )

    shutter_speed = shutter_speed_from_apex(shutter_apex)
    if not shutter_speed:
        logger.warning(
            "Shutter speed APEX %d is outside the whole-stop table; leaving it blank",
            shutter_apex,
        )

    info = ShotInfo(
        camera_model=_tag_string("Model", tags["Model"]),
        lens_model=_tag_string("LensModel", tags["LensModel"]),
        focal_length_mm=_focal_length_mm(tags["FocalLength"]),
        aperture=aperture_from_apex(aperture_apex),
        shutter_speed=shutter_speed,
        iso=_iso_string(tags["ISOSpeedRatings"]),
    )
    logger.debug("Resolved shot info for %s: %s", source or "<bytes>", info)
    return info


def read_source(path: Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise FileAccessError(path, exc.strerror or str(exc)) from exc


def extract_shot_info_from_path(
    path: Path, *, decoder: MetadataDecoder = decode_metadata
) -> ShotInfo:
    return extract_shot_info(read_source(path), decoder=decoder, source=path)
