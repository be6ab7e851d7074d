"""Data models for exposure captions."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Union

# Raw values as decoded from the EXIF block, keyed by tag name.
TagSet = Dict[str, object]


@dataclass(frozen=True)
class ShotInfo:
    """Exposure and identity fields resolved from one image."""

    camera_model: str
    lens_model: str
    focal_length_mm: int
    aperture: str
    shutter_speed: str
    iso: str

    def caption(self) -> str:
        from .caption import format_caption

        return format_caption(self)

    def as_dict(self) -> Dict[str, Union[str, int]]:
        return asdict(self)
