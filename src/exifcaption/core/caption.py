"""Caption text for a resolved shot."""

from __future__ import annotations

from .models import ShotInfo

CAPTION_TEMPLATE = (
    "{camera_model}, {lens_model}, {focal_length_mm}mm, "
    "F{aperture}, {shutter_speed}, ISO {iso}"
)


def format_caption(info: ShotInfo) -> str:
    return CAPTION_TEMPLATE.format(
        camera_model=info.camera_model,
        lens_model=info.lens_model,
        focal_length_mm=info.focal_length_mm,
        aperture=info.aperture,
        shutter_speed=info.shutter_speed,
        iso=info.iso,
    )
