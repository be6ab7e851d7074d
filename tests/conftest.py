import logging
import os
from pathlib import Path
from typing import Callable, Dict, Optional

import piexif
import pytest
from PIL import Image

from exifcaption import logging_utils


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep logs and configuration overrides inside the test's tmp dir."""

    monkeypatch.setenv("EXIFCAPTION_LOG_DIR", str(tmp_path / "logs"))
    for key in list(os.environ):
        if key.startswith("EXIFCAPTION__"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    yield
    logging_utils._remove_managed_handlers(logging.getLogger())


def _exif_bytes(
    *,
    model: Optional[str] = "X",
    lens: Optional[str] = "Y",
    focal: Optional[tuple] = (50, 1),
    shutter: Optional[tuple] = (7, 1),
    aperture: Optional[tuple] = (4, 1),
    iso: Optional[int] = 200,
) -> bytes:
    zeroth: Dict[int, object] = {}
    exif: Dict[int, object] = {}
    if model is not None:
        zeroth[piexif.ImageIFD.Model] = model
    if lens is not None:
        exif[piexif.ExifIFD.LensModel] = lens
    if focal is not None:
        exif[piexif.ExifIFD.FocalLength] = focal
    if shutter is not None:
        exif[piexif.ExifIFD.ShutterSpeedValue] = shutter
    if aperture is not None:
        exif[piexif.ExifIFD.ApertureValue] = aperture
    if iso is not None:
        exif[piexif.ExifIFD.ISOSpeedRatings] = iso
    return piexif.dump({"0th": zeroth, "Exif": exif})


@pytest.fixture
def make_photo(tmp_path) -> Callable[..., Path]:
    """Write a small JPEG carrying the given exposure tags."""

    def _make(
        name: str = "photo.jpg",
        *,
        size=(240, 60),
        colour=(255, 0, 0),
        with_exif: bool = True,
        **tags,
    ) -> Path:
        path = tmp_path / name
        image = Image.new("RGB", size, colour)
        if with_exif:
            image.save(path, "JPEG", exif=_exif_bytes(**tags))
        else:
            image.save(path, "JPEG")
        return path

    return _make
