"""Extract → caption → annotate, as used by the CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image

from .annotator import annotate
from .capabilities import decode_image, decode_metadata, encode_image
from .config import CaptionConfig
from .errors import FileAccessError
from .extractor import MetadataDecoder, extract_shot_info, read_source
from .models import ShotInfo

logger = logging.getLogger(__name__)


@dataclass
class AnnotationResult:
    """Outcome of annotating one source image."""

    source: Path
    info: ShotInfo
    caption: str
    canvas: Image.Image
    destination: Optional[Path] = None


def caption_for(
    source: Path, *, decoder: MetadataDecoder = decode_metadata
) -> ShotInfo:
    data = read_source(source)
    info = extract_shot_info(data, decoder=decoder, source=source)
    logger.info("%s: %s", source, info.caption())
    return info


def write_canvas(canvas: Image.Image, destination: Path, image_format: str) -> None:
    try:
        payload = encode_image(canvas, image_format)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(payload)
    except OSError as exc:
        raise FileAccessError(destination, exc.strerror or str(exc)) from exc
    logger.info("Wrote annotated image → %s", destination)


def run_annotation(
    config: CaptionConfig, *, decoder: MetadataDecoder = decode_metadata
) -> AnnotationResult:
    """Caption ``config.source`` and render it; encode only if a destination is set."""

    data = read_source(config.source)
    info = extract_shot_info(data, decoder=decoder, source=config.source)
    caption = info.caption()
    logger.info("%s: %s", config.source, caption)

    canvas = annotate(decode_image(data), caption, composite=config.composite)

    if config.destination is not None:
        write_canvas(canvas, config.destination, config.image_format)

    return AnnotationResult(
        source=config.source,
        info=info,
        caption=caption,
        canvas=canvas,
        destination=config.destination,
    )
