"""Render a caption onto a canvas the size of the source image."""

from __future__ import annotations

import logging

from PIL import Image, ImageFont

from .capabilities import Color, draw_text

logger = logging.getLogger(__name__)

CAPTION_COLOR: Color = (200, 100, 0, 255)
CAPTION_ORIGIN = (0, 0)


def load_caption_font() -> ImageFont.ImageFont:
    """Pillow's built-in monospace bitmap face (independent of FreeType)."""

    return ImageFont.load_default_imagefont()


def annotate(
    image: Image.Image, caption: str, *, composite: bool = False
) -> Image.Image:
    """Return a new RGBA canvas matching *image* with *caption* drawn at the origin.

    By default the source pixels are not carried over, so the canvas is
    transparent apart from the text. ``composite=True`` pastes the source
    under the caption instead.
    """

    canvas = Image.new("RGBA", image.size)
    if composite:
        canvas.paste(image.convert("RGBA"), (0, 0))

    draw_text(canvas, load_caption_font(), CAPTION_COLOR, CAPTION_ORIGIN, caption)
    logger.debug(
        "Annotated %dx%d canvas (composite=%s)", canvas.width, canvas.height, composite
    )
    return canvas
