"""Decode image files into ImageBuffer with Pillow.

Kept out of tonekit.core so the extraction pipeline never depends on an
image codec.
"""

import logging
import os

from PIL import Image

from tonekit.core.types import ImageBuffer

logger = logging.getLogger(__name__)


def load_image(path: str | os.PathLike) -> ImageBuffer:
    """Open any Pillow-readable image and return its RGBA pixels."""
    with Image.open(path) as img:
        rgba = img.convert('RGBA')
        logger.debug('Loaded %s (%s, %dx%d)', path, img.mode, img.width, img.height)
        return ImageBuffer(width=rgba.width, height=rgba.height, data=rgba.tobytes())


def from_pil(image: Image.Image) -> ImageBuffer:
    """Wrap an already-open Pillow image."""
    rgba = image.convert('RGBA')
    return ImageBuffer(width=rgba.width, height=rgba.height, data=rgba.tobytes())
