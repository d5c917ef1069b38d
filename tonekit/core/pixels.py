"""Pixel ingestion: RGBA buffer -> packed opaque ARGB ints ready for quantization."""

import logging
import math
from collections.abc import Sequence

import numpy as np

from tonekit.core.types import ImageBuffer, MalformedImageError

logger = logging.getLogger(__name__)

MIN_ALPHA = 2.55  # 1% opacity
MIN_LUMA = 12.75  # 5%
MAX_LUMA = 242.25  # 95%
DEFAULT_MAX_PIXELS = 10000


def _rgba_array(image: ImageBuffer) -> np.ndarray:
    """Validate the buffer and view it as an (N, 4) int array.

    Raises MalformedImageError if the byte count is not a multiple of 4 or
    does not match width * height * 4.
    """
    if isinstance(image.data, (bytes, bytearray, memoryview)):
        flat = np.frombuffer(image.data, dtype=np.uint8).astype(np.int64)
    else:
        flat = np.asarray(image.data, dtype=np.int64).reshape(-1)

    if flat.size % 4 != 0:
        raise MalformedImageError(f'RGBA buffer length {flat.size} is not a multiple of 4')
    expected = image.width * image.height * 4
    if flat.size != expected:
        raise MalformedImageError(
            f'RGBA buffer length {flat.size} does not match {image.width}x{image.height} (expected {expected})'
        )
    return flat.reshape(-1, 4)


def _pack(rgb: np.ndarray) -> list[int]:
    packed = (0xFF << 24) | (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]
    return [int(p) for p in packed]


def image_data_to_pixels(image: ImageBuffer) -> list[int]:
    """Pack every visible pixel as opaque ARGB, in buffer order, without dedup."""
    rgba = _rgba_array(image)
    visible = rgba[rgba[:, 3] >= MIN_ALPHA]
    pixels = _pack(np.clip(visible[:, :3], 0, 255))
    logger.debug('Ingested %d of %d pixels (%dx%d)', len(pixels), len(rgba), image.width, image.height)
    return pixels


def sample_pixels(pixels: Sequence[int], max_pixels: int = DEFAULT_MAX_PIXELS) -> list[int]:
    """Deterministic uniform-stride subsample: every ceil(len/max)-th pixel from index 0."""
    if len(pixels) <= max_pixels:
        return list(pixels)
    step = math.ceil(len(pixels) / max_pixels)
    return list(pixels[::step])


def filter_extreme_tones(pixels: Sequence[int]) -> list[int]:
    """Drop near-black and near-white pixels by luma (0.299R + 0.587G + 0.114B)."""
    if not pixels:
        return []
    arr = np.asarray(pixels, dtype=np.int64)
    r = (arr >> 16) & 0xFF
    g = (arr >> 8) & 0xFF
    b = arr & 0xFF
    luma = 0.299 * r + 0.587 * g + 0.114 * b
    keep = (luma > MIN_LUMA) & (luma < MAX_LUMA)
    return [int(p) for p in arr[keep]]
