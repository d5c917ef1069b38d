"""Palette extraction from decoded images.

Pipeline: ingest RGBA -> sample -> drop extreme tones -> quantize -> score
-> optional dislike fix -> percentages. extract_theme_palette() runs the
pipeline at high quality and assigns semantic roles to the result.
"""

import dataclasses
import logging
from collections.abc import Sequence
from typing import Any, NamedTuple

from tonekit.core.conversions import rgb_to_hex
from tonekit.core.dislike import DislikeAnalyzer
from tonekit.core.hct import Hct, difference_degrees
from tonekit.core.pixels import filter_extreme_tones, image_data_to_pixels, sample_pixels
from tonekit.core.quantizer import quantize
from tonekit.core.score import score
from tonekit.core.types import (
    EmptyExtractionError,
    ExtractedColor,
    ExtractionOptions,
    ImageBuffer,
    ThemePalette,
)

logger = logging.getLogger(__name__)


class QualityTier(NamedTuple):
    max_pixels: int
    quantize_colors: int


QUALITY_SETTINGS = {
    'low': QualityTier(max_pixels=5000, quantize_colors=64),
    'medium': QualityTier(max_pixels=10000, quantize_colors=128),
    'high': QualityTier(max_pixels=25000, quantize_colors=256),
}

THEME_OPTIONS = ExtractionOptions(
    quality='high',
    max_colors=8,
    filter=True,
    scoring_enabled=True,
    fix_disliked_colors=True,
)

NEUTRAL_MAX_CHROMA = 20.0
SECONDARY_SEARCH_LIMIT = 4  # secondary is picked from indices 1..3


def resolve_options(options: ExtractionOptions | None = None, **overrides: Any) -> ExtractionOptions:
    """Merge keyword overrides into options and validate the result."""
    resolved = dataclasses.replace(options or ExtractionOptions(), **overrides)
    if resolved.quality not in QUALITY_SETTINGS:
        raise ValueError(f'Unknown quality {resolved.quality!r}. Available: {", ".join(QUALITY_SETTINGS)}')
    if resolved.max_colors < 1:
        raise ValueError(f'max_colors must be >= 1, got {resolved.max_colors}')
    return resolved


def _to_extracted(argb: int, quantized: dict[int, int], total: int, fix_disliked: bool) -> ExtractedColor:
    # population stays with the source cluster even when the color is fixed
    population = quantized.get(argb, 0)
    hct = Hct.from_int(argb)
    if fix_disliked:
        hct = DislikeAnalyzer.fix_if_disliked(hct)
    rgb = hct.to_rgb()
    return ExtractedColor(
        hex=rgb_to_hex(rgb),
        rgb=rgb,
        hct=hct.values(),
        population=population,
        percentage=population / total * 100.0,
    )


def extract_colors(
    image: ImageBuffer,
    options: ExtractionOptions | None = None,
    **overrides: Any,
) -> list[ExtractedColor]:
    """Extract an ordered palette from an RGBA image.

    Percentages are relative to the whole quantized population, so the
    selected colors need not add up to 100. Returns [] when no pixel survives
    ingestion and filtering.
    """
    opts = resolve_options(options, **overrides)
    tier = QUALITY_SETTINGS[opts.quality]

    pixels = image_data_to_pixels(image)
    pixels = sample_pixels(pixels, tier.max_pixels)
    if opts.filter:
        pixels = filter_extreme_tones(pixels)

    quantized = quantize(pixels, tier.quantize_colors)
    if not quantized:
        logger.debug('Nothing to extract: no pixels left after filtering')
        return []

    if opts.scoring_enabled:
        selected = score(quantized, desired=opts.max_colors, filter_colors=opts.filter)
    else:
        by_population = sorted(quantized.items(), key=lambda item: -item[1])
        selected = [argb for argb, _count in by_population[: opts.max_colors]]

    total = sum(quantized.values())
    colors = [_to_extracted(argb, quantized, total, opts.fix_disliked_colors) for argb in selected]
    logger.debug('Extracted %s from %d pixels', [c.hex for c in colors], len(pixels))
    return colors


def assign_theme_roles(colors: Sequence[ExtractedColor]) -> ThemePalette:
    """Pick primary/secondary/tertiary/neutral/error from an ordered palette."""
    if not colors:
        raise EmptyExtractionError('No colors to assign theme roles from')

    palette = ThemePalette(primary=colors[0])
    primary_hue = colors[0].hct.h

    if len(colors) > 1:
        secondary_index = 1
        max_hue_diff = 0.0
        for i in range(1, min(len(colors), SECONDARY_SEARCH_LIMIT)):
            hue_diff = difference_degrees(primary_hue, colors[i].hct.h)
            if hue_diff > max_hue_diff:
                max_hue_diff = hue_diff
                secondary_index = i
        palette.secondary = colors[secondary_index]

        if len(colors) > 2:
            secondary_hue = colors[secondary_index].hct.h
            tertiary_index = -1
            best_score = 0.0
            for i in range(1, len(colors)):
                if i == secondary_index:
                    continue
                hue = colors[i].hct.h
                candidate_score = min(difference_degrees(primary_hue, hue), difference_degrees(secondary_hue, hue))
                if candidate_score > best_score:
                    best_score = candidate_score
                    tertiary_index = i
            if tertiary_index != -1:
                palette.tertiary = colors[tertiary_index]

    palette.neutral = next((c for c in colors if c.hct.c < NEUTRAL_MAX_CHROMA), None)
    palette.error = next((c for c in colors if c.hct.h >= 350.0 or c.hct.h <= 40.0), None)
    return palette


def extract_theme_palette(image: ImageBuffer) -> ThemePalette:
    """Extract a UI theme palette. Raises EmptyExtractionError if the image yields no colors."""
    colors = extract_colors(image, THEME_OPTIONS)
    if not colors:
        raise EmptyExtractionError('No colors could be extracted from image')
    return assign_theme_roles(colors)
