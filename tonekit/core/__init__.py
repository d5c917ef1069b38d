"""tonekit.core: Foundation layer.

Contains the color engine (conversions, HCT), the extraction pipeline
(pixels, quantizer, score, extract), dislike analysis, metrics, tonal
palettes, type definitions, configuration and the report builder.
This module has NO dependencies on tonekit.commands or the CLI entry point.
Only stdlib, numpy and scikit-learn are allowed here.
"""

from tonekit.core.contrast import contrast_ratio, meets_contrast_aa, meets_contrast_aaa, relative_luminance
from tonekit.core.dislike import DislikeAnalyzer, DislikeStats
from tonekit.core.extract import (
    QUALITY_SETTINGS,
    assign_theme_roles,
    extract_colors,
    extract_theme_palette,
)
from tonekit.core.hct import Hct, hct_to_rgb, rgb_to_hct
from tonekit.core.metrics import (
    are_colors_similar,
    color_distance,
    find_most_different_color,
    find_most_similar_color,
    weighted_rgb_distance,
)
from tonekit.core.pixels import filter_extreme_tones, image_data_to_pixels, sample_pixels
from tonekit.core.quantizer import quantize
from tonekit.core.score import score
from tonekit.core.tonal import TonalPalette
from tonekit.core.types import (
    EmptyExtractionError,
    ExtractedColor,
    ExtractionOptions,
    ImageBuffer,
    MalformedImageError,
    Rgb,
    ThemePalette,
    TonekitError,
)

__all__ = [
    'QUALITY_SETTINGS',
    'DislikeAnalyzer',
    'DislikeStats',
    'EmptyExtractionError',
    'ExtractedColor',
    'ExtractionOptions',
    'Hct',
    'ImageBuffer',
    'MalformedImageError',
    'Rgb',
    'ThemePalette',
    'TonalPalette',
    'TonekitError',
    'are_colors_similar',
    'assign_theme_roles',
    'color_distance',
    'contrast_ratio',
    'extract_colors',
    'extract_theme_palette',
    'filter_extreme_tones',
    'find_most_different_color',
    'find_most_similar_color',
    'hct_to_rgb',
    'image_data_to_pixels',
    'meets_contrast_aa',
    'meets_contrast_aaa',
    'quantize',
    'relative_luminance',
    'rgb_to_hct',
    'sample_pixels',
    'score',
    'weighted_rgb_distance',
]
