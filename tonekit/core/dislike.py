"""Detect and fix universally disliked colors.

Color preference studies find a broad distaste for dark yellow-greens, the
"bile zone", correlated with distaste for biological waste and rotting food
(Palmer and Schloss, 2010; Schloss and Palmer, Handbook of Color Psychology,
ch. 21, 2015). In HCT terms that is hue 90..111, chroma above 16 and tone
below 65. Fixing a disliked color lifts its tone to 70.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from tonekit.core.conversions import argb_from_rgb, hex_to_rgb, round_half_up
from tonekit.core.hct import Hct

DISLIKED_HUE_MIN = 90
DISLIKED_HUE_MAX = 111
DISLIKED_CHROMA_ABOVE = 16
DISLIKED_TONE_BELOW = 65
FIXED_TONE = 70.0


@dataclass
class DislikeStats:
    """Result of DislikeAnalyzer.analyze_batch()."""

    total: int
    disliked: int
    percentage: float  # NaN when total is 0
    disliked_indices: list[int] = field(default_factory=list)


class DislikeAnalyzer:
    @staticmethod
    def is_disliked(hct: Hct) -> bool:
        """True for dark, non-neutral yellow-greens.

        Compares rounded values: hue in [90, 111], chroma > 16, tone < 65.
        """
        hue = round_half_up(hct.hue)
        hue_passes = DISLIKED_HUE_MIN <= hue <= DISLIKED_HUE_MAX
        chroma_passes = round_half_up(hct.chroma) > DISLIKED_CHROMA_ABOVE
        tone_passes = round_half_up(hct.tone) < DISLIKED_TONE_BELOW
        return hue_passes and chroma_passes and tone_passes

    @staticmethod
    def fix_if_disliked(hct: Hct) -> Hct:
        """Return a lightened copy of a disliked color, or the same instance."""
        if DislikeAnalyzer.is_disliked(hct):
            return Hct.from_hct(hct.hue, hct.chroma, FIXED_TONE)
        return hct

    @staticmethod
    def is_disliked_hex(hex_str: str) -> bool:
        return DislikeAnalyzer.is_disliked(Hct.from_int(argb_from_rgb(*hex_to_rgb(hex_str))))

    @staticmethod
    def fix_if_disliked_hex(hex_str: str) -> str:
        """Fix a hex color; the input string comes back untouched if it was fine."""
        hct = Hct.from_int(argb_from_rgb(*hex_to_rgb(hex_str)))
        fixed = DislikeAnalyzer.fix_if_disliked(hct)
        if fixed is hct:
            return hex_str
        return fixed.to_hex()

    @staticmethod
    def analyze_batch(colors: Sequence[Hct]) -> DislikeStats:
        indices = [i for i, color in enumerate(colors) if DislikeAnalyzer.is_disliked(color)]
        total = len(colors)
        percentage = len(indices) / total * 100.0 if total else float('nan')
        return DislikeStats(total=total, disliked=len(indices), percentage=percentage, disliked_indices=indices)

    @staticmethod
    def fix_batch(colors: Sequence[Hct]) -> list[Hct]:
        return [DislikeAnalyzer.fix_if_disliked(color) for color in colors]
