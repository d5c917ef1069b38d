"""Score and rank quantized colors for use as a palette.

Given a map of colors to population counts, removes unsuitable colors and
ranks the rest on two things: how much of the image sits near the color's
hue, and how vivid it is relative to a target chroma. Chroma above target is
rewarded three times as strongly as chroma below it.

Selection is greedy by score. A candidate is skipped when its hue is too close
to one already chosen; the separation starts at 90 degrees and relaxes one
degree at a time down to the minimum (15) until enough colors are found, so
well-separated hues win over near-duplicates.
"""

import logging
from collections.abc import Mapping

from tonekit.core.conversions import round_half_up
from tonekit.core.hct import Hct, difference_degrees

logger = logging.getLogger(__name__)

TARGET_CHROMA = 48.0
WEIGHT_PROPORTION = 0.7
WEIGHT_CHROMA_ABOVE = 0.3
WEIGHT_CHROMA_BELOW = 0.1
CUTOFF_CHROMA = 5.0
CUTOFF_EXCITED_PROPORTION = 0.01
FALLBACK_COLOR_ARGB = 0xFF4285F4  # Google Blue
MAX_HUE_SEPARATION = 90
MIN_HUE_SEPARATION = 15


def _hue_bucket(degrees: float) -> int:
    return int(degrees) % 360


def _excited_proportions(colors: list[tuple[int, Hct, int]], population_sum: int) -> list[float]:
    """Share of the population within -14..+15 degrees of each integer hue."""
    hue_population = [0] * 360
    for _argb, hct, population in colors:
        hue_population[_hue_bucket(hct.hue)] += population

    excited = [0.0] * 360
    for hue in range(360):
        proportion = hue_population[hue] / population_sum
        for offset in range(-14, 16):
            excited[_hue_bucket(hue + offset)] += proportion
    return excited


def score(
    colors_to_population: Mapping[int, int],
    desired: int = 4,
    filter_colors: bool = True,
    fallback_color_argb: int = FALLBACK_COLOR_ARGB,
    min_hue_separation: int = MIN_HUE_SEPARATION,
) -> list[int]:
    """Rank colors by suitability for a palette, best first.

    Args:
        colors_to_population: packed ARGB color -> pixel count
        desired: maximum number of colors to return
        filter_colors: drop low-chroma and rare-hue candidates
        fallback_color_argb: returned alone when nothing qualifies
        min_hue_separation: smallest hue distance allowed between picks

    Returns:
        Packed ARGB colors in selection order; never empty.
    """
    if desired < 1:
        raise ValueError(f'desired must be >= 1, got {desired}')

    colors = [(argb, Hct.from_int(argb), population) for argb, population in colors_to_population.items()]
    population_sum = sum(population for _, _, population in colors)
    if not colors or population_sum <= 0:
        return [fallback_color_argb]

    excited = _excited_proportions(colors, population_sum)

    scored: list[tuple[int, Hct, float]] = []
    for argb, hct, _population in colors:
        proportion = excited[_hue_bucket(round_half_up(hct.hue))]
        if filter_colors and (hct.chroma < CUTOFF_CHROMA or proportion <= CUTOFF_EXCITED_PROPORTION):
            continue

        proportion_score = proportion * 100.0 * WEIGHT_PROPORTION
        chroma_weight = WEIGHT_CHROMA_BELOW if hct.chroma < TARGET_CHROMA else WEIGHT_CHROMA_ABOVE
        chroma_score = (hct.chroma - TARGET_CHROMA) * chroma_weight
        scored.append((argb, hct, proportion_score + chroma_score))

    if not scored:
        logger.info('No suitable colors among %d candidates, using fallback', len(colors))
        return [fallback_color_argb]

    # stable: equal scores keep input order
    scored.sort(key=lambda item: -item[2])

    chosen: list[tuple[int, Hct]] = []
    for diff_degrees in range(max(MAX_HUE_SEPARATION, min_hue_separation), min_hue_separation - 1, -1):
        chosen.clear()
        for argb, hct, _score in scored:
            if not any(difference_degrees(hct.hue, other.hue) < diff_degrees for _, other in chosen):
                chosen.append((argb, hct))
            if len(chosen) >= desired:
                break
        if len(chosen) >= desired:
            break

    return [argb for argb, _hct in chosen]
