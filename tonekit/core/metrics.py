"""Perceptual color distance: Delta E 76, 94 and 2000, plus plain RGB distance."""

import math
from collections.abc import Sequence

from tonekit.core.conversions import rgb_to_lab

Lab = tuple[float, float, float]

JND_THRESHOLD = 2.3  # just noticeable difference
METRICS = ('deltaE2000', 'deltaE94', 'deltaE76', 'euclidean')


def delta_e76(lab1: Lab, lab2: Lab) -> float:
    return math.dist(lab1, lab2)


def delta_e94(lab1: Lab, lab2: Lab, k_l: float = 1.0, k_c: float = 1.0, k_h: float = 1.0) -> float:
    """CIE94 with graphic-arts constants."""
    dl = lab1[0] - lab2[0]
    da = lab1[1] - lab2[1]
    db = lab1[2] - lab2[2]

    c1 = math.hypot(lab1[1], lab1[2])
    c2 = math.hypot(lab2[1], lab2[2])
    dc = c1 - c2
    dh2 = da * da + db * db - dc * dc
    dh = math.sqrt(dh2) if dh2 > 0 else 0.0

    sc = 1 + 0.045 * c1
    sh = 1 + 0.015 * c1
    return math.sqrt((dl / k_l) ** 2 + (dc / (k_c * sc)) ** 2 + (dh / (k_h * sh)) ** 2)


def delta_e2000(lab1: Lab, lab2: Lab) -> float:
    """CIEDE2000 (Sharma, Wu and Dalal, 2005) with kL = kC = kH = 1."""
    l1, a1, b1 = lab1
    l2, a2, b2 = lab2

    c_bar = (math.hypot(a1, b1) + math.hypot(a2, b2)) / 2
    g = 0.5 * (1 - math.sqrt(c_bar**7 / (c_bar**7 + 25.0**7)))
    a1p = a1 * (1 + g)
    a2p = a2 * (1 + g)
    c1p = math.hypot(a1p, b1)
    c2p = math.hypot(a2p, b2)
    h1p = math.degrees(math.atan2(b1, a1p)) % 360.0
    h2p = math.degrees(math.atan2(b2, a2p)) % 360.0

    dlp = l2 - l1
    dcp = c2p - c1p
    dhp = h2p - h1p
    if dhp > 180:
        dhp -= 360
    elif dhp < -180:
        dhp += 360
    d_big_hp = 2 * math.sqrt(c1p * c2p) * math.sin(math.radians(dhp) / 2)

    l_bar = (l1 + l2) / 2
    cp_bar = (c1p + c2p) / 2
    hp_bar = (h1p + h2p) / 2
    if abs(h1p - h2p) > 180:
        hp_bar += 180 if h1p + h2p < 360 else -180

    t = (
        1
        - 0.17 * math.cos(math.radians(hp_bar - 30))
        + 0.24 * math.cos(math.radians(2 * hp_bar))
        + 0.32 * math.cos(math.radians(3 * hp_bar + 6))
        - 0.20 * math.cos(math.radians(4 * hp_bar - 63))
    )
    d_theta = 30 * math.exp(-(((hp_bar - 275) / 25) ** 2))
    rc = 2 * math.sqrt(cp_bar**7 / (cp_bar**7 + 25.0**7))
    rt = -rc * math.sin(math.radians(2 * d_theta))

    sl = 1 + (0.015 * (l_bar - 50) ** 2) / math.sqrt(20 + (l_bar - 50) ** 2)
    sc = 1 + 0.045 * cp_bar
    sh = 1 + 0.015 * cp_bar * t

    dl_term = dlp / sl
    dc_term = dcp / sc
    dh_term = d_big_hp / sh
    return math.sqrt(dl_term**2 + dc_term**2 + dh_term**2 + rt * dc_term * dh_term)


def euclidean_distance(rgb1: tuple[int, int, int], rgb2: tuple[int, int, int]) -> float:
    # ints, not uint8: (0 - 200) must not wrap
    return math.dist([int(c) for c in rgb1], [int(c) for c in rgb2])


def color_distance(rgb1: tuple[int, int, int], rgb2: tuple[int, int, int], metric: str = 'deltaE2000') -> float:
    """Distance between two sRGB colors using the named metric."""
    if metric == 'euclidean':
        return euclidean_distance(rgb1, rgb2)
    if metric == 'deltaE76':
        return delta_e76(rgb_to_lab(rgb1), rgb_to_lab(rgb2))
    if metric == 'deltaE94':
        return delta_e94(rgb_to_lab(rgb1), rgb_to_lab(rgb2))
    if metric == 'deltaE2000':
        return delta_e2000(rgb_to_lab(rgb1), rgb_to_lab(rgb2))
    raise ValueError(f'Unknown metric: {metric}. Available: {", ".join(METRICS)}')


def are_colors_similar(
    rgb1: tuple[int, int, int], rgb2: tuple[int, int, int], threshold: float = JND_THRESHOLD
) -> bool:
    return color_distance(rgb1, rgb2) <= threshold


def weighted_rgb_distance(
    rgb1: tuple[int, int, int], rgb2: tuple[int, int, int], weights: tuple[float, float, float] = (0.3, 0.59, 0.11)
) -> float:
    """RGB distance with each channel scaled by eye sensitivity (luma weights by default)."""
    return math.sqrt(sum(((int(a) - int(b)) * w) ** 2 for a, b, w in zip(rgb1, rgb2, weights)))


def find_most_similar_color(
    base: tuple[int, int, int], colors: Sequence[tuple[int, int, int]], metric: str = 'deltaE2000'
) -> tuple[int, int, int] | None:
    """Closest candidate to base, the earliest one on ties. None when colors is empty."""
    if not colors:
        return None
    return min(colors, key=lambda c: color_distance(base, c, metric))


def find_most_different_color(
    base: tuple[int, int, int], colors: Sequence[tuple[int, int, int]], metric: str = 'deltaE2000'
) -> tuple[int, int, int] | None:
    """Farthest candidate from base, the earliest one on ties. None when colors is empty."""
    if not colors:
        return None
    return max(colors, key=lambda c: color_distance(base, c, metric))
