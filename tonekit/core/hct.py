"""HCT (hue, chroma, tone) color model built on CIE LAB polar coordinates.

Tone is L*, chroma is the LAB radius sqrt(a*a + b*b) and hue the LAB angle in
degrees. Converting HCT back to RGB is a gamut search: the requested chroma is
kept when it fits in sRGB, otherwise the largest chroma that fits at the same
hue and tone is found by bisection.

Round trips are lossy. Expect roughly +/-1 tone and +/-5 degrees hue once
chroma exceeds 1; grays carry no meaningful hue.
"""

import logging
import math

from tonekit.core.conversions import (
    argb_from_rgb,
    clamp_channel,
    lab_to_xyz,
    rgb_from_argb,
    rgb_to_hex,
    rgb_to_lab,
    xyz_to_linear_rgb,
)
from tonekit.core.types import HctValues, Rgb

logger = logging.getLogger(__name__)

# Solver constants
CHROMA_EPSILON = 0.01  # bisection stops once the chroma interval is this narrow
CHROMA_STEP = 1.0  # linear fallback step when bisection finds nothing
MIN_CHROMA = 0.0001
MIN_TONE = 0.5
MAX_TONE = 99.5


def sanitize_degrees(degrees: float) -> float:
    """Normalize an angle to [0, 360)."""
    result = degrees % 360.0
    # float modulo can return 360.0 for tiny negative inputs
    return 0.0 if result >= 360.0 else result


def difference_degrees(a: float, b: float) -> float:
    """Shortest circular distance between two hues, in [0, 180]."""
    diff = abs(sanitize_degrees(a) - sanitize_degrees(b))
    return min(diff, 360.0 - diff)


def rgb_to_hct(rgb: tuple[float, float, float]) -> HctValues:
    l_star, a, b = rgb_to_lab(rgb)
    chroma = math.hypot(a, b)
    hue = sanitize_degrees(math.degrees(math.atan2(b, a)))
    return HctValues(hue, chroma, l_star)


def _gray(tone: float) -> Rgb:
    level = clamp_channel(tone / 100.0 * 255.0)
    return Rgb(level, level, level)


def _candidate(hue: float, chroma: float, tone: float) -> tuple[float, float, float]:
    rad = math.radians(hue)
    return xyz_to_linear_rgb(lab_to_xyz((tone, chroma * math.cos(rad), chroma * math.sin(rad))))


def _in_gamut(rgb: tuple[float, float, float]) -> bool:
    return all(0.0 <= c <= 255.0 for c in rgb)


def _to_rgb(rgb: tuple[float, float, float]) -> Rgb:
    return Rgb(clamp_channel(rgb[0]), clamp_channel(rgb[1]), clamp_channel(rgb[2]))


def hct_to_rgb(hue: float, chroma: float, tone: float) -> Rgb:
    """Solve for the sRGB color closest to (hue, chroma, tone).

    Hue is normalized, tone clamped to 0..100 and chroma floored at 0. The
    returned color may have less chroma than requested.

    The result uses the largest in-gamut chroma not above the request: the
    requested chroma is returned as-is when it fits, otherwise bisection
    searches below it.
    """
    hue = sanitize_degrees(hue)
    chroma = max(0.0, chroma)
    tone = max(0.0, min(100.0, tone))

    if chroma < MIN_CHROMA or tone < MIN_TONE or tone > MAX_TONE:
        return _gray(tone)

    candidate = _candidate(hue, chroma, tone)
    if _in_gamut(candidate):
        return _to_rgb(candidate)

    best = None
    low = 0.0
    high = chroma
    while high - low > CHROMA_EPSILON:
        mid = (low + high) / 2
        candidate = _candidate(hue, mid, tone)
        if _in_gamut(candidate):
            best = candidate
            low = mid
        else:
            high = mid

    if best is not None:
        return _to_rgb(best)

    c = chroma
    while c >= 0:
        candidate = _candidate(hue, c, tone)
        if _in_gamut(candidate):
            return _to_rgb(candidate)
        c -= CHROMA_STEP

    logger.debug('No in-gamut chroma for h=%.2f c=%.2f t=%.2f, using gray', hue, chroma, tone)
    return _gray(tone)


class Hct:
    """An immutable color in HCT space, backed by its packed ARGB value.

    Build one with Hct.from_hct(), Hct.from_int() or Hct.from_rgb(). The
    with_* builders return new instances; because achievable chroma depends on
    hue and tone together, changing one component may move the others.
    """

    __slots__ = ('_argb', '_hue', '_chroma', '_tone')

    def __init__(self, argb: int):
        self._argb = argb
        self._hue, self._chroma, self._tone = rgb_to_hct(rgb_from_argb(argb))

    @classmethod
    def from_hct(cls, hue: float, chroma: float, tone: float) -> 'Hct':
        return cls(argb_from_rgb(*hct_to_rgb(hue, chroma, tone)))

    @classmethod
    def from_int(cls, argb: int) -> 'Hct':
        return cls(argb)

    @classmethod
    def from_rgb(cls, rgb: tuple[int, int, int]) -> 'Hct':
        return cls(argb_from_rgb(*rgb))

    @property
    def hue(self) -> float:
        return self._hue

    @property
    def chroma(self) -> float:
        return self._chroma

    @property
    def tone(self) -> float:
        return self._tone

    def with_hue(self, hue: float) -> 'Hct':
        return Hct.from_hct(hue, self._chroma, self._tone)

    def with_chroma(self, chroma: float) -> 'Hct':
        return Hct.from_hct(self._hue, chroma, self._tone)

    def with_tone(self, tone: float) -> 'Hct':
        return Hct.from_hct(self._hue, self._chroma, tone)

    def to_int(self) -> int:
        return self._argb

    def to_rgb(self) -> Rgb:
        return rgb_from_argb(self._argb)

    def to_hex(self) -> str:
        return rgb_to_hex(self.to_rgb())

    def values(self) -> HctValues:
        return HctValues(self._hue, self._chroma, self._tone)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hct):
            return NotImplemented
        return self._argb == other._argb

    def __hash__(self) -> int:
        return hash(self._argb)

    def __repr__(self) -> str:
        return f'Hct(h={self._hue:.1f}, c={self._chroma:.1f}, t={self._tone:.1f}, {self.to_hex()})'
