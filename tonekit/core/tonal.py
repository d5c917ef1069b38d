"""Tonal palettes: one hue and chroma rendered at any tone."""

from collections.abc import Iterable

from tonekit.core.hct import Hct, hct_to_rgb, rgb_to_hct
from tonekit.core.types import Rgb

MATERIAL_TONES = (0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 95, 99, 100)


class TonalPalette:
    """Colors sharing a hue and chroma, memoized per tone.

    The cache belongs to the instance; palettes never share state.
    """

    def __init__(self, hue: float, chroma: float):
        self.hue = hue
        self.chroma = chroma
        self._cache: dict[float, Rgb] = {}

    @classmethod
    def from_hct(cls, hct: Hct) -> 'TonalPalette':
        return cls(hct.hue, hct.chroma)

    @classmethod
    def from_rgb(cls, rgb: tuple[int, int, int]) -> 'TonalPalette':
        hue, chroma, _tone = rgb_to_hct(rgb)
        return cls(hue, chroma)

    def tone(self, tone: float) -> Rgb:
        if tone not in self._cache:
            self._cache[tone] = hct_to_rgb(self.hue, self.chroma, tone)
        return self._cache[tone]

    def tones(self, tones: Iterable[float] = MATERIAL_TONES) -> dict[float, Rgb]:
        return {t: self.tone(t) for t in tones}
