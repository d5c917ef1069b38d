"""Wu and weighted k-means quantizers.

Wu implements Xiaolin Wu's color quantization algorithm from Graphics Gems II
(1991): pixels are histogrammed into a 32x32x32 RGB cube which is recursively
cut where the split reduces variance the most. Its box averages seed a
population-weighted k-means in LAB space (the Wu + WSMeans pairing used by
material-color-utilities as QuantizerCelebi).

Guarantees of quantize():
  - counts sum to len(pixels)
  - at most min(max_colors, distinct colors) entries
  - representative colors are population-weighted RGB means of their members
  - identical input gives identical output
"""

import logging
from collections.abc import Sequence

import numpy as np
from sklearn.cluster import KMeans

from tonekit.core.conversions import argb_from_rgb, rgb_from_argb, rgb_to_lab_array

logger = logging.getLogger(__name__)

INDEX_BITS = 5
SIDE_LENGTH = 33  # (1 << INDEX_BITS) + 1

DIR_RED = 0
DIR_GREEN = 1
DIR_BLUE = 2

MAX_ITERATIONS = 10
RANDOM_SEED = 0x42688


def _channels(pixels: Sequence[int]) -> np.ndarray:
    """(N, 3) int64 array of RGB channels from packed pixels."""
    arr = np.asarray(pixels, dtype=np.int64)
    return np.stack([(arr >> 16) & 0xFF, (arr >> 8) & 0xFF, arr & 0xFF], axis=1)


class Box:
    """A box in the histogram cube; bounds are exclusive below, inclusive above."""

    __slots__ = ('r0', 'r1', 'g0', 'g1', 'b0', 'b1', 'vol')

    def __init__(self):
        self.r0 = 0
        self.r1 = 0
        self.g0 = 0
        self.g1 = 0
        self.b0 = 0
        self.b1 = 0
        self.vol = 0


class QuantizerWu:
    """Divides the RGB cube into at most max_colors boxes by variance-minimizing cuts."""

    def __init__(self):
        shape = (SIDE_LENGTH, SIDE_LENGTH, SIDE_LENGTH)
        self.weights = np.zeros(shape, dtype=np.int64)
        self.moments_r = np.zeros(shape, dtype=np.float64)
        self.moments_g = np.zeros(shape, dtype=np.float64)
        self.moments_b = np.zeros(shape, dtype=np.float64)
        self.moments = np.zeros(shape, dtype=np.float64)
        self.cubes: list[Box] = []

    def quantize(self, pixels: Sequence[int], max_colors: int) -> list[int]:
        """Return up to max_colors packed box-average colors."""
        if not pixels:
            return []
        self._construct_histogram(pixels)
        self._compute_moments()
        result_count = self._create_boxes(max_colors)
        return self._create_result(result_count)

    def _construct_histogram(self, pixels: Sequence[int]) -> None:
        rgb = _channels(pixels)
        idx = tuple((rgb[:, i] >> (8 - INDEX_BITS)) + 1 for i in range(3))
        r = rgb[:, 0].astype(np.float64)
        g = rgb[:, 1].astype(np.float64)
        b = rgb[:, 2].astype(np.float64)

        np.add.at(self.weights, idx, 1)
        np.add.at(self.moments_r, idx, r)
        np.add.at(self.moments_g, idx, g)
        np.add.at(self.moments_b, idx, b)
        np.add.at(self.moments, idx, r * r + g * g + b * b)

    def _compute_moments(self) -> None:
        """Turn each histogram into 3D cumulative sums so any box sums in 8 lookups."""
        for name in ('weights', 'moments_r', 'moments_g', 'moments_b', 'moments'):
            m = getattr(self, name)
            setattr(self, name, m.cumsum(axis=0).cumsum(axis=1).cumsum(axis=2))

    def _create_boxes(self, max_colors: int) -> int:
        self.cubes = [Box() for _ in range(max_colors)]
        volume_variance = [0.0] * max_colors

        self.cubes[0].r1 = SIDE_LENGTH - 1
        self.cubes[0].g1 = SIDE_LENGTH - 1
        self.cubes[0].b1 = SIDE_LENGTH - 1

        generated_color_count = max_colors
        next_box = 0
        i = 1

        while i < max_colors:
            if self._cut(self.cubes[next_box], self.cubes[i]):
                volume_variance[next_box] = (
                    self._variance(self.cubes[next_box]) if self.cubes[next_box].vol > 1 else 0.0
                )
                volume_variance[i] = self._variance(self.cubes[i]) if self.cubes[i].vol > 1 else 0.0
            else:
                volume_variance[next_box] = 0.0
                i -= 1

            next_box = 0
            temp = volume_variance[0]
            for j in range(1, i + 1):
                if volume_variance[j] > temp:
                    temp = volume_variance[j]
                    next_box = j

            if temp <= 0.0:
                generated_color_count = i + 1
                break

            i += 1

        return generated_color_count

    def _create_result(self, color_count: int) -> list[int]:
        colors = []
        for cube in self.cubes[:color_count]:
            weight = self._volume(cube, self.weights)
            if weight > 0:
                r = int(self._volume(cube, self.moments_r) / weight)
                g = int(self._volume(cube, self.moments_g) / weight)
                b = int(self._volume(cube, self.moments_b) / weight)
                colors.append(argb_from_rgb(r, g, b))
        return colors

    def _variance(self, cube: Box) -> float:
        dr = self._volume(cube, self.moments_r)
        dg = self._volume(cube, self.moments_g)
        db = self._volume(cube, self.moments_b)
        xx = self._volume(cube, self.moments)
        volume = self._volume(cube, self.weights)
        if volume == 0:
            return 0.0
        return float(xx - (dr * dr + dg * dg + db * db) / volume)

    def _cut(self, one: Box, two: Box) -> bool:
        whole_r = self._volume(one, self.moments_r)
        whole_g = self._volume(one, self.moments_g)
        whole_b = self._volume(one, self.moments_b)
        whole_w = self._volume(one, self.weights)

        wholes = (whole_r, whole_g, whole_b, whole_w)
        max_r_cut, max_r = self._maximize(one, DIR_RED, one.r0 + 1, one.r1, *wholes)
        max_g_cut, max_g = self._maximize(one, DIR_GREEN, one.g0 + 1, one.g1, *wholes)
        max_b_cut, max_b = self._maximize(one, DIR_BLUE, one.b0 + 1, one.b1, *wholes)

        if max_r >= max_g and max_r >= max_b:
            if max_r_cut < 0:
                return False
            direction = DIR_RED
            cut_location = max_r_cut
        elif max_g >= max_r and max_g >= max_b:
            direction = DIR_GREEN
            cut_location = max_g_cut
        else:
            direction = DIR_BLUE
            cut_location = max_b_cut

        two.r1 = one.r1
        two.g1 = one.g1
        two.b1 = one.b1

        if direction == DIR_RED:
            one.r1 = cut_location
            two.r0 = one.r1
            two.g0 = one.g0
            two.b0 = one.b0
        elif direction == DIR_GREEN:
            one.g1 = cut_location
            two.r0 = one.r0
            two.g0 = one.g1
            two.b0 = one.b0
        else:
            one.b1 = cut_location
            two.r0 = one.r0
            two.g0 = one.g0
            two.b0 = one.b1

        one.vol = (one.r1 - one.r0) * (one.g1 - one.g0) * (one.b1 - one.b0)
        two.vol = (two.r1 - two.r0) * (two.g1 - two.g0) * (two.b1 - two.b0)
        return True

    def _maximize(
        self,
        cube: Box,
        direction: int,
        first: int,
        last: int,
        whole_r: float,
        whole_g: float,
        whole_b: float,
        whole_w: int,
    ) -> tuple[int, float]:
        """Best cut position along one axis, scored for every position at once."""
        if first >= last:
            return -1, 0.0

        half_r = self._bottom(cube, direction, self.moments_r) + self._top(cube, direction, first, last, self.moments_r)
        half_g = self._bottom(cube, direction, self.moments_g) + self._top(cube, direction, first, last, self.moments_g)
        half_b = self._bottom(cube, direction, self.moments_b) + self._top(cube, direction, first, last, self.moments_b)
        half_w = self._bottom(cube, direction, self.weights) + self._top(cube, direction, first, last, self.weights)
        rest_w = whole_w - half_w

        valid = (half_w != 0) & (rest_w != 0)
        if not valid.any():
            return -1, 0.0

        safe_half = np.where(valid, half_w, 1)
        safe_rest = np.where(valid, rest_w, 1)
        temp = (half_r * half_r + half_g * half_g + half_b * half_b) / safe_half
        rest_r = whole_r - half_r
        rest_g = whole_g - half_g
        rest_b = whole_b - half_b
        temp = temp + (rest_r * rest_r + rest_g * rest_g + rest_b * rest_b) / safe_rest
        temp = np.where(valid, temp, 0.0)

        best = int(np.argmax(temp))
        if temp[best] <= 0.0:
            return -1, 0.0
        return first + best, float(temp[best])

    @staticmethod
    def _volume(cube: Box, moment: np.ndarray):
        """Sum of a moment over a box by inclusion-exclusion."""
        return (
            moment[cube.r1, cube.g1, cube.b1]
            - moment[cube.r1, cube.g1, cube.b0]
            - moment[cube.r1, cube.g0, cube.b1]
            + moment[cube.r1, cube.g0, cube.b0]
            - moment[cube.r0, cube.g1, cube.b1]
            + moment[cube.r0, cube.g1, cube.b0]
            + moment[cube.r0, cube.g0, cube.b1]
            - moment[cube.r0, cube.g0, cube.b0]
        )

    @staticmethod
    def _bottom(cube: Box, direction: int, moment: np.ndarray):
        if direction == DIR_RED:
            return (
                -moment[cube.r0, cube.g1, cube.b1]
                + moment[cube.r0, cube.g1, cube.b0]
                + moment[cube.r0, cube.g0, cube.b1]
                - moment[cube.r0, cube.g0, cube.b0]
            )
        elif direction == DIR_GREEN:
            return (
                -moment[cube.r1, cube.g0, cube.b1]
                + moment[cube.r1, cube.g0, cube.b0]
                + moment[cube.r0, cube.g0, cube.b1]
                - moment[cube.r0, cube.g0, cube.b0]
            )
        else:
            return (
                -moment[cube.r1, cube.g1, cube.b0]
                + moment[cube.r1, cube.g0, cube.b0]
                + moment[cube.r0, cube.g1, cube.b0]
                - moment[cube.r0, cube.g0, cube.b0]
            )

    @staticmethod
    def _top(cube: Box, direction: int, first: int, last: int, moment: np.ndarray) -> np.ndarray:
        """Top sums for every cut position in [first, last)."""
        s = slice(first, last)
        if direction == DIR_RED:
            return (
                moment[s, cube.g1, cube.b1]
                - moment[s, cube.g1, cube.b0]
                - moment[s, cube.g0, cube.b1]
                + moment[s, cube.g0, cube.b0]
            )
        elif direction == DIR_GREEN:
            return (
                moment[cube.r1, s, cube.b1]
                - moment[cube.r1, s, cube.b0]
                - moment[cube.r0, s, cube.b1]
                + moment[cube.r0, s, cube.b0]
            )
        else:
            return (
                moment[cube.r1, cube.g1, s]
                - moment[cube.r1, cube.g0, s]
                - moment[cube.r0, cube.g1, s]
                + moment[cube.r0, cube.g0, s]
            )


def quantize_wu(pixels: Sequence[int], max_colors: int) -> list[int]:
    """Wu box averages, used as k-means starting clusters."""
    return QuantizerWu().quantize(pixels, max_colors)


# Mask for 48-bit LCG state
_LCG_MASK = (1 << 48) - 1


class _Random:
    """Fixed-seed LCG (java.util.Random compatible) for picking extra seed clusters."""

    def __init__(self, seed: int):
        self._seed = (seed ^ 0x5DEECE66D) & _LCG_MASK

    def _next(self, bits: int) -> int:
        self._seed = (self._seed * 0x5DEECE66D + 0xB) & _LCG_MASK
        val = self._seed >> (48 - bits)
        if val >= (1 << 31):
            val -= 1 << 32
        return val

    def next_range(self, range_val: int) -> int:
        if (range_val & -range_val) == range_val:
            return (range_val * self._next(31)) >> 31
        while True:
            bits = self._next(31)
            val = bits % range_val
            if bits - val + (range_val - 1) < (1 << 31):
                return val


def quantize_wsmeans(pixels: Sequence[int], max_colors: int, starting_clusters: Sequence[int]) -> dict[int, int]:
    """Weighted k-means over the distinct colors of pixels, in LAB space.

    Each distinct color is a point weighted by its pixel count. Starting
    clusters come first; any shortfall is filled with distinct input colors
    picked by a fixed-seed generator. Runs at most MAX_ITERATIONS rounds.
    """
    counts: dict[int, int] = {}
    for pixel in pixels:
        counts[pixel] = counts.get(pixel, 0) + 1

    cluster_count = min(max_colors, len(counts))
    if cluster_count == 0:
        return {}

    rgb = _channels(list(counts))
    weights = np.fromiter(counts.values(), dtype=np.float64, count=len(counts))
    points = rgb_to_lab_array(rgb)

    seeds = [rgb_from_argb(c) for c in starting_clusters[:cluster_count]]
    clusters = rgb_to_lab_array(np.array(seeds, dtype=np.int64).reshape(-1, 3))

    additional_needed = cluster_count - len(clusters)
    if additional_needed > 0:
        rng = _Random(RANDOM_SEED)
        indices: list[int] = []
        for _ in range(additional_needed):
            index = rng.next_range(len(points))
            while index in indices:
                index = rng.next_range(len(points))
            indices.append(index)
        clusters = np.vstack([clusters, points[indices]])

    km = KMeans(n_clusters=cluster_count, init=clusters, n_init=1, max_iter=MAX_ITERATIONS, random_state=RANDOM_SEED)
    km.fit(points, sample_weight=weights)
    assignments = km.labels_
    logger.debug('k-means: %d clusters after %d iterations', cluster_count, km.n_iter_)

    pixel_counts = weights.astype(np.int64)
    populations = np.bincount(assignments, weights=pixel_counts, minlength=cluster_count).astype(np.int64)
    rgb_sums = np.zeros((cluster_count, 3), dtype=np.int64)
    np.add.at(rgb_sums, assignments, rgb * pixel_counts[:, None])

    color_to_count: dict[int, int] = {}
    for k in range(cluster_count):
        count = int(populations[k])
        if count == 0:
            continue
        r, g, b = (float(v) / count for v in rgb_sums[k])
        argb = argb_from_rgb(r, g, b)
        # distinct clusters can round to the same color
        color_to_count[argb] = color_to_count.get(argb, 0) + count

    return color_to_count


def quantize(pixels: Sequence[int], max_colors: int) -> dict[int, int]:
    """Reduce pixels to at most max_colors representative colors with populations."""
    if max_colors < 1:
        raise ValueError(f'max_colors must be >= 1, got {max_colors}')
    if not pixels:
        return {}

    starting_clusters = quantize_wu(pixels, max_colors)
    result = quantize_wsmeans(pixels, max_colors, starting_clusters)
    logger.debug('Quantized %d pixels into %d colors (max %d)', len(pixels), len(result), max_colors)
    return result
