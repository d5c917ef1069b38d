"""Color space conversions: packed ARGB, hex, sRGB, XYZ, LAB, HSL and HSV.

Scalar functions work on plain tuples and are used per color (solver, scorer,
reports). ``rgb_to_lab_array`` is the numpy variant used on pixel populations.
All XYZ values use the 0..100 scale under the D65 white point.
"""

import math
import re

import numpy as np

from tonekit.core.types import Rgb

D65 = (95.047, 100.0, 108.883)
EPSILON = 216.0 / 24389.0
KAPPA = 24389.0 / 27.0

_SRGB_TO_XYZ = (
    (0.4124564, 0.3575761, 0.1804375),
    (0.2126729, 0.7151522, 0.0721750),
    (0.0193339, 0.1191920, 0.9503041),
)
_XYZ_TO_SRGB = (
    (3.2404542, -1.5371385, -0.4985314),
    (-0.9692660, 1.8760108, 0.0415560),
    (0.0556434, -0.2040259, 1.0572252),
)

_HEX_RE = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')
_RGB_RE = re.compile(r'^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)')
_HSL_RE = re.compile(r'^hsla?\(\s*(\d+)\s*,\s*(\d+)%\s*,\s*(\d+)%')


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_channel(value: float) -> int:
    """Round to the nearest integer and clamp to 0..255."""
    return max(0, min(255, round_half_up(value)))


# -- packed ARGB -------------------------------------------------------------


def argb_from_rgb(r: int, g: int, b: int) -> int:
    """Pack an RGB triple into an opaque 0xAARRGGBB integer."""
    return (0xFF << 24) | (clamp_channel(r) << 16) | (clamp_channel(g) << 8) | clamp_channel(b)


def rgb_from_argb(argb: int) -> Rgb:
    return Rgb((argb >> 16) & 0xFF, (argb >> 8) & 0xFF, argb & 0xFF)


def alpha_from_argb(argb: int) -> int:
    return (argb >> 24) & 0xFF


# -- hex ---------------------------------------------------------------------


def hex_to_rgb(hex_str: str) -> Rgb:
    """Parse '#rgb' or '#rrggbb' (hash optional). Raises ValueError otherwise."""
    m = _HEX_RE.match(hex_str.strip())
    if not m:
        raise ValueError(f'Invalid hex color: {hex_str!r}')
    digits = m.group(1)
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    value = int(digits, 16)
    return Rgb((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def rgb_to_hex(rgb: tuple[float, float, float]) -> str:
    r, g, b = (clamp_channel(c) for c in rgb)
    return f'#{r:02x}{g:02x}{b:02x}'


def argb_to_hex(argb: int) -> str:
    return rgb_to_hex(rgb_from_argb(argb))


# -- XYZ / LAB ---------------------------------------------------------------


def _linearize(channel: float) -> float:
    c = channel / 255.0
    if c > 0.04045:
        return ((c + 0.055) / 1.055) ** 2.4
    return c / 12.92


def _delinearize(linear: float) -> float:
    """Linear 0..1 to companded 0..255, unclamped."""
    if linear > 0.0031308:
        return (1.055 * linear ** (1.0 / 2.4) - 0.055) * 255.0
    return 12.92 * linear * 255.0


def rgb_to_xyz(rgb: tuple[float, float, float]) -> tuple[float, float, float]:
    r, g, b = (_linearize(c) * 100.0 for c in rgb)
    m = _SRGB_TO_XYZ
    return (
        r * m[0][0] + g * m[0][1] + b * m[0][2],
        r * m[1][0] + g * m[1][1] + b * m[1][2],
        r * m[2][0] + g * m[2][1] + b * m[2][2],
    )


def xyz_to_linear_rgb(xyz: tuple[float, float, float]) -> tuple[float, float, float]:
    """XYZ to companded sRGB on the 0..255 scale, neither clamped nor rounded.

    Values outside 0..255 mean the color is out of gamut.
    """
    x, y, z = (v / 100.0 for v in xyz)
    m = _XYZ_TO_SRGB
    linear = (
        x * m[0][0] + y * m[0][1] + z * m[0][2],
        x * m[1][0] + y * m[1][1] + z * m[1][2],
        x * m[2][0] + y * m[2][1] + z * m[2][2],
    )
    r, g, b = (_delinearize(c) for c in linear)
    return (r, g, b)


def xyz_to_rgb(xyz: tuple[float, float, float]) -> Rgb:
    r, g, b = xyz_to_linear_rgb(xyz)
    return Rgb(clamp_channel(r), clamp_channel(g), clamp_channel(b))


def _lab_f(t: float) -> float:
    if t > EPSILON:
        return t ** (1.0 / 3.0)
    return (KAPPA * t + 16.0) / 116.0


def xyz_to_lab(xyz: tuple[float, float, float]) -> tuple[float, float, float]:
    fx = _lab_f(xyz[0] / D65[0])
    fy = _lab_f(xyz[1] / D65[1])
    fz = _lab_f(xyz[2] / D65[2])
    return (116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz))


def lab_to_xyz(lab: tuple[float, float, float]) -> tuple[float, float, float]:
    l_star, a, b = lab
    fy = (l_star + 16.0) / 116.0
    fx = a / 500.0 + fy
    fz = fy - b / 200.0

    fx3 = fx * fx * fx
    fz3 = fz * fz * fz
    x = fx3 if fx3 > EPSILON else (116.0 * fx - 16.0) / KAPPA
    y = fy * fy * fy if l_star > KAPPA * EPSILON else l_star / KAPPA
    z = fz3 if fz3 > EPSILON else (116.0 * fz - 16.0) / KAPPA
    return (x * D65[0], y * D65[1], z * D65[2])


def rgb_to_lab(rgb: tuple[float, float, float]) -> tuple[float, float, float]:
    return xyz_to_lab(rgb_to_xyz(rgb))


def lab_to_rgb(lab: tuple[float, float, float]) -> Rgb:
    return xyz_to_rgb(lab_to_xyz(lab))


def rgb_to_lab_array(rgb: np.ndarray) -> np.ndarray:
    """Vectorized rgb_to_lab for an (N, 3) array of 0..255 channels."""
    c = np.asarray(rgb, dtype=np.float64) / 255.0
    linear = np.where(c > 0.04045, ((c + 0.055) / 1.055) ** 2.4, c / 12.92) * 100.0
    xyz = linear @ np.asarray(_SRGB_TO_XYZ).T
    t = xyz / np.asarray(D65)
    f = np.where(t > EPSILON, np.cbrt(t), (KAPPA * t + 16.0) / 116.0)
    lab = np.empty_like(f)
    lab[:, 0] = 116.0 * f[:, 1] - 16.0
    lab[:, 1] = 500.0 * (f[:, 0] - f[:, 1])
    lab[:, 2] = 200.0 * (f[:, 1] - f[:, 2])
    return lab


# -- HSL / HSV ---------------------------------------------------------------


def _hue_from_rgb(r: float, g: float, b: float, high: float, diff: float) -> float:
    if high == b:
        h = (r - g) / diff + 4
    elif high == g:
        h = (b - r) / diff + 2
    else:
        h = (g - b) / diff + (6 if g < b else 0)
    return h / 6


def rgb_to_hsl(rgb: tuple[int, int, int]) -> tuple[int, int, int]:
    """Return (h 0..360, s 0..100, l 0..100), rounded."""
    r, g, b = (c / 255.0 for c in rgb)
    high = max(r, g, b)
    low = min(r, g, b)
    diff = high - low
    lightness = (high + low) / 2
    h = s = 0.0
    if diff != 0:
        s = diff / (2 - high - low) if lightness > 0.5 else diff / (high + low)
        h = _hue_from_rgb(r, g, b, high, diff)
    return (round_half_up(h * 360), round_half_up(s * 100), round_half_up(lightness * 100))


def hsl_to_rgb(hsl: tuple[float, float, float]) -> Rgb:
    h = hsl[0] / 360.0
    s = hsl[1] / 100.0
    lightness = hsl[2] / 100.0

    if s == 0:
        r = g = b = lightness
    else:

        def hue_to_channel(p: float, q: float, t: float) -> float:
            if t < 0:
                t += 1
            if t > 1:
                t -= 1
            if t < 1 / 6:
                return p + (q - p) * 6 * t
            if t < 1 / 2:
                return q
            if t < 2 / 3:
                return p + (q - p) * (2 / 3 - t) * 6
            return p

        q = lightness * (1 + s) if lightness < 0.5 else lightness + s - lightness * s
        p = 2 * lightness - q
        r = hue_to_channel(p, q, h + 1 / 3)
        g = hue_to_channel(p, q, h)
        b = hue_to_channel(p, q, h - 1 / 3)

    return Rgb(clamp_channel(r * 255), clamp_channel(g * 255), clamp_channel(b * 255))


def rgb_to_hsv(rgb: tuple[int, int, int]) -> tuple[int, int, int]:
    """Return (h 0..360, s 0..100, v 0..100), rounded."""
    r, g, b = (c / 255.0 for c in rgb)
    high = max(r, g, b)
    diff = high - min(r, g, b)
    h = 0.0
    s = 0.0 if high == 0 else diff / high
    if diff != 0:
        h = _hue_from_rgb(r, g, b, high, diff)
    return (round_half_up(h * 360), round_half_up(s * 100), round_half_up(high * 100))


def hsv_to_rgb(hsv: tuple[float, float, float]) -> Rgb:
    h = hsv[0] / 360.0
    s = hsv[1] / 100.0
    v = hsv[2] / 100.0

    i = math.floor(h * 6)
    f = h * 6 - i
    p = v * (1 - s)
    q = v * (1 - f * s)
    t = v * (1 - (1 - f) * s)

    r, g, b = [(v, t, p), (q, v, p), (p, v, t), (p, q, v), (t, p, v), (v, p, q)][i % 6]
    return Rgb(clamp_channel(r * 255), clamp_channel(g * 255), clamp_channel(b * 255))


def parse_color(text: str) -> Rgb | None:
    """Parse a hex, rgb()/rgba() or hsl()/hsla() string. None if unrecognised."""
    trimmed = text.strip().lower()

    if _HEX_RE.match(trimmed):
        return hex_to_rgb(trimmed)

    m = _RGB_RE.match(trimmed)
    if m:
        return Rgb(*(clamp_channel(int(v)) for v in m.groups()))

    m = _HSL_RE.match(trimmed)
    if m:
        return hsl_to_rgb((int(m.group(1)), int(m.group(2)), int(m.group(3))))

    return None
