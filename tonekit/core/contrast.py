"""WCAG 2.0 relative luminance and contrast checks.

Thresholds:
  AA   4.5:1 normal text, 3:1 large text
  AAA  7:1 normal text, 4.5:1 large text
"""

AA_NORMAL = 4.5
AA_LARGE = 3.0
AAA_NORMAL = 7.0
AAA_LARGE = 4.5


def _channel_luminance(channel: int) -> float:
    c = channel / 255.0
    # WCAG 2.0 uses 0.03928 rather than the sRGB standard's 0.04045
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(rgb: tuple[int, int, int]) -> float:
    """Relative luminance in 0..1, black is 0 and white is 1."""
    r, g, b = (_channel_luminance(int(c)) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(rgb1: tuple[int, int, int], rgb2: tuple[int, int, int]) -> float:
    """Contrast ratio from 1 (identical) to 21 (black on white). Argument order does not matter."""
    lum1 = relative_luminance(rgb1)
    lum2 = relative_luminance(rgb2)
    lighter, darker = max(lum1, lum2), min(lum1, lum2)
    return (lighter + 0.05) / (darker + 0.05)


def meets_contrast_aa(rgb1: tuple[int, int, int], rgb2: tuple[int, int, int], large_text: bool = False) -> bool:
    return contrast_ratio(rgb1, rgb2) >= (AA_LARGE if large_text else AA_NORMAL)


def meets_contrast_aaa(rgb1: tuple[int, int, int], rgb2: tuple[int, int, int], large_text: bool = False) -> bool:
    return contrast_ratio(rgb1, rgb2) >= (AAA_LARGE if large_text else AAA_NORMAL)
