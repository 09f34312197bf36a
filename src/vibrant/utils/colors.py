"""
Color primitives shared by the quantizer and swatch consumers.

Colors are packed 24-bit RGB integers (``0xRRGGBB``). The helpers here convert
them to HSL, relative luminance, WCAG contrast and CIE Lab.
"""

from __future__ import annotations

import math

import numpy as np

WHITE = 0xFFFFFF
BLACK = 0x000000

# D65-ish reference white used for Lab conversion
LAB_REFERENCE_WHITE = (94.811, 100.0, 107.304)


def pack_color(r: int, g: int, b: int) -> int:
    """Pack 0-255 channel values into a 24-bit integer."""
    return ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def unpack_color(color: int) -> tuple[int, int, int]:
    """Inverse of :func:`pack_color`."""
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def unpack_channels(colors: np.ndarray) -> np.ndarray:
    """Unpack an array of packed colors into an ``(N, 3)`` array of channels."""
    colors = np.asarray(colors, dtype=np.int64)
    return np.stack(
        [(colors >> 16) & 0xFF, (colors >> 8) & 0xFF, colors & 0xFF],
        axis=-1,
    )


def to_hex(color: int) -> str:
    """Format a packed color as ``#rrggbb``."""
    r, g, b = unpack_color(color)
    return f"#{r:02x}{g:02x}{b:02x}"


def rgb_to_hsl(color: int) -> tuple[float, float, float]:
    """Convert a packed color to hue (degrees), saturation and lightness.

    Saturation and lightness are in ``[0, 1]``; hue is in ``[0, 360)``.
    """
    channels = unpack_color(color)
    light = (max(channels) + min(channels)) / (2 * 255.0)
    r, g, b = (c / 255.0 for c in channels)
    c_max = max(r, g, b)
    c_min = min(r, g, b)
    delta = c_max - c_min

    if delta == 0:
        return 0.0, 0.0, light

    if c_max == r:
        hue = ((g - b) / delta) % 6
    elif c_max == g:
        hue = (b - r) / delta + 2
    else:
        hue = (r - g) / delta + 4

    saturation = delta / (1 - abs(2 * light - 1))
    return (hue * 60.0) % 360.0, saturation, light


def lightness(colors: np.ndarray) -> np.ndarray:
    """Vectorized HSL lightness for an array of packed colors."""
    channels = unpack_channels(colors)
    if channels.size == 0:
        return np.zeros(0, dtype=np.float64)
    return (channels.max(axis=-1) + channels.min(axis=-1)) / (2 * 255.0)


def _linearize(channel: float) -> float:
    channel /= 255.0
    if channel < 0.03928:
        return channel / 12.92
    return math.pow((channel + 0.055) / 1.055, 2.4)


def luminance(r: float, g: float, b: float) -> float:
    """Relative luminance of 0-255 channels.

    See http://www.w3.org/TR/2008/REC-WCAG20-20081211/#relativeluminancedef
    """
    return 0.2126 * _linearize(r) + 0.7152 * _linearize(g) + 0.0722 * _linearize(b)


def contrast(foreground: int, background: int) -> float:
    """WCAG contrast ratio between two packed colors, in ``[1, 21]``."""
    lum1 = luminance(*unpack_color(foreground))
    lum2 = luminance(*unpack_color(background))
    return (max(lum1, lum2) + 0.05) / (min(lum1, lum2) + 0.05)


def text_color(background: int, min_contrast: float) -> int:
    """Pick white or black text for ``background``.

    White wins whenever it reaches ``min_contrast``; black is the fallback.
    """
    if contrast(WHITE, background) >= min_contrast:
        return WHITE
    return BLACK


def rgb_to_xyz(color: int) -> tuple[float, float, float]:
    """Convert a packed sRGB color to CIE XYZ (0-100 scale)."""
    r, g, b = (c / 255.0 for c in unpack_color(color))
    r, g, b = (
        math.pow((c + 0.055) / 1.055, 2.4) * 100 if c > 0.04045 else c / 12.92 * 100
        for c in (r, g, b)
    )
    x = r * 0.4124 + g * 0.3576 + b * 0.1805
    y = r * 0.2126 + g * 0.7152 + b * 0.0722
    z = r * 0.0193 + g * 0.1192 + b * 0.9505
    return x, y, z


def xyz_to_lab(
    x: float,
    y: float,
    z: float,
    reference_white: tuple[float, float, float] = LAB_REFERENCE_WHITE,
) -> tuple[float, float, float]:
    """Convert CIE XYZ to CIE Lab relative to ``reference_white``."""
    ref_x, ref_y, ref_z = reference_white

    def _f(t: float) -> float:
        if t > 0.008856:
            return math.pow(t, 1 / 3.0)
        return 7.787 * t + 16 / 116.0

    fx, fy, fz = _f(x / ref_x), _f(y / ref_y), _f(z / ref_z)
    return 116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz)


def rgb_to_lab(
    color: int,
    reference_white: tuple[float, float, float] = LAB_REFERENCE_WHITE,
) -> tuple[float, float, float]:
    """Convert a packed sRGB color to CIE Lab."""
    return xyz_to_lab(*rgb_to_xyz(color), reference_white=reference_white)


