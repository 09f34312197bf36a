"""
Near-black / near-white rejection.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from vibrant.utils.colors import lightness, rgb_to_hsl

BLACK_MAX_LIGHTNESS = 0.05
WHITE_MIN_LIGHTNESS = 0.95


@dataclass(frozen=True)
class ColorFilter:
    """Rejects colors whose HSL lightness is too close to black or white.

    A color is ignored when ``lightness <= black_max_lightness`` or
    ``lightness >= white_min_lightness``.
    """

    black_max_lightness: float = BLACK_MAX_LIGHTNESS
    white_min_lightness: float = WHITE_MIN_LIGHTNESS

    def should_ignore(self, color: int) -> bool:
        _, _, light = rgb_to_hsl(color)
        return light <= self.black_max_lightness or light >= self.white_min_lightness

    def keep_mask(self, colors: np.ndarray) -> np.ndarray:
        """Boolean mask over ``colors`` that is True for colors to keep."""
        light = lightness(colors)
        return (light > self.black_max_lightness) & (light < self.white_min_lightness)


DEFAULT_FILTER = ColorFilter()


def should_ignore_color(color: int, color_filter: ColorFilter = DEFAULT_FILTER) -> bool:
    """True if ``color`` is close to pure black or pure white."""
    return color_filter.should_ignore(color)
