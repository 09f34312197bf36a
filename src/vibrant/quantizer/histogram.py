"""
Color histogram over packed RGB pixels.
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

logger = logging.getLogger(__name__)


class ColorHistogram:
    """Distinct colors of a pixel sequence with their occurrence counts.

    ``colors`` is sorted ascending by packed value and ``counts`` is parallel
    to it. Both arrays are read-only once built.

    Args:
        pixels: Packed ``0xRRGGBB`` pixel values, in any order.
    """

    def __init__(self, pixels: Iterable[int] | np.ndarray) -> None:
        data = np.asarray(pixels if isinstance(pixels, np.ndarray) else list(pixels), dtype=np.int64)
        colors, counts = np.unique(data.ravel(), return_counts=True)
        colors.flags.writeable = False
        counts = counts.astype(np.int64)
        counts.flags.writeable = False

        self.colors: np.ndarray = colors
        self.counts: np.ndarray = counts
        logger.debug("Histogram built: %d pixels, %d distinct colors", data.size, len(colors))

    @property
    def number_of_colors(self) -> int:
        return len(self.colors)

    def __len__(self) -> int:
        return self.number_of_colors

    def as_dict(self) -> dict[int, int]:
        """Mapping of packed color to pixel count."""
        return dict(zip(self.colors.tolist(), self.counts.tolist()))
