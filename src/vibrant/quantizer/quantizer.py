"""
Color-cut quantizer.

A median-cut variant tuned for picking out distinct colors rather than
representative ones. RGB space is treated as a cube that is repeatedly cut
into boxes until the requested number of colors is reached; each box is then
averaged into one swatch.

Plain median-cut keeps box populations balanced. Here the next box to cut is
the one with the largest ``population * volume``, so large, busy regions of
color space get divided first.
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from vibrant.quantizer.box import ColorArena, ColorBox
from vibrant.quantizer.filters import DEFAULT_FILTER, ColorFilter
from vibrant.quantizer.histogram import ColorHistogram
from vibrant.quantizer.queue import BoxPriorityQueue
from vibrant.swatch import Swatch

logger = logging.getLogger(__name__)


class ColorCutQuantizer:
    """Reduces a pixel sequence to at most ``max_colors`` swatches.

    All work happens in the constructor; read the result from
    :attr:`quantized_colors`. An instance serves a single image.

    Args:
        pixels: Packed ``0xRRGGBB`` pixels of the source bitmap.
        pixel_count: Total pixel count of the source, used as the ratio
            denominator.
        max_colors: Upper bound on the number of swatches (must be >= 1).
        color_filter: Near-black/near-white rejection thresholds.

    Raises:
        ValueError: If ``max_colors`` is less than 1, or ``pixel_count`` is
            smaller than the number of pixels supplied.
    """

    def __init__(
        self,
        pixels: Iterable[int] | np.ndarray,
        pixel_count: int,
        max_colors: int,
        color_filter: ColorFilter | None = None,
    ) -> None:
        if max_colors < 1:
            raise ValueError(f"max_colors must be at least 1, got {max_colors}")

        self.pixel_count = pixel_count
        self.max_colors = max_colors
        self.color_filter = color_filter or DEFAULT_FILTER
        self.quantized_colors: list[Swatch] = []
        self.final_boxes: list[ColorBox] = []

        histogram = ColorHistogram(pixels)
        sampled = int(histogram.counts.sum())
        if pixel_count < sampled:
            raise ValueError(
                f"pixel_count ({pixel_count}) is smaller than the {sampled} pixels supplied"
            )
        self.color_populations: dict[int, int] = histogram.as_dict()
        self.color_ratios: dict[int, float] = {
            color: count / pixel_count for color, count in self.color_populations.items()
        }

        keep = self.color_filter.keep_mask(histogram.colors)
        self.arena = ColorArena(histogram.colors[keep], histogram.counts[keep])
        self.colors: list[int] = self.arena.colors.tolist()

        logger.debug(
            "Quantizing %d distinct colors (%d valid) into at most %d",
            histogram.number_of_colors, len(self.arena), max_colors,
        )

        if len(self.arena) <= max_colors:
            # Sparse palette: every valid color becomes its own swatch.
            for color in self.colors:
                self.quantized_colors.append(
                    Swatch(color, self.color_populations[color], self.color_ratios[color])
                )
        else:
            self._quantize_pixels()

        logger.info(
            "Quantized %d pixels into %d swatches", pixel_count, len(self.quantized_colors),
        )

    def _quantize_pixels(self) -> None:
        queue = BoxPriorityQueue()
        queue.push(ColorBox.from_range(self.arena, 0, len(self.arena) - 1))
        self._split_boxes(queue)
        self._generate_average_colors(queue)

    def _split_boxes(self, queue: BoxPriorityQueue) -> None:
        """Cut the highest-priority box until the queue holds ``max_colors``."""
        while len(queue) < self.max_colors:
            box = queue.pop()
            if not box.can_split:
                # The best candidate is a single color; nothing left worth cutting.
                queue.push(box)
                logger.debug("Stopped splitting early at %d boxes", len(queue))
                return
            lower_box, upper_box = box.split(self.arena)
            queue.push(lower_box)
            queue.push(upper_box)

    def _generate_average_colors(self, queue: BoxPriorityQueue) -> None:
        for box in queue.drain():
            self.final_boxes.append(box)
            color, population = box.average_color(self.arena)
            if self.color_filter.should_ignore(color):
                logger.debug("Dropping averaged color %06x (too dark or too light)", color)
                continue
            self.quantized_colors.append(
                Swatch(color, population, population / self.pixel_count)
            )


def quantize(
    pixels: Iterable[int] | np.ndarray,
    pixel_count: int,
    max_colors: int,
    color_filter: ColorFilter | None = None,
) -> list[Swatch]:
    """Run a :class:`ColorCutQuantizer` and return its swatches."""
    return ColorCutQuantizer(pixels, pixel_count, max_colors, color_filter).quantized_colors
