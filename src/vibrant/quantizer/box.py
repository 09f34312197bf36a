"""
Color boxes for the color-cut quantizer.

A box never owns colors. It is an inclusive index range ``[lower, upper]`` into
a :class:`ColorArena`, the quantizer's private, mutable copy of the valid
histogram colors. Splitting a box reorders only its own slice of the arena,
so boxes with disjoint ranges never disturb each other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from vibrant.utils.colors import pack_color, unpack_channels

logger = logging.getLogger(__name__)

COMPONENT_RED = 0
COMPONENT_GREEN = 1
COMPONENT_BLUE = 2


class ColorArena:
    """Parallel ``colors`` / ``counts`` buffers shared by every box of one run.

    The arrays are copied on construction so the caller's histogram is never
    reordered.
    """

    def __init__(self, colors: np.ndarray, counts: np.ndarray) -> None:
        if len(colors) != len(counts):
            raise ValueError(
                f"colors and counts must have the same length ({len(colors)} != {len(counts)})"
            )
        self.colors = np.array(colors, dtype=np.int64, copy=True)
        self.counts = np.array(counts, dtype=np.int64, copy=True)

    def __len__(self) -> int:
        return len(self.colors)

    def channels(self, lower: int, upper: int) -> np.ndarray:
        """``(N, 3)`` RGB channel values for the inclusive range."""
        return unpack_channels(self.colors[lower:upper + 1])

    def sort_range(self, lower: int, upper: int, component: int) -> None:
        """Stable in-place sort of ``[lower, upper]`` by one RGB component."""
        stop = upper + 1
        keys = self.channels(lower, upper)[:, component]
        order = np.argsort(keys, kind="stable")
        self.colors[lower:stop] = self.colors[lower:stop][order]
        self.counts[lower:stop] = self.counts[lower:stop][order]


@dataclass(frozen=True)
class ColorBox:
    """An axis-aligned RGB sub-volume over ``arena[lower:upper + 1]``.

    Build boxes with :meth:`from_range`; the channel bounds and population are
    computed once from the arena at that moment.
    """

    lower: int
    upper: int
    population: int
    min_rgb: tuple[int, int, int]
    max_rgb: tuple[int, int, int]

    @classmethod
    def from_range(cls, arena: ColorArena, lower: int, upper: int) -> ColorBox:
        if lower < 0 or upper >= len(arena) or lower > upper:
            raise ValueError(f"Invalid box range [{lower}, {upper}] for arena of {len(arena)}")
        channels = arena.channels(lower, upper)
        population = int(arena.counts[lower:upper + 1].sum())
        min_rgb = tuple(int(v) for v in channels.min(axis=0))
        max_rgb = tuple(int(v) for v in channels.max(axis=0))
        return cls(lower, upper, population, min_rgb, max_rgb)

    @property
    def color_count(self) -> int:
        return self.upper - self.lower + 1

    @property
    def ranges(self) -> tuple[int, int, int]:
        return tuple(hi - lo for lo, hi in zip(self.min_rgb, self.max_rgb))

    @property
    def volume(self) -> int:
        r, g, b = (span + 1 for span in self.ranges)
        return r * g * b

    @property
    def priority(self) -> int:
        """Split priority: populous, spatially large boxes come first."""
        return self.population * self.volume

    @property
    def can_split(self) -> bool:
        return self.population > 1 and self.upper > self.lower

    def longest_component(self) -> int:
        """RGB component with the widest spread; red, then green, wins ties."""
        r, g, b = self.ranges
        if r >= g and r >= b:
            return COMPONENT_RED
        if g >= r and g >= b:
            return COMPONENT_GREEN
        return COMPONENT_BLUE

    def split(self, arena: ColorArena) -> tuple[ColorBox, ColorBox]:
        """Split at the population-weighted median of the longest component.

        The box's slice of ``arena`` is sorted in place along that component.
        Returns the lower and upper halves; ``self`` is left untouched and
        must be discarded by the caller.

        Raises:
            ValueError: If the box cannot be split.
        """
        if not self.can_split:
            raise ValueError(f"Cannot split box [{self.lower}, {self.upper}]")

        arena.sort_range(self.lower, self.upper, self.longest_component())
        split_point = self._find_split_point(arena)

        lower_box = ColorBox.from_range(arena, self.lower, split_point)
        upper_box = ColorBox.from_range(arena, split_point + 1, self.upper)
        return lower_box, upper_box

    def _find_split_point(self, arena: ColorArena) -> int:
        # First index where the running population reaches half the box.
        running = np.cumsum(arena.counts[self.lower:self.upper + 1])
        index = self.lower + int(np.searchsorted(running, self.population / 2, side="left"))
        if index == self.lower:
            index += 1
        # Both halves keep at least one color.
        return min(index, self.upper - 1)

    def average_color(self, arena: ColorArena) -> tuple[int, int]:
        """Population-weighted mean color of the box and its population.

        Returns:
            ``(packed_color, population)``.
        """
        channels = arena.channels(self.lower, self.upper)
        counts = arena.counts[self.lower:self.upper + 1]
        total = int(counts.sum())
        sums = (channels * counts[:, np.newaxis]).sum(axis=0)
        r, g, b = (int(s / total + 0.5) for s in sums)
        return pack_color(r, g, b), total
