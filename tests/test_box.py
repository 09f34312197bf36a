"""
Tests for color boxes, the color arena and the box priority queue.
"""

from __future__ import annotations

import numpy as np
import pytest

from vibrant.quantizer.box import (
    COMPONENT_BLUE,
    COMPONENT_GREEN,
    COMPONENT_RED,
    ColorArena,
    ColorBox,
)
from vibrant.quantizer.queue import BoxPriorityQueue
from vibrant.utils.colors import pack_color


def _arena(colors: list[int], counts: list[int] | None = None) -> ColorArena:
    counts = counts if counts is not None else [1] * len(colors)
    return ColorArena(np.array(colors), np.array(counts))


def _random_arena(seed: int, size: int = 200) -> ColorArena:
    rng = np.random.default_rng(seed)
    colors = np.unique(rng.integers(0, 0xFFFFFF, size=size))
    counts = rng.integers(1, 50, size=len(colors))
    return ColorArena(colors, counts)


class TestColorArena:
    """Tests for the shared color buffer."""

    def test_copies_input(self):
        colors = np.array([3, 1, 2])
        arena = ColorArena(colors, np.array([1, 1, 1]))
        arena.sort_range(0, 2, COMPONENT_BLUE)

        assert colors.tolist() == [3, 1, 2]
        assert arena.colors.tolist() == [1, 2, 3]

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            ColorArena(np.array([1, 2]), np.array([1]))

    def test_sort_range_moves_counts_too(self):
        arena = _arena(
            [pack_color(0, 30, 0), pack_color(0, 10, 0), pack_color(0, 20, 0)],
            [3, 1, 2],
        )
        arena.sort_range(0, 2, COMPONENT_GREEN)

        assert arena.colors.tolist() == [pack_color(0, 10, 0), pack_color(0, 20, 0), pack_color(0, 30, 0)]
        assert arena.counts.tolist() == [1, 2, 3]

    def test_sort_range_leaves_outside_untouched(self):
        arena = _arena([9, 3, 2, 1, 0])
        arena.sort_range(1, 3, COMPONENT_BLUE)
        assert arena.colors.tolist() == [9, 1, 2, 3, 0]


class TestColorBox:
    """Tests for box statistics and splitting."""

    def test_statistics(self):
        arena = _arena([0x0000FF, 0x00FF00, 0xFF0000], [1, 1, 2])
        box = ColorBox.from_range(arena, 0, 2)

        assert box.population == 4
        assert box.min_rgb == (0, 0, 0)
        assert box.max_rgb == (255, 255, 255)
        assert box.volume == 256 ** 3
        assert box.priority == 4 * 256 ** 3
        assert box.color_count == 3
        assert box.can_split

    def test_single_color_box(self):
        arena = _arena([0x336699], [40])
        box = ColorBox.from_range(arena, 0, 0)

        assert box.volume == 1
        assert box.priority == 40
        assert not box.can_split
        with pytest.raises(ValueError):
            box.split(arena)

    def test_invalid_range(self):
        arena = _arena([1, 2])
        with pytest.raises(ValueError):
            ColorBox.from_range(arena, 1, 0)
        with pytest.raises(ValueError):
            ColorBox.from_range(arena, 0, 2)

    def test_longest_component(self):
        arena = _arena([pack_color(0, 0, 0), pack_color(10, 90, 40)])
        assert ColorBox.from_range(arena, 0, 1).longest_component() == COMPONENT_GREEN

        arena = _arena([pack_color(0, 0, 0), pack_color(10, 20, 40)])
        assert ColorBox.from_range(arena, 0, 1).longest_component() == COMPONENT_BLUE

    def test_longest_component_prefers_red_on_ties(self):
        arena = _arena([0x0000FF, 0x00FF00, 0xFF0000])
        assert ColorBox.from_range(arena, 0, 2).longest_component() == COMPONENT_RED

    def test_split_sorts_along_longest_component(self):
        greens = [200, 50, 150, 100]
        arena = _arena([pack_color(10, g, 10) for g in greens])
        lower, upper = ColorBox.from_range(arena, 0, 3).split(arena)

        assert (lower.lower, lower.upper) == (0, 1)
        assert (upper.lower, upper.upper) == (2, 3)
        assert (lower.min_rgb[1], lower.max_rgb[1]) == (50, 100)
        assert (upper.min_rgb[1], upper.max_rgb[1]) == (150, 200)

    def test_split_at_population_weighted_median(self):
        arena = _arena([pack_color(r, 0, 0) for r in (10, 20, 30, 40, 50)], [1, 1, 1, 1, 10])
        lower, upper = ColorBox.from_range(arena, 0, 4).split(arena)

        # running totals 1, 2, 3, 4, 14 reach half of 14 only at the last color
        assert (lower.lower, lower.upper) == (0, 3)
        assert (upper.lower, upper.upper) == (4, 4)
        assert (lower.population, upper.population) == (4, 10)

    def test_split_dominant_first_color_advances(self):
        arena = _arena([pack_color(r, 0, 0) for r in (10, 20, 30)], [10, 1, 1])
        lower, upper = ColorBox.from_range(arena, 0, 2).split(arena)

        assert (lower.lower, lower.upper) == (0, 1)
        assert (upper.lower, upper.upper) == (2, 2)
        assert (lower.population, upper.population) == (11, 1)

    def test_split_two_colors(self):
        arena = _arena([pack_color(10, 0, 0), pack_color(20, 0, 0)], [5, 1])
        lower, upper = ColorBox.from_range(arena, 0, 1).split(arena)

        assert (lower.lower, lower.upper) == (0, 0)
        assert (upper.lower, upper.upper) == (1, 1)

    @pytest.mark.parametrize("seed", range(5))
    def test_split_conserves_population_and_range(self, seed):
        arena = _random_arena(seed)
        queue = [ColorBox.from_range(arena, 0, len(arena) - 1)]

        while queue:
            box = queue.pop()
            if not box.can_split:
                continue
            lower, upper = box.split(arena)

            assert lower.population + upper.population == box.population
            assert lower.lower == box.lower
            assert lower.upper + 1 == upper.lower
            assert upper.upper == box.upper
            assert lower.population > 0 and upper.population > 0
            queue.extend([lower, upper])

    def test_split_does_not_mutate_parent(self):
        arena = _random_arena(11, size=20)
        box = ColorBox.from_range(arena, 0, len(arena) - 1)
        box.split(arena)
        assert (box.lower, box.upper) == (0, len(arena) - 1)

    def test_average_color(self):
        arena = _arena([0x0000FF, 0x00FF00])
        assert ColorBox.from_range(arena, 0, 1).average_color(arena) == (0x008080, 2)

    def test_average_color_is_population_weighted(self):
        arena = _arena([pack_color(100, 0, 0), pack_color(200, 0, 0)], [3, 1])
        assert ColorBox.from_range(arena, 0, 1).average_color(arena) == (pack_color(125, 0, 0), 4)


class TestBoxPriorityQueue:
    """Tests for the population * volume max-queue."""

    @staticmethod
    def _box(population: int, span: int) -> ColorBox:
        return ColorBox(0, 1, population, (0, 0, 0), (span, 0, 0))

    def test_pops_highest_priority_first(self):
        queue = BoxPriorityQueue()
        small = self._box(10, 0)    # 10
        big = self._box(5, 99)      # 500
        medium = self._box(100, 1)  # 200
        for box in (small, big, medium):
            queue.push(box)

        assert len(queue) == 3
        assert queue.peek() is big
        assert [queue.pop(), queue.pop(), queue.pop()] == [big, medium, small]
        assert not queue

    def test_ties_pop_in_insertion_order(self):
        queue = BoxPriorityQueue()
        first = self._box(4, 1)
        second = ColorBox(2, 3, 4, (0, 0, 0), (1, 0, 0))
        queue.push(first)
        queue.push(second)
        assert queue.pop() is first
        assert queue.pop() is second

    def test_empty_queue(self):
        queue = BoxPriorityQueue()
        with pytest.raises(IndexError):
            queue.pop()
        with pytest.raises(IndexError):
            queue.peek()

    def test_drain(self):
        queue = BoxPriorityQueue()
        boxes = [self._box(p, 0) for p in (3, 9, 1)]
        for box in boxes:
            queue.push(box)
        assert [b.population for b in queue.drain()] == [9, 3, 1]
        assert len(queue) == 0
