"""
Max-priority queue of color boxes.
"""

from __future__ import annotations

import heapq
import itertools

from vibrant.quantizer.box import ColorBox


class BoxPriorityQueue:
    """Pops the box with the largest ``population * volume`` first.

    Equal priorities come out in insertion order.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, ColorBox]] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def push(self, box: ColorBox) -> None:
        heapq.heappush(self._heap, (-box.priority, next(self._counter), box))

    def pop(self) -> ColorBox:
        """Remove and return the highest-priority box.

        Raises:
            IndexError: If the queue is empty.
        """
        if not self._heap:
            raise IndexError("pop from an empty BoxPriorityQueue")
        return heapq.heappop(self._heap)[2]

    def peek(self) -> ColorBox:
        if not self._heap:
            raise IndexError("peek at an empty BoxPriorityQueue")
        return self._heap[0][2]

    def drain(self) -> list[ColorBox]:
        """Pop every box, highest priority first."""
        boxes = []
        while self._heap:
            boxes.append(self.pop())
        return boxes
