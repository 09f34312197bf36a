"""
Swatches: the quantizer's output unit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from vibrant.utils.colors import (
    LAB_REFERENCE_WHITE,
    rgb_to_hsl,
    rgb_to_lab,
    text_color,
    to_hex,
    unpack_color,
)

MIN_CONTRAST_TITLE_TEXT = 3.0
MIN_CONTRAST_BODY_TEXT = 4.5


@dataclass(frozen=True)
class Swatch:
    """A representative color with the share of the image it stands for.

    Attributes:
        color: Packed ``0xRRGGBB`` color.
        population: Number of source pixels represented.
        ratio: ``population`` over the source bitmap's total pixel count.
    """

    color: int
    population: int
    ratio: float

    @property
    def rgb(self) -> tuple[int, int, int]:
        return unpack_color(self.color)

    @property
    def hex(self) -> str:
        return to_hex(self.color)

    @property
    def hsl(self) -> tuple[float, float, float]:
        return rgb_to_hsl(self.color)

    def lab(
        self,
        reference_white: tuple[float, float, float] = LAB_REFERENCE_WHITE,
    ) -> tuple[float, float, float]:
        return rgb_to_lab(self.color, reference_white=reference_white)

    def title_text_color(self, min_contrast: float = MIN_CONTRAST_TITLE_TEXT) -> int:
        return text_color(self.color, min_contrast)

    def body_text_color(self, min_contrast: float = MIN_CONTRAST_BODY_TEXT) -> int:
        return text_color(self.color, min_contrast)

    def to_dict(
        self,
        min_contrast_title: float = MIN_CONTRAST_TITLE_TEXT,
        min_contrast_body: float = MIN_CONTRAST_BODY_TEXT,
        reference_white: tuple[float, float, float] = LAB_REFERENCE_WHITE,
    ) -> dict[str, Any]:
        return {
            "color": self.hex,
            "population": self.population,
            "ratio": self.ratio,
            "title_text_color": to_hex(self.title_text_color(min_contrast_title)),
            "body_text_color": to_hex(self.body_text_color(min_contrast_body)),
            "lab": [round(v, 4) for v in self.lab(reference_white)],
        }

    def __str__(self) -> str:
        return f"{self.hex} (population={self.population}, ratio={self.ratio:.4f})"
