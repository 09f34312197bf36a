"""
Color quantization engine.

Provides:
- Color histogram over packed RGB pixels
- Near-black / near-white color filter
- Color boxes over a shared color arena, split by population-weighted median
- A max-priority queue of boxes ordered by population * volume
- The color-cut quantizer that turns pixels into swatches
"""

from vibrant.quantizer.box import ColorArena, ColorBox
from vibrant.quantizer.filters import ColorFilter, should_ignore_color
from vibrant.quantizer.histogram import ColorHistogram
from vibrant.quantizer.queue import BoxPriorityQueue
from vibrant.quantizer.quantizer import ColorCutQuantizer, quantize

__all__ = [
    "ColorArena",
    "ColorBox",
    "ColorFilter",
    "should_ignore_color",
    "ColorHistogram",
    "BoxPriorityQueue",
    "ColorCutQuantizer",
    "quantize",
]
