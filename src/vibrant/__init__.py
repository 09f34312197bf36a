"""
Vibrant: representative color swatches from images.

This package implements:
- Pixel sampling from Pillow images (crop, nearest-neighbor downscale)
- A color-cut quantizer: histogram, black/white filtering, and
  population * volume ordered box splitting
- Swatches with hex, HSL, Lab and readable text-color helpers
"""

from vibrant.bitmap import Bitmap
from vibrant.palette import extract_swatches
from vibrant.quantizer import ColorCutQuantizer, quantize
from vibrant.swatch import Swatch

__version__ = "0.1.0"

__all__ = [
    "Bitmap",
    "ColorCutQuantizer",
    "Swatch",
    "extract_swatches",
    "quantize",
]
