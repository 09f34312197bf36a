"""
High-level swatch extraction from images.
"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from vibrant.bitmap import Bitmap
from vibrant.config import PaletteConfig
from vibrant.quantizer.quantizer import ColorCutQuantizer
from vibrant.swatch import Swatch

logger = logging.getLogger(__name__)


def load_bitmap(image: Image.Image | str | Path, config: PaletteConfig | None = None) -> Bitmap:
    """Crop and downscale an image per ``config.bitmap``.

    Args:
        image: A Pillow image or a path to an image file.
        config: Palette configuration. Uses defaults if None.

    Returns:
        The bitmap to sample.
    """
    config = config or PaletteConfig()
    bitmap = Bitmap.from_path(image) if isinstance(image, (str, Path)) else Bitmap.from_image(image)

    crop = config.bitmap.crop
    if crop:
        if len(crop) != 4:
            raise ValueError(f"Crop must be [left, top, right, bottom], got {list(crop)}")
        bitmap = Bitmap.cropped(bitmap.source, tuple(int(v) for v in crop))

    max_dimension = config.bitmap.resize_max_dimension
    longest = max(bitmap.width, bitmap.height)
    if max_dimension > 0 and longest > max_dimension:
        bitmap = Bitmap.scaled(bitmap.source, max_dimension / longest)

    return bitmap


def extract_swatches(
    image: Image.Image | str | Path,
    config: PaletteConfig | None = None,
) -> list[Swatch]:
    """Extract up to ``config.quantizer.max_colors`` swatches from an image.

    Swatches are returned by descending population.

    Raises:
        ValueError: On unreadable images, bad crop rectangles or a
            non-positive color count.
    """
    config = config or PaletteConfig()
    bitmap = load_bitmap(image, config)

    quantizer = ColorCutQuantizer(
        bitmap.pixels(),
        bitmap.pixel_count,
        config.quantizer.max_colors,
        color_filter=config.quantizer.color_filter(),
    )
    swatches = sorted(quantizer.quantized_colors, key=lambda s: s.population, reverse=True)

    logger.info(
        "Extracted %d swatches from %dx%d bitmap",
        len(swatches), bitmap.width, bitmap.height,
        extra={
            "image": str(image) if isinstance(image, (str, Path)) else None,
            "max_colors": config.quantizer.max_colors,
            "pixels": bitmap.pixel_count,
            "swatches": [s.hex for s in swatches],
        },
    )
    return swatches
