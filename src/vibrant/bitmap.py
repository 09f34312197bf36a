"""
Pixel sampling from Pillow images.

A :class:`Bitmap` wraps a source image and flattens it into packed 24-bit RGB
integers for the quantizer. Cropping and nearest-neighbor downscaling happen
here so the quantizer never sees more pixels than it needs.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


@dataclass
class Bitmap:
    """A rectangular pixel source with known dimensions."""

    width: int
    height: int
    source: Image.Image

    @classmethod
    def from_image(cls, image: Image.Image) -> Bitmap:
        """Wrap an image as-is."""
        width, height = image.size
        return cls(width, height, image)

    @classmethod
    def from_path(cls, path: str | Path) -> Bitmap:
        """Open an image file through Pillow.

        Raises:
            ValueError: If the file is missing or not a readable image.
        """
        path = Path(path)
        try:
            with Image.open(path) as img:
                img.load()
                image = img.copy()
        except (FileNotFoundError, UnidentifiedImageError, OSError) as exc:
            raise ValueError(f"Cannot read image {path}: {exc}") from exc
        return cls.from_image(image)

    @classmethod
    def cropped(cls, image: Image.Image, box: tuple[int, int, int, int]) -> Bitmap:
        """Wrap the ``(left, top, right, bottom)`` sub-rectangle of an image.

        Raises:
            ValueError: If the rectangle is empty or falls outside the image.
        """
        left, top, right, bottom = box
        width, height = image.size
        if left < 0 or top < 0 or right > width or bottom > height:
            raise ValueError(
                f"Crop rectangle {tuple(box)} is outside image bounds {width}x{height}"
            )
        if right <= left or bottom <= top:
            raise ValueError(f"Crop rectangle {tuple(box)} is empty")
        return cls.from_image(image.crop((left, top, right, bottom)))

    @classmethod
    def scaled(cls, image: Image.Image, ratio: float) -> Bitmap:
        """Resize by ``ratio`` (rounded up) with nearest-neighbor sampling."""
        if ratio <= 0:
            raise ValueError(f"Scale ratio must be positive, got {ratio}")
        width, height = image.size
        new_size = (max(1, math.ceil(width * ratio)), max(1, math.ceil(height * ratio)))
        logger.debug("Scaling bitmap %dx%d -> %dx%d", width, height, *new_size)
        return cls.from_image(image.resize(new_size, Image.Resampling.NEAREST))

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def pixels(self) -> np.ndarray:
        """Return all pixels row by row as packed ``0xRRGGBB`` integers.

        Alpha is discarded; palette, grayscale and other modes are converted
        to RGB first.
        """
        if self.pixel_count == 0:
            return np.zeros(0, dtype=np.int64)
        rgb = np.asarray(self.source.convert("RGB"), dtype=np.int64).reshape(-1, 3)
        return (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]
